"""
This package provides the configuration machinery shared across quatalg.
"""

from quatalg.utilities.options import UserOptions
from quatalg.utilities.mixin_classes import UserOptionConfigured

__all__ = ["UserOptions", "UserOptionConfigured"]
