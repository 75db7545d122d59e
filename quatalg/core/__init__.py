"""
This package contains the fundamental quaternion routines.

Everything here is a pure function operating on :class:`.Quaternion` values (or anything that can be interpreted as
one).  It has no dependencies on :mod:`quatalg.rotation` to avoid circular imports.
"""

import quatalg.core.types
import quatalg.core.quaternion_math
import quatalg.core.construction
import quatalg.core.conversions

from quatalg.core.types import Quaternion, QUATERNION_LIKE

from quatalg.core.quaternion_math import (identity, add, scale, dot, mul, conj, square_len, length, normalize,
                                          inverse, rotate_vector, rotate_vector_sandwich, nlerp, slerp)

from quatalg.core.construction import axis_angle, euler_angles, rotation_from_to, RotationFromToOptions

from quatalg.core.conversions import (quaternion_to_array, array_to_quaternion, quaternion_to_rotmat,
                                      quaternion_to_rotvec)

__all__ = ['Quaternion', 'QUATERNION_LIKE',
           'identity', 'add', 'scale', 'dot', 'mul', 'conj', 'square_len', 'length', 'normalize', 'inverse',
           'rotate_vector', 'rotate_vector_sandwich', 'nlerp', 'slerp',
           'axis_angle', 'euler_angles', 'rotation_from_to', 'RotationFromToOptions',
           'quaternion_to_array', 'array_to_quaternion', 'quaternion_to_rotmat', 'quaternion_to_rotvec']
