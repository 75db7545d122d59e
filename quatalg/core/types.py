"""
This module defines the quaternion value type used throughout :mod:`quatalg`.
"""

from typing import NamedTuple, Union

from quatalg._typing import ARRAY_LIKE, DOUBLE_ARRAY, F_SCALAR_OR_ARRAY, SCALAR_OR_ARRAY


class Quaternion(NamedTuple):
    r"""
    A quaternion stored as a scalar part and a vector part.

    Mathematically this is :math:`q = w + xi + yj + zk` stored as :math:`(w, [x, y, z])`.

    For a single quaternion :attr:`w` is a scalar and :attr:`v` is a length 3 array.  Multiple quaternions are stored
    with :attr:`w` as a length n array and :attr:`v` as a 3xn array where each column is the vector portion of the
    quaternion with the same index in :attr:`w`.
    """

    w: F_SCALAR_OR_ARRAY
    """
    The scalar (real) portion of the quaternion(s)
    """

    v: DOUBLE_ARRAY
    """
    The vector (imaginary) portion of the quaternion(s)
    """


QUATERNION_LIKE = Union[Quaternion, tuple[SCALAR_OR_ARRAY, ARRAY_LIKE], ARRAY_LIKE]
"""
Anything that can be interpreted as a quaternion: a :class:`Quaternion`, a ``(w, v)`` pair, or a flat array like whose
first axis has length 4 in scalar first order ``[w, x, y, z]``.
"""
