from dataclasses import dataclass
from typing import Self

import copy
import warnings

import numpy as np

from quatalg.core.construction import axis_angle, euler_angles, rotation_from_to, RotationFromToOptions
from quatalg.core.conversions import quaternion_to_rotmat, quaternion_to_rotvec
from quatalg.core.quaternion_math import conj, identity, length, mul, rotate_vector, scale
from quatalg.core.types import Quaternion, QUATERNION_LIKE
from quatalg.core._helpers import _check_quaternion
from quatalg.utilities.mixin_classes import UserOptionConfigured
from quatalg.utilities.options import UserOptions

from quatalg._typing import ARRAY_LIKE, DOUBLE_ARRAY


@dataclass
class RotationOptions(UserOptions):

    unit_tolerance: float = 1e-6
    """
    How far the length of a quaternion given to a :class:`Rotation` may be from 1 before a warning is issued when it
    is normalized.
    """

    positive_scalar: bool = True
    """
    Whether to negate stored quaternions with a negative scalar portion.

    Since q and -q represent the same rotation this makes the stored quaternion unique.
    """


class Rotation(UserOptionConfigured[RotationOptions], RotationOptions):
    """
    A class to represent and manipulate a single rotation.

    The :class:`Rotation` class wraps a unit :class:`.Quaternion` and provides a number of conveniences on top of the
    functions in :mod:`quatalg.core`.  It can be initialized from anything the core functions accept as a
    quaternion (or from another :class:`Rotation`), and always stores a unit quaternion, normalizing the input if
    needed.

    The rotation matrix is available through the :attr:`matrix` property which is cached so the conversion is only
    performed again after the rotation has been changed.

    Operator overloading makes composing rotations easy::

        >>> from quatalg import Rotation
        >>> from numpy import pi
        >>> rotation_A2B = Rotation.from_axis_angle([1, 0, 0], pi)
        >>> rotation_B2C = Rotation.from_axis_angle([0, 1, 0], pi/2)
        >>> rotation_A2C = rotation_B2C*rotation_A2B
        >>> rotation_A2C.apply([0, 1, 0])
        array([ 0., -1.,  0.])

    The equality operator is also overloaded to check that the quaternion representation of two objects is the same.
    """

    def __init__(self, data: QUATERNION_LIKE | Self | None = None, options: RotationOptions | None = None):
        """
        :param data: The rotation data to initialize the class with.  ``None`` gives the identity rotation.
        :param options: the options to configure the class with
        """

        super().__init__(RotationOptions, options=options)

        # initialize the attributes
        self._quaternion = identity()
        self._matrix = None
        self._mupdate = True

        if data is None:
            data = identity()

        self.quaternion = data

    @property
    def quaternion(self) -> Quaternion:
        """
        This property stores the unit quaternion representation of the rotation.

        It also enables setting the rotation represented by this object.  The set value can be a :class:`Rotation`
        or anything that can be interpreted as a single quaternion.  If the set value is not of unit length then it
        will be normalized before being stored and, if it is further from unit length than :attr:`unit_tolerance`, a
        warning will be issued.

        If :attr:`positive_scalar` is ``True`` then setting a quaternion with a negative scalar stores its negation.
        """

        return self._quaternion

    @quaternion.setter
    def quaternion(self, data: QUATERNION_LIKE | 'Rotation'):

        if isinstance(data, Rotation):
            data = data.quaternion

        quaternion = _check_quaternion(data)

        if np.ndim(quaternion.w):
            raise ValueError('A Rotation can only store a single quaternion')

        quaternion_length = length(quaternion)

        if abs(quaternion_length - 1) > self.unit_tolerance:
            warnings.warn(f'The quaternion has length {quaternion_length} and will be normalized')

        if self.positive_scalar and quaternion.w < 0:
            quaternion_length = -quaternion_length

        # scaling always forms new arrays which breaks mutability with the input
        self._quaternion = scale(quaternion, 1 / quaternion_length)

        self._mupdate = True

    @property
    def matrix(self) -> DOUBLE_ARRAY:
        """
        This property gives the 3x3 rotation matrix equivalent to the rotation.

        The matrix is computed with :func:`.quaternion_to_rotmat` the first time it is requested after the rotation
        changes and cached after that.  This property is read only.
        """

        if self._mupdate:
            self._matrix = quaternion_to_rotmat(self._quaternion)
            self._mupdate = False

        assert self._matrix is not None, "the matrix attribute is somehow None but _mupdate is set to false"
        return self._matrix

    @property
    def vector(self) -> DOUBLE_ARRAY:
        """
        The rotation vector (angle times unit axis) equivalent to the rotation.

        This property is read only.
        """

        return quaternion_to_rotvec(self._quaternion)

    @property
    def q_vector(self) -> DOUBLE_ARRAY:
        """
        This is an alias to the vector portion of the quaternion

        This property is read only.
        """

        return self._quaternion.v

    @property
    def q_scalar(self) -> float:
        """
        This is an alias to the scalar portion of the quaternion

        This property is read only.
        """

        return float(self._quaternion.w)

    @classmethod
    def from_axis_angle(cls, axis: ARRAY_LIKE, angle: float, options: RotationOptions | None = None) -> Self:
        """
        Creates a rotation of `angle` radians about the unit vector `axis`.

        See :func:`.axis_angle` for more details.

        :param axis: The unit rotation axis
        :param angle: The rotation angle in radians
        :param options: the options to configure the class with
        :return: The new rotation
        """

        return cls(axis_angle(axis, angle), options=options)

    @classmethod
    def from_euler_angles(cls, x: float, y: float, z: float, options: RotationOptions | None = None) -> Self:
        """
        Creates a rotation about x, then about y, then about z.

        See :func:`.euler_angles` for more details.

        :param x: The rotation about the x axis in radians
        :param y: The rotation about the y axis in radians
        :param z: The rotation about the z axis in radians
        :param options: the options to configure the class with
        :return: The new rotation
        """

        return cls(euler_angles(x, y, z), options=options)

    @classmethod
    def from_to(cls, start: ARRAY_LIKE, end: ARRAY_LIKE,
                from_to_options: RotationFromToOptions | None = None,
                options: RotationOptions | None = None) -> Self:
        """
        Creates the smallest rotation taking direction `start` onto direction `end`.

        See :func:`.rotation_from_to` for more details.

        :param start: The direction to rotate from
        :param end: The direction to rotate to
        :param from_to_options: The tolerances to use when computing the rotation
        :param options: the options to configure the class with
        :return: The new rotation
        """

        return cls(rotation_from_to(start, end, options=from_to_options), options=options)

    def inv(self) -> 'Rotation':
        """
        This method returns the inverse rotation of the current instance as a new ``Rotation`` object.

        The inverse is the conjugate of the stored unit quaternion.

        :return: The inverse rotation
        """

        return Rotation(conj(self._quaternion), options=self.original_options)

    def apply(self, vectors: ARRAY_LIKE) -> DOUBLE_ARRAY:
        """
        Rotates the vector(s) by this rotation.

        Multiple vectors can be rotated at once by giving them as the columns of a 3xn array.  See
        :func:`.rotate_vector` for details.

        :param vectors: The vector(s) to rotate
        :return: The rotated vector(s)
        """

        return rotate_vector(self._quaternion, vectors)

    def rotate(self, other: QUATERNION_LIKE | 'Rotation'):
        """
        Performs a left inplace rotation by other.

        Using this method overwrites the data stored in self with self rotated by other.  That is

        .. math::
            \\mathbf{q}_s = \\mathbf{q}_o\\otimes\\mathbf{q}_s

        where :math:`\\mathbf{q}_s` is the quaternion representation of self, :math:`\\mathbf{q}_o` is the
        quaternion representation of other, and :math:`\\otimes` indicates hamiltonian multiplication.

        :param other: The data to rotate self with
        """

        self.quaternion = Rotation(other, options=self.original_options) * self

    def copy(self) -> 'Rotation':
        """
        Returns a deep copy of self.

        :return: A deep copy of self breaking all mutability
        """

        return copy.deepcopy(self)

    def __eq__(self, other) -> bool:

        if other is None:
            return False

        if isinstance(other, Rotation):
            other = other.quaternion

        else:
            # compare raw components, other is not normalized or sign corrected
            try:
                other = _check_quaternion(other)
            except (ValueError, TypeError):
                # if we're here then other isn't a representation of rotation we understand
                return False

            if np.ndim(other.w) != 0:
                return False

        # check that the quaternions are the same
        return bool(self._quaternion.w == other.w) and bool((self._quaternion.v == other.v).all())

    def __mul__(self, other: 'Rotation') -> 'Rotation':

        # use quaternion multiplication
        if isinstance(other, Rotation):

            return Rotation(mul(self._quaternion, other.quaternion), options=self.original_options)

        else:

            return NotImplemented

    def __repr__(self) -> str:
        return 'Rotation({0!r})'.format(self._quaternion)

    def __str__(self) -> str:
        return str(self._quaternion)
