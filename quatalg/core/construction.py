"""
This module provides routines for building rotation quaternions from other descriptions of a rotation.

Every routine here returns unit quaternions (given valid inputs) and, like the rest of :mod:`quatalg`, is vectorized
over columns.
"""

from dataclasses import dataclass

import numpy as np

from quatalg import vector3
from quatalg._typing import ARRAY_LIKE, SCALAR_OR_ARRAY
from quatalg.core._helpers import _check_vector_array_and_shape
from quatalg.core.quaternion_math import normalize
from quatalg.core.types import Quaternion
from quatalg.utilities.options import UserOptions

__all__ = ["axis_angle", "euler_angles", "rotation_from_to", "RotationFromToOptions"]


@dataclass
class RotationFromToOptions(UserOptions):
    """
    Options controlling the numerical tolerances used by :func:`rotation_from_to`.
    """

    parallel_threshold: float = 1.0
    """
    Unit directions whose dot product is at least this value are treated as parallel and give the identity quaternion.
    """

    antiparallel_threshold: float = -0.999999
    """
    Unit directions whose dot product is below this value are treated as opposite.

    In this case the rotation axis is not determined by the inputs so a perpendicular one is chosen using the
    reference axes.
    """

    degenerate_tolerance: float = 1e-6
    """
    If the cross product of the primary reference axis with the starting direction is shorter than this the
    secondary reference axis is used instead.
    """

    primary_reference_axis: tuple[float, float, float] = (1.0, 0.0, 0.0)
    """
    The first axis crossed with the starting direction to find a rotation axis for opposite directions.
    """

    secondary_reference_axis: tuple[float, float, float] = (0.0, 1.0, 0.0)
    """
    The fallback axis used when the starting direction is parallel to :attr:`primary_reference_axis`.
    """


def axis_angle(axis: ARRAY_LIKE, angle: SCALAR_OR_ARRAY) -> Quaternion:
    r"""
    Forms the quaternion that rotates by `angle` radians about `axis`.

    .. math::
        \mathbf{q}=\left(\text{cos}(\frac{\theta}{2}), \text{sin}(\frac{\theta}{2})\hat{\mathbf{x}}\right)

    The axis must already be unit length; it is not normalized here.  Multiple rotations can be formed by giving the
    axes as the columns of a 3xn array along with either a single angle or a length n array of angles, or by giving a
    single axis with a length n array of angles.

    :param axis: The unit rotation axis(es)
    :param angle: The rotation angle(s) in radians
    :return: The rotation quaternion(s)
    :raises ValueError: If the angles cannot be broadcast to the number of axes
    """

    axis = _check_vector_array_and_shape(axis)

    half_angle = np.asarray(angle, dtype=np.float64) / 2

    # a single axis is used for every angle, otherwise there must be one angle per axis (or a single angle)
    half_angle = np.broadcast_to(half_angle, np.broadcast_shapes(axis.shape[1:], half_angle.shape))

    return Quaternion(np.cos(half_angle)[()], vector3.scale(axis, np.sin(half_angle)))


def euler_angles(x: SCALAR_OR_ARRAY, y: SCALAR_OR_ARRAY, z: SCALAR_OR_ARRAY) -> Quaternion:
    r"""
    Forms the quaternion for a rotation by `x` about the x axis, then `y` about the y axis, then `z` about the z axis.

    The result is :math:`\mathbf{q}_z\otimes\mathbf{q}_y\otimes\mathbf{q}_x` which expands to the half angle products

    .. math::
        w = c_zc_yc_x + s_zs_ys_x \\
        x = c_zc_ys_x - s_zs_yc_x \\
        y = c_zs_yc_x + s_zc_ys_x \\
        z = s_zc_yc_x - c_zs_ys_x

    where :math:`c_i` and :math:`s_i` are the cosine and sine of half of the angle for axis :math:`i`.  Each axis is
    an axis of the fixed (original) frame.

    The angles can be scalars or equal length arrays, in which case a quaternion is formed for each set.

    :param x: The rotation about the x axis in radians
    :param y: The rotation about the y axis in radians
    :param z: The rotation about the z axis in radians
    :return: The rotation quaternion(s)
    """

    half_x, half_y, half_z = np.broadcast_arrays(np.asarray(x, dtype=np.float64) / 2,
                                                 np.asarray(y, dtype=np.float64) / 2,
                                                 np.asarray(z, dtype=np.float64) / 2)

    sx, cx = np.sin(half_x), np.cos(half_x)
    sy, cy = np.sin(half_y), np.cos(half_y)
    sz, cz = np.sin(half_z), np.cos(half_z)

    scalar = cz * cy * cx + sz * sy * sx
    vector = np.array([cz * cy * sx - sz * sy * cx,
                       cz * sy * cx + sz * cy * sx,
                       sz * cy * cx - cz * sy * sx])

    return Quaternion(scalar[()], vector)


def rotation_from_to(start: ARRAY_LIKE, end: ARRAY_LIKE,
                     options: RotationFromToOptions | None = None) -> Quaternion:
    r"""
    Computes the smallest rotation that takes direction `start` onto direction `end`.

    The inputs do not need to be unit length but must not be zero.  For directions that are neither parallel nor
    opposite the result is the half way quaternion

    .. math::
        \mathbf{q}=\frac{\left(1+\hat{\mathbf{a}}^T\hat{\mathbf{b}}, \hat{\mathbf{a}}\times\hat{\mathbf{b}}\right)}
        {\left\|\left(1+\hat{\mathbf{a}}^T\hat{\mathbf{b}}, \hat{\mathbf{a}}\times\hat{\mathbf{b}}\right)\right\|}

    Parallel directions give the identity quaternion.  Opposite directions leave the rotation axis undetermined (and
    make the formula above numerically unstable) so instead a rotation of :math:`\pi` is made about an axis
    perpendicular to `start`, found by crossing a reference axis with `start`.  The tolerances and reference axes
    used for these cases are controlled with `options`.

    This is vectorized so the directions can be given as the columns of 3xn arrays (or one single direction can be
    paired with many).

    :param start: The direction(s) to rotate from
    :param end: The direction(s) to rotate to
    :param options: The tolerances to use.  If ``None`` the defaults of :class:`RotationFromToOptions` are used.
    :return: The unit rotation quaternion(s)
    """

    if options is None:
        options = RotationFromToOptions()

    start = vector3.normalize(start)
    end = vector3.normalize(end)

    single = (start.ndim == 1) and (end.ndim == 1)

    # work with columns so the special cases can be handled with masks
    start, end = np.broadcast_arrays(start.reshape(3, -1), end.reshape(3, -1))

    cos_angle = vector3.dot(start, end)

    scalar = 1 + cos_angle
    vector = vector3.cross(start, end)

    opposite = cos_angle < options.antiparallel_threshold

    if opposite.any():
        reference = np.array(options.primary_reference_axis, dtype=np.float64).reshape(3, 1)

        rotation_axis = vector3.cross(reference, start[:, opposite])

        degenerate = vector3.length(rotation_axis) < options.degenerate_tolerance

        if degenerate.any():
            reference = np.array(options.secondary_reference_axis, dtype=np.float64).reshape(3, 1)

            rotation_axis[:, degenerate] = vector3.cross(reference, start[:, opposite][:, degenerate])

        flip = axis_angle(vector3.normalize(rotation_axis), np.pi)

        scalar[opposite] = flip.w
        vector[:, opposite] = flip.v

    parallel = cos_angle >= options.parallel_threshold

    scalar[parallel] = 1
    vector[:, parallel] = 0

    result = normalize(Quaternion(scalar, vector))

    if single:
        return Quaternion(result.w[0], result.v[:, 0])

    return result
