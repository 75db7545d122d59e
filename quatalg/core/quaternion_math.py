"""
This module contains the quaternion algebra used by the rest of :mod:`quatalg`.

All functions here are pure: they never modify their inputs and always return newly formed values.  They are also
vectorized, so multiple quaternions can be processed at once by storing the scalar portions in a length n array and
the vector portions as the columns of a 3xn array (see :class:`.Quaternion`).
"""

import numpy as np

from quatalg import vector3
from quatalg._typing import ARRAY_LIKE, DOUBLE_ARRAY, F_SCALAR_OR_ARRAY, SCALAR_OR_ARRAY, DatetimeLike
from quatalg.core._helpers import _check_quaternion, _check_vector_array_and_shape
from quatalg.core.types import Quaternion, QUATERNION_LIKE

__all__ = ["identity", "add", "scale", "dot", "mul", "conj", "square_len", "length", "normalize", "inverse",
           "rotate_vector", "rotate_vector_sandwich", "nlerp", "slerp"]


def identity() -> Quaternion:
    """
    Returns the multiplicative identity quaternion, which corresponds to no rotation.

    :return: The quaternion with a scalar of 1 and a vector of [0, 0, 0]
    """

    return Quaternion(np.float64(1.0), np.zeros(3))


def add(quaternion_1: QUATERNION_LIKE, quaternion_2: QUATERNION_LIKE) -> Quaternion:
    """
    Adds two quaternions component wise.

    :param quaternion_1: The first quaternion(s)
    :param quaternion_2: The second quaternion(s)
    :return: The sum of the quaternions
    """

    quaternion_1 = _check_quaternion(quaternion_1)
    quaternion_2 = _check_quaternion(quaternion_2)

    return Quaternion(quaternion_1.w + quaternion_2.w, vector3.add(quaternion_1.v, quaternion_2.v))


def scale(quaternion: QUATERNION_LIKE, factor: SCALAR_OR_ARRAY) -> Quaternion:
    """
    Multiplies each component of the quaternion(s) by factor.

    :param quaternion: The quaternion(s) to scale
    :param factor: The scale factor, either a scalar or one value per quaternion
    :return: The scaled quaternion(s)
    """

    quaternion = _check_quaternion(quaternion)

    return Quaternion(quaternion.w * factor, vector3.scale(quaternion.v, factor))


def dot(quaternion_1: QUATERNION_LIKE, quaternion_2: QUATERNION_LIKE) -> F_SCALAR_OR_ARRAY:
    """
    Computes the 4 dimensional inner product of two quaternions.

    :param quaternion_1: The first quaternion(s)
    :param quaternion_2: The second quaternion(s)
    :return: The dot product(s)
    """

    quaternion_1 = _check_quaternion(quaternion_1)
    quaternion_2 = _check_quaternion(quaternion_2)

    return quaternion_1.w * quaternion_2.w + vector3.dot(quaternion_1.v, quaternion_2.v)


def mul(quaternion_1: QUATERNION_LIKE, quaternion_2: QUATERNION_LIKE) -> Quaternion:
    r"""
    This function performs the hamiltonian quaternion multiplication operation.

    Mathematically this is given by:

    .. math::
        \mathbf{q}_1\otimes\mathbf{q}_2=\left(w_1w_2-\mathbf{v}_1^T\mathbf{v}_2,\;
        w_1\mathbf{v}_2 + w_2\mathbf{v}_1 + \mathbf{v}_1\times\mathbf{v}_2\right)

    The product is not commutative.  When the result is used to rotate vectors (see :func:`rotate_vector`) it
    applies the rotation of `quaternion_2` first and then the rotation of `quaternion_1`, that is
    `q_from_A_to_C = mul(q_from_B_to_C, q_from_A_to_B)`.

    :param quaternion_1: The first quaternion(s) to multiply
    :param quaternion_2: The second quaternion(s) to multiply
    :return: The hamiltonian product of quaternion_1 and quaternion_2
    """

    quaternion_1 = _check_quaternion(quaternion_1)
    quaternion_2 = _check_quaternion(quaternion_2)

    ws1, qv1 = quaternion_1
    ws2, qv2 = quaternion_2

    scalar = ws1 * ws2 - vector3.dot(qv1, qv2)
    vector = vector3.add(vector3.add(vector3.scale(qv2, ws1), vector3.scale(qv1, ws2)), vector3.cross(qv1, qv2))

    return Quaternion(scalar, vector)


def conj(quaternion: QUATERNION_LIKE) -> Quaternion:
    """
    Returns the conjugate of the quaternion(s), formed by negating the vector portion.

    For a rotation quaternion the conjugate represents the inverse rotation.

    :param quaternion: The quaternion(s) to conjugate
    :return: The conjugate quaternion(s)
    """

    quaternion = _check_quaternion(quaternion)

    return Quaternion(quaternion.w, vector3.negate(quaternion.v))


def square_len(quaternion: QUATERNION_LIKE) -> F_SCALAR_OR_ARRAY:
    """
    Computes the squared length (squared norm) of the quaternion(s).

    :param quaternion: The quaternion(s)
    :return: The squared length(s), always non-negative
    """

    quaternion = _check_quaternion(quaternion)

    return quaternion.w * quaternion.w + vector3.square_len(quaternion.v)


def length(quaternion: QUATERNION_LIKE) -> F_SCALAR_OR_ARRAY:
    """
    Computes the length (norm) of the quaternion(s).

    :param quaternion: The quaternion(s)
    :return: The length(s)
    """

    return np.sqrt(square_len(quaternion))


def normalize(quaternion: QUATERNION_LIKE) -> Quaternion:
    """
    Scales the quaternion(s) to unit length.

    The zero quaternion has no direction and results in NaN values.

    :param quaternion: the quaternion(s) to normalize
    :returns: The unit quaternion(s)
    """

    quaternion = _check_quaternion(quaternion)

    return scale(quaternion, 1 / length(quaternion))


def inverse(quaternion: QUATERNION_LIKE) -> Quaternion:
    r"""
    Returns the multiplicative inverse of the quaternion(s).

    The inverse is defined such that :math:`\mathbf{q}\otimes\mathbf{q}^{-1}=\mathbf{q}_I` and is computed as the
    conjugate divided by the squared length.  For unit quaternions this is the same as :func:`conj`.

    :param quaternion: The quaternion(s) to invert
    :return: The inverse quaternion(s)
    """

    quaternion = _check_quaternion(quaternion)

    return scale(conj(quaternion), 1 / square_len(quaternion))


def rotate_vector(quaternion: QUATERNION_LIKE, vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    Rotates the vector(s) by the rotation represented by the unit quaternion(s).

    This uses the double cross product form of the sandwich product

    .. math::
        \mathbf{t} = 2\mathbf{q}_v\times\mathbf{x} \\
        \mathbf{x}' = \mathbf{x} + q_s\mathbf{t} + \mathbf{q}_v\times\mathbf{t}

    which is algebraically equivalent to :func:`rotate_vector_sandwich` but does not need to form any intermediate
    quaternions.

    A single quaternion can be used to rotate many vectors (given as the columns of a 3xn array), many quaternions
    can be used to rotate a single vector, or n quaternions can be paired with n vectors.

    .. warning::
        The quaternion must have unit length.  A non-unit quaternion scales the result in addition to rotating it.

    :param quaternion: The unit quaternion(s) to rotate by
    :param vector: The vector(s) to rotate
    :return: The rotated vector(s)
    """

    quaternion = _check_quaternion(quaternion)
    vector = _check_vector_array_and_shape(vector)

    temp = vector3.scale(vector3.cross(quaternion.v, vector), 2)

    return vector3.add(vector3.add(vector, vector3.scale(temp, quaternion.w)), vector3.cross(quaternion.v, temp))


def rotate_vector_sandwich(quaternion: QUATERNION_LIKE, vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    Rotates the vector(s) using the sandwich product :math:`\mathbf{q}\otimes(0, \mathbf{x})\otimes\mathbf{q}^*`.

    This gives the same result as :func:`rotate_vector` (which should generally be preferred since it is faster) and
    has the same requirement that the quaternion be unit length.

    :param quaternion: The unit quaternion(s) to rotate by
    :param vector: The vector(s) to rotate
    :return: The rotated vector(s)
    """

    quaternion = _check_quaternion(quaternion)
    vector = _check_vector_array_and_shape(vector)

    pure = Quaternion(np.zeros(vector.shape[1:])[()], vector)

    return mul(mul(quaternion, pure), conj(quaternion)).v


def _interpolation_fraction(time: float | DatetimeLike,
                            time0: float | DatetimeLike, time1: float | DatetimeLike) -> float:

    try:
        return float((time - time0) / (time1 - time0))  # type: ignore
    except TypeError:
        raise TypeError('time, time0, and time1 must support subtraction resulting in a type that supports true '
                        'division.  Typically this means they should all be floats or all be DatetimeLike objects')


def nlerp(quaternion0: QUATERNION_LIKE, quaternion1: QUATERNION_LIKE,
          time: float | DatetimeLike,
          time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1) -> Quaternion:
    r"""
    This function performs normalized linear interpolation of rotation quaternions.

    NLERP of quaternions involves first performing a linear interpolation between the two quaternions, and then
    normalizing the interpolated result to have unit length.  That is:

    .. math::
        \mathbf{q}=\frac{\mathbf{q}_0(1-p)+\mathbf{q}_1p}
        {\left\|\mathbf{q}_0(1-p)+\mathbf{q}_1p\right\|}

    where :math:`p` is the fractional percent of the way between :math:`\mathbf{q}_0` and :math:`\mathbf{q}_1` that
    we want to interpolate at (:math:`p\in[0, 1]`).

    You can either specify `time` as the fractional percent directly, or specify `time0` and `time1` as the times
    corresponding to the first and second quaternion and the function will compute the fractional percent for you.
    All three times can also be given as python datetime objects (or pandas Timestamps).

    .. warning::
        NLERP does not interpolate with constant angular velocity and so it is only well suited to short
        interpolation intervals.  For longer intervals use :func:`slerp`.

    :param quaternion0: The starting quaternion(s)
    :param quaternion1: The ending quaternion(s)
    :param time: The time to interpolate the quaternions at, as a fractional percent or as the actual time between
                `time0` and `time1`
    :param time0: the time corresponding to the first quaternion(s)
    :param time1: the time corresponding to the second quaternion(s)
    :return: The interpolated quaternion(s)
    """

    dt = _interpolation_fraction(time, time0, time1)

    q0 = _check_quaternion(quaternion0)
    q1 = _check_quaternion(quaternion1)

    return normalize(add(scale(q0, 1 - dt), scale(q1, dt)))


def slerp(quaternion0: QUATERNION_LIKE, quaternion1: QUATERNION_LIKE,
          time: float | DatetimeLike,
          time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1) -> Quaternion:
    r"""
    This function performs spherical linear interpolation of rotation quaternions.

    SLERP of quaternions involves performing a linear interpolation along the great circle arc connecting the two
    quaternions. That is:

    .. math::
        \omega = \text{cos}^{-1}(\mathbf{q}_0^T\mathbf{q}_1)\\
        \mathbf{q}=\mathbf{q}_0\text{cos}(p\omega)+
        \text{sin}(p\omega)\frac{\mathbf{q}_1-\mathbf{q}_0\text{cos}(\omega)}
        {\left\|\mathbf{q}_1-\mathbf{q}_0\text{cos}(\omega)\right\|}

    Both quaternions are normalized before interpolating.  If they are on opposite hemispheres the second quaternion
    is negated so that the shorter arc is taken, and if they are very close (cosine above 0.9995) this falls back to
    :func:`nlerp`.

    The times are handled the same as in :func:`nlerp`.  Unlike the rest of this module this function is not
    vectorized and only accepts single quaternions.

    :param quaternion0: The starting quaternion
    :param quaternion1: The ending quaternion
    :param time: The time to interpolate the quaternions at, as a fractional percent or as the actual time between
                `time0` and `time1`
    :param time0: the time corresponding to the first quaternion
    :param time1: the time corresponding to the second quaternion
    :return: The interpolated quaternion
    """

    dt = _interpolation_fraction(time, time0, time1)

    # enforce unit normalization
    q0 = normalize(quaternion0)
    q1 = normalize(quaternion1)

    if np.ndim(q0.w) or np.ndim(q1.w):
        raise ValueError('slerp only supports single quaternions')

    cos_angle = dot(q0, q1)

    if cos_angle < 0:
        # take the shorter path
        q1 = scale(q1, -1)
        cos_angle *= -1

    if cos_angle > 0.9995:
        # if the quaternions are really close revert to nlerp
        return nlerp(q0, q1, dt)

    angle = np.arccos(np.clip(cos_angle, -1, 1)) * dt

    # form an orthonormal basis with q0
    basis = normalize(add(q1, scale(q0, -cos_angle)))

    return normalize(add(scale(q0, np.cos(angle)), scale(basis, np.sin(angle))))
