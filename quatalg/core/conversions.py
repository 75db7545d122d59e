# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.

"""
Conversion routines for quaternions

This module contains routines for converting quaternions into other layouts and rotation representations.
All routines are implemented purely on numpy arrays (or array like objects).
"""

import numpy as np

from quatalg import vector3
from quatalg._typing import ARRAY_LIKE, DOUBLE_ARRAY
from quatalg.core._helpers import _check_array_and_shape, _check_quaternion
from quatalg.core.types import Quaternion, QUATERNION_LIKE


__all__ = ['quaternion_to_array', 'array_to_quaternion', 'quaternion_to_rotmat', 'quaternion_to_rotvec']


def quaternion_to_array(quaternion: QUATERNION_LIKE, scalar_first: bool = True) -> DOUBLE_ARRAY:
    """
    Stacks the scalar and vector portions of the quaternion(s) into a single flat array.

    The result has a length of 4 along the first axis.  When converting multiple quaternions each column of the
    result is one quaternion.

    :param quaternion: The quaternion(s) to flatten
    :param scalar_first: Whether the scalar goes before (``[w, x, y, z]``) or after (``[x, y, z, w]``) the vector
    :return: The flat quaternion array
    """

    quaternion = _check_quaternion(quaternion)

    scalar = np.expand_dims(quaternion.w, 0)

    if scalar_first:
        return np.concatenate([scalar, quaternion.v], axis=0)

    return np.concatenate([quaternion.v, scalar], axis=0)


def array_to_quaternion(array: ARRAY_LIKE, scalar_first: bool = True) -> Quaternion:
    """
    Splits a flat quaternion array (length 4 along the first axis) into a :class:`.Quaternion`.

    :param array: The flat quaternion array (or 4xn array of quaternion columns)
    :param scalar_first: Whether the scalar is the first (``[w, x, y, z]``) or last (``[x, y, z, w]``) element
    :return: The quaternion(s)
    :raises ValueError: If the first axis of the array is not length 4
    """

    array = _check_array_and_shape(array, return_copy=True, first_axis_length=4)

    if scalar_first:
        return Quaternion(array[0][()], array[1:])

    return Quaternion(array[-1][()], array[:3])


def quaternion_to_rotmat(quaternion: QUATERNION_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function converts a rotation quaternion into its equivalent rotation matrix.

    Rotation quaternions are converted to rotation matrices by using:

    .. math::
        \mathbf{T} = (q_s^2-\mathbf{q}_v^T\mathbf{q}_v)\mathbf{I}_{3\times 3}+2\mathbf{q}_v\mathbf{q}_v^T+2q_s
        \left[\mathbf{q}_v\times\right]

    where :math:`\mathbf{q}_v` is the vector portion of the quaternion, :math:`q_s` is the scalar portion of the
    quaternion, :math:`\left[\bullet\times\right]` is the skew symmetric cross product matrix (see
    :func:`.vector3.skew`), and :math:`\mathbf{I}_{3\times 3}` is a :math:`3\times 3` identity matrix.  The result is
    such that ``quaternion_to_rotmat(q) @ x`` is the same as ``rotate_vector(q, x)``.

    This function is vectorized.  When converting multiple quaternions, each rotation matrix is stacked along the
    first axis of the output.  A batch of one quaternion gives a 1x3x3 array.  For example::

        >>> from quatalg import quaternion_to_rotmat
        >>> from numpy import sqrt
        >>> quaternion_to_rotmat(([0, 1/sqrt(2)], [[1, 0], [0, 0], [0, 1/sqrt(2)]]))
        array([[[ 1.,  0.,  0.],
                [ 0., -1.,  0.],
                [ 0.,  0., -1.]],
               [[ 0., -1.,  0.],
                [ 1.,  0.,  0.],
                [ 0.,  0.,  1.]]])

    :param quaternion: The rotation quaternion(s) to be converted to the rotation matrix(ces)
    :return: a numpy array containing the rotation matrix(ces) corresponding to the input quaternion(s)
    """

    quaternion = _check_quaternion(quaternion)

    # extract the scalar and vector portion of the quaternion(s)
    qs = np.reshape(quaternion.w, (-1, 1, 1))
    qv = quaternion.v.reshape(3, -1)

    # form the rotation matrix
    rotmat = ((qs ** 2 - vector3.square_len(qv).reshape(-1, 1, 1)) * np.eye(3) +
              2 * np.einsum('ij,jk->jik', qv, qv.T) +
              2 * qs * vector3.skew(qv).reshape(-1, 3, 3))

    # only a single quaternion gives a single matrix, a batch of one stays 1x3x3
    if quaternion.v.ndim == 1:
        return rotmat[0]

    return rotmat


def quaternion_to_rotvec(quaternion: QUATERNION_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function converts a rotation quaternion into a rotation vector.

    The rotation vector is formed by:

    .. math::
        \theta = 2\text{atan2}(\left\|\mathbf{q}_v\right\|, q_s) \\
        \hat{\mathbf{x}} = \frac{\mathbf{q}_v}{\left\|\mathbf{q}_v\right\|} \\
        \mathbf{v} = \theta\hat{\mathbf{x}}

    This function checks for cases when theta is nearly zero (less than 1e-15) and replaces these with the identity
    rotation vector [0, 0, 0].  It is vectorized and the output has the same number of dimensions as the vector
    portion of the input.

    :param quaternion: the rotation quaternion(s) to be converted to the rotation vector(s)
    :return: The rotation vector(s) corresponding to the input rotation quaternion(s)
    """

    quaternion = _check_quaternion(quaternion)

    vector_length = vector3.length(quaternion.v)

    # get the rotation angle
    theta = 2 * np.arctan2(vector_length, quaternion.w)

    if quaternion.v.ndim > 1:

        # check to see if we have identity quaternion(s)
        small_angle_check = np.abs(theta) < 1e-15

        # avoid dividing by zero for the identity quaternions, they are replaced below
        safe_length = np.where(small_angle_check, 1, vector_length)

        rotvec = theta * quaternion.v / safe_length

        rotvec[:, small_angle_check] = 0

        return rotvec

    else:

        if abs(theta) < 1e-15:
            # check to see if the input is an identity quaternion and return 0 if it is

            return np.zeros(3)

        else:

            return theta * quaternion.v / vector_length
