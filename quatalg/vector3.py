"""
This module provides the 3 element vector primitives the quaternion routines are built on.

Each routine is a thin, named wrapper around numpy so that the quaternion algebra reads in terms of vector operations.
Like everything else in :mod:`quatalg`, these routines are vectorized along columns: a single vector is a length 3
array and multiple vectors are stored as the columns of a 3xn array.  The first axis must always have a length of 3.

None of these routines modify their inputs.
"""

import numpy as np

from quatalg._typing import ARRAY_LIKE, DOUBLE_ARRAY, SCALAR_OR_ARRAY, F_SCALAR_OR_ARRAY
from quatalg.core._helpers import _check_vector_array_and_shape


__all__ = ["add", "scale", "dot", "cross", "negate", "square_len", "length", "normalize", "skew"]


def _as_columns(vector: DOUBLE_ARRAY, ndim: int) -> DOUBLE_ARRAY:
    # a single vector has to broadcast along the columns of a 3xn array, not along its first axis
    return vector.reshape(vector.shape + (1,) * (ndim - vector.ndim))


def _check_vector_pair(vector_1: ARRAY_LIKE, vector_2: ARRAY_LIKE) -> tuple[DOUBLE_ARRAY, DOUBLE_ARRAY]:

    vector_1 = _check_vector_array_and_shape(vector_1)
    vector_2 = _check_vector_array_and_shape(vector_2)

    ndim = max(vector_1.ndim, vector_2.ndim)

    return _as_columns(vector_1, ndim), _as_columns(vector_2, ndim)


def add(vector_1: ARRAY_LIKE, vector_2: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Adds two vectors (or sets of column vectors) component wise.

    A single vector can be added to every column of a 3xn array.

    :param vector_1: The first vector(s)
    :param vector_2: The second vector(s)
    :return: The sum of the vectors
    """

    vector_1, vector_2 = _check_vector_pair(vector_1, vector_2)

    return vector_1 + vector_2


def scale(vector: ARRAY_LIKE, factor: SCALAR_OR_ARRAY) -> DOUBLE_ARRAY:
    """
    Multiplies each component of the vector(s) by factor.

    If multiple vectors are given as columns then factor can be either a scalar or contain one value per column.  If a
    single vector is given with a length n array of factors the result is a 3xn array of scaled copies.

    :param vector: The vector(s) to scale
    :param factor: The scale factor(s)
    :return: The scaled vector(s)
    """

    vector = _check_vector_array_and_shape(vector)
    factor = np.asarray(factor, dtype=np.float64)

    return _as_columns(vector, factor.ndim + 1) * factor


def dot(vector_1: ARRAY_LIKE, vector_2: ARRAY_LIKE) -> F_SCALAR_OR_ARRAY:
    """
    Computes the inner product of two vectors, or of each pair of corresponding columns.

    :param vector_1: The first vector(s)
    :param vector_2: The second vector(s)
    :return: The dot product(s)
    """

    vector_1, vector_2 = _check_vector_pair(vector_1, vector_2)

    return (vector_1 * vector_2).sum(axis=0)


def cross(vector_1: ARRAY_LIKE, vector_2: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Computes the right handed cross product vector_1 x vector_2 along the first axis.

    :param vector_1: The first vector(s)
    :param vector_2: The second vector(s)
    :return: The cross product(s)
    """

    return np.cross(_check_vector_array_and_shape(vector_1), _check_vector_array_and_shape(vector_2), axis=0)


def negate(vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Returns the vector(s) pointing in the opposite direction.

    :param vector: The vector(s) to negate
    :return: The negated vector(s)
    """

    return -_check_vector_array_and_shape(vector)


def square_len(vector: ARRAY_LIKE) -> F_SCALAR_OR_ARRAY:
    """
    Computes the squared euclidean length of the vector(s).

    :param vector: The vector(s)
    :return: The squared length(s)
    """

    vector = _check_vector_array_and_shape(vector)

    return (vector * vector).sum(axis=0)


def length(vector: ARRAY_LIKE) -> F_SCALAR_OR_ARRAY:
    """
    Computes the euclidean length of the vector(s).

    :param vector: The vector(s)
    :return: The length(s)
    """

    return np.sqrt(square_len(vector))


def normalize(vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Scales the vector(s) to unit length.

    A zero length vector results in NaN values.

    :param vector: The vector(s) to normalize
    :return: The unit vector(s)
    """

    vector = _check_vector_array_and_shape(vector)

    return vector / length(vector)


def skew(vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function returns a numpy array with the skew symmetric cross product matrix for vector.

    The skew symmetric cross product matrix is defined such that:

    .. math::
        \mathbf{a}\times\mathbf{b}=\left[\mathbf{a}\times\right]\mathbf{b} \\
        \left[\mathbf{a}\times\right] = \left[\begin{array}{ccc} 0 & -a_3 & a_2 \\
        a_3 & 0 & -a_1 \\
        -a_2 & a_1 & 0 \end{array}\right]

    This function is vectorized, therefore you can input multiple vectors as a 3xn array where each column is an
    independent vector.  The resulting skew matrix output will be nx3x3 where the first axis stores each matrix

    :param vector: The vector to compute a skew symmetric matrix for
    :return: The skew symmetric cross product matrix(ces) corresponding to the vector(s)
    """

    vector = _check_vector_array_and_shape(vector)

    if vector.ndim > 1:
        zeros = np.zeros(vector.shape[-1])

    else:
        zeros = 0

    return np.array([zeros, -vector[2], vector[1],
                     vector[2], zeros, -vector[0],
                     -vector[1], vector[0], zeros]).T.reshape(-1, 3, 3).squeeze()
