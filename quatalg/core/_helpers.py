import copy

import numpy as np

from quatalg._typing import ARRAY_LIKE, DOUBLE_ARRAY
from quatalg.core.types import Quaternion, QUATERNION_LIKE


def _check_array_and_shape(input: ARRAY_LIKE,
                           return_copy: bool = False,
                           first_axis_length: int | None = None,
                           last_axis_length: int | None = None) -> DOUBLE_ARRAY:
    in_shape = np.shape(input)

    if not in_shape:
        raise ValueError('The input must be shaped')

    if first_axis_length is not None and in_shape[0] != first_axis_length:
        raise ValueError(f'The length of the first axis must be {first_axis_length}')

    if last_axis_length is not None and in_shape[-1] != last_axis_length:
        raise ValueError(f'The length of the last axis must be {last_axis_length}')

    if return_copy:
        input = copy.deepcopy(input)

    # ensure the value is an array
    return np.asanyarray(input, dtype=np.float64)


def _check_vector_array_and_shape(vector: ARRAY_LIKE, return_copy: bool = False) -> DOUBLE_ARRAY:
    return _check_array_and_shape(vector, return_copy, first_axis_length=3)


def _check_quaternion(quaternion: QUATERNION_LIKE) -> Quaternion:
    """
    Interprets the input as a quaternion, returning a new :class:`Quaternion` of float64 values.

    :raises ValueError: if the input cannot be interpreted or the scalar and vector shapes do not agree
    """

    if isinstance(quaternion, tuple) and len(quaternion) == 2:
        scalar, vector = quaternion

        vector = _check_vector_array_and_shape(vector)

    else:
        flat = _check_array_and_shape(quaternion, first_axis_length=4)

        scalar, vector = flat[0], flat[1:]

    scalar = np.asarray(scalar, dtype=np.float64)

    if scalar.shape != vector.shape[1:]:
        raise ValueError(f'The scalar portion of the quaternion has shape {scalar.shape} '
                         f'but the vector portion requires {vector.shape[1:]}')

    # indexing with an empty tuple unwraps 0d arrays to numpy scalars and leaves others alone
    return Quaternion(scalar[()], vector)
