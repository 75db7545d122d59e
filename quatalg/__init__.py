# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


r"""
This package defines quaternion arithmetic and a small set of routines for using quaternions to represent rotations.

Quaternions in this package are stored as a scalar part and a vector part using the :class:`.Quaternion` named
tuple, :math:`\mathbf{q}=(w, \mathbf{v})`.  The functions also accept flat quaternions, which are interpreted in
scalar first order:

.. _quaternion-representation-table:

=================  =====================================================================================================
Representation     Description
=================  =====================================================================================================
quaternion         A :class:`.Quaternion` ``(w, v)`` where ``w`` is the scalar portion and ``v`` is a length 3 array
                   holding the vector portion.  A rotation by :math:`\theta` about unit axis :math:`\hat{\mathbf{x}}`
                   is :math:`\left(\text{cos}(\frac{\theta}{2}), \text{sin}(\frac{\theta}{2})\hat{\mathbf{x}}\right)`.
                   Note that quaternions are not unique in that the rotation represented by :math:`\mathbf{q}` is the
                   same rotation represented by :math:`-\mathbf{q}`.
flat quaternion    A 4 element array :math:`[w, x, y, z]`.  Use :func:`.quaternion_to_array` and
                   :func:`.array_to_quaternion` to convert to and from this layout (optionally in scalar last order).
vector             A numpy array whose first axis has length 3.  Multiple vectors are stored as the columns of a 3xn
                   array.
=================  =====================================================================================================

All of the functions are pure and vectorized: multiple quaternions are stored with the scalar portions in a length n
array and the vector portions as the columns of a 3xn array, and a single quaternion broadcasts against many.

The :class:`.Rotation` object provides a convenient object oriented wrapper around a single unit quaternion, with
operator overloading so that a sequence of rotations can be composed using the standard multiplication operator
``*``.
"""

import quatalg.core
import quatalg.vector3
import quatalg.rotation

from quatalg.core import *
from quatalg.rotation import Rotation, RotationOptions

__all__ = ['Quaternion', 'QUATERNION_LIKE',
           'identity', 'add', 'scale', 'dot', 'mul', 'conj', 'square_len', 'length', 'normalize', 'inverse',
           'rotate_vector', 'rotate_vector_sandwich', 'nlerp', 'slerp',
           'axis_angle', 'euler_angles', 'rotation_from_to', 'RotationFromToOptions',
           'quaternion_to_array', 'array_to_quaternion', 'quaternion_to_rotmat', 'quaternion_to_rotvec',
           'Rotation', 'RotationOptions']
