from datetime import datetime, timedelta
from unittest import TestCase

import numpy as np

from pandas import Timestamp

import quatalg as qa


rng = np.random.default_rng(471175)


def random_unit_quaternion() -> qa.Quaternion:
    return qa.normalize(qa.Quaternion(rng.standard_normal(), rng.standard_normal(3)))


class QuaternionTestCase(TestCase):

    def check_quaternion(self, result, expected, decimal=7):

        expected = qa.core._helpers._check_quaternion(expected)

        self.assertIsInstance(result, qa.Quaternion)
        np.testing.assert_array_almost_equal(result.w, expected.w, decimal=decimal)
        np.testing.assert_array_almost_equal(result.v, expected.v, decimal=decimal)


class TestIdentity(QuaternionTestCase):

    def test_identity(self):

        q = qa.identity()

        self.assertEqual(q.w, 1)
        np.testing.assert_array_equal(q.v, [0, 0, 0])

    def test_identity_law(self):

        for _ in range(5):
            q = qa.Quaternion(rng.standard_normal(), rng.standard_normal(3))

            self.check_quaternion(qa.mul(q, qa.identity()), q)
            self.check_quaternion(qa.mul(qa.identity(), q), q)

    def test_new_arrays(self):

        q1 = qa.identity()
        q2 = qa.identity()

        self.assertIsNot(q1.v, q2.v)


class TestAlgebra(QuaternionTestCase):

    def test_add(self):

        self.check_quaternion(qa.add((1, [1, 2, 3]), (2, [4, 5, 6])), (3, [5, 7, 9]))

        # flat quaternions are scalar first
        self.check_quaternion(qa.add([1, 1, 2, 3], [2, 4, 5, 6]), (3, [5, 7, 9]))

    def test_scale(self):

        self.check_quaternion(qa.scale((1, [1, 2, 3]), 2), (2, [2, 4, 6]))

        batch = qa.Quaternion(np.array([1., 2.]), np.array([[1., 2.], [3., 4.], [5., 6.]]))

        self.check_quaternion(qa.scale(batch, np.array([2, -1])),
                              (np.array([2., -2.]), np.array([[2., -2.], [6., -4.], [10., -6.]])))

    def test_dot(self):

        self.assertAlmostEqual(qa.dot((1, [1, 2, 3]), (2, [4, 5, 6])), 34)

        q = random_unit_quaternion()

        self.assertAlmostEqual(qa.dot(q, q), 1)

    def test_mul(self):

        i = (0, [1, 0, 0])
        j = (0, [0, 1, 0])
        k = (0, [0, 0, 1])

        self.check_quaternion(qa.mul(i, j), k)
        self.check_quaternion(qa.mul(j, k), i)
        self.check_quaternion(qa.mul(k, i), j)

        # not commutative
        self.check_quaternion(qa.mul(j, i), (0, [0, 0, -1]))

        self.check_quaternion(qa.mul(i, i), (-1, [0, 0, 0]))

        self.check_quaternion(qa.mul((1, [2, 3, 4]), (5, [6, 7, 8])), (-60, [12, 30, 24]))

    def test_mul_composition_order(self):

        first = qa.axis_angle([1, 0, 0], np.pi / 2)
        second = qa.axis_angle([0, 0, 1], np.pi / 2)

        vector = np.array([0., 1., 0.])

        composed = qa.rotate_vector(qa.mul(second, first), vector)

        np.testing.assert_array_almost_equal(composed, qa.rotate_vector(second, qa.rotate_vector(first, vector)))

        # x first takes y to z which the z rotation leaves alone
        np.testing.assert_array_almost_equal(composed, [0, 0, 1])

    def test_mul_vectorized(self):

        q1 = [random_unit_quaternion() for _ in range(4)]
        q2 = [random_unit_quaternion() for _ in range(4)]

        batch1 = qa.Quaternion(np.array([q.w for q in q1]), np.array([q.v for q in q1]).T)
        batch2 = qa.Quaternion(np.array([q.w for q in q2]), np.array([q.v for q in q2]).T)

        result = qa.mul(batch1, batch2)

        for ind, (a, b) in enumerate(zip(q1, q2)):
            expected = qa.mul(a, b)

            self.assertAlmostEqual(result.w[ind], expected.w)
            np.testing.assert_array_almost_equal(result.v[:, ind], expected.v)

        # a single quaternion broadcasts against the batch
        result = qa.mul(q1[0], batch2)

        for ind, b in enumerate(q2):
            self.assertAlmostEqual(result.w[ind], qa.mul(q1[0], b).w)

    def test_conj(self):

        self.check_quaternion(qa.conj((1, [2, 3, 4])), (1, [-2, -3, -4]))

        for _ in range(5):
            q = qa.Quaternion(rng.standard_normal(), rng.standard_normal(3))

            self.assertAlmostEqual(qa.length(qa.conj(q)), qa.length(q))

    def test_conj_does_not_modify_input(self):

        vector = np.array([2., 3., 4.])

        qa.conj(qa.Quaternion(1., vector))

        np.testing.assert_array_equal(vector, [2, 3, 4])

    def test_square_len(self):

        self.assertAlmostEqual(qa.square_len((1, [2, 3, 4])), 30)
        self.assertAlmostEqual(qa.length((1, [2, 3, 4])), np.sqrt(30))

        np.testing.assert_array_almost_equal(qa.square_len((np.array([1., 0.]),
                                                            np.array([[2., 0.], [3., 0.], [4., 0.]]))),
                                             [30, 0])

    def test_normalize(self):

        q = qa.normalize((1, [2, 3, 4]))

        self.assertAlmostEqual(qa.length(q), 1)
        self.check_quaternion(q, np.array([1, 2, 3, 4]) / np.sqrt(30))

        with np.errstate(divide='ignore', invalid='ignore'):
            zero = qa.normalize((0, [0, 0, 0]))

        self.assertTrue(np.isnan(zero.w))
        self.assertTrue(np.isnan(zero.v).all())

    def test_inverse(self):

        q = qa.Quaternion(2., np.array([1., -3., 0.5]))

        self.check_quaternion(qa.mul(q, qa.inverse(q)), qa.identity())
        self.check_quaternion(qa.mul(qa.inverse(q), q), qa.identity())

        unit = random_unit_quaternion()

        self.check_quaternion(qa.inverse(unit), qa.conj(unit))

    def test_bad_input(self):

        with self.assertRaises(ValueError):
            qa.add((np.array([1., 2.]), [1, 2, 3]), qa.identity())

        with self.assertRaises(ValueError):
            qa.conj([1, 2, 3])

        with self.assertRaises(ValueError):
            qa.conj((1, [1, 2]))

        with self.assertRaises(ValueError):
            qa.length(1)


class TestRotateVector(QuaternionTestCase):

    def test_half_turn_about_y(self):

        q = qa.axis_angle([0, 1, 0], np.pi)

        np.testing.assert_array_almost_equal(qa.rotate_vector(q, [1, 1, 1]), [-1, 1, -1])
        np.testing.assert_array_almost_equal(qa.rotate_vector_sandwich(q, [1, 1, 1]), [-1, 1, -1])

    def test_identity(self):

        np.testing.assert_array_almost_equal(qa.rotate_vector(qa.identity(), [1, 2, 3]), [1, 2, 3])

    def test_matches_sandwich(self):

        for _ in range(10):
            q = random_unit_quaternion()
            vector = rng.standard_normal(3)

            rotated = qa.rotate_vector(q, vector)

            np.testing.assert_array_almost_equal(rotated, qa.rotate_vector_sandwich(q, vector))

            # rotations preserve length
            self.assertAlmostEqual(np.linalg.norm(rotated), np.linalg.norm(vector))

    def test_conj_undoes(self):

        q = random_unit_quaternion()
        vector = rng.standard_normal(3)

        np.testing.assert_array_almost_equal(qa.rotate_vector(qa.conj(q), qa.rotate_vector(q, vector)), vector)

    def test_vectorized(self):

        q = random_unit_quaternion()
        vectors = rng.standard_normal((3, 6))

        rotated = qa.rotate_vector(q, vectors)

        self.assertEqual(rotated.shape, (3, 6))

        for ind in range(6):
            np.testing.assert_array_almost_equal(rotated[:, ind], qa.rotate_vector(q, vectors[:, ind]))

        np.testing.assert_array_almost_equal(rotated, qa.rotate_vector_sandwich(q, vectors))

        # many quaternions rotating a single vector
        angles = np.array([0, np.pi / 2, np.pi])
        quaternions = qa.axis_angle(np.array([[0, 0, 0], [0, 0, 0], [1, 1, 1]]), angles)

        np.testing.assert_array_almost_equal(qa.rotate_vector(quaternions, [1, 0, 0]),
                                             [[1, 0, -1], [0, 1, 0], [0, 0, 0]])

    def test_bad_vector(self):

        with self.assertRaises(ValueError):
            qa.rotate_vector(qa.identity(), [1, 2])


class TestInterpolation(QuaternionTestCase):

    def setUp(self):

        self.start = qa.identity()
        self.end = qa.axis_angle([0, 0, 1], np.pi / 2)

    def test_nlerp_endpoints(self):

        self.check_quaternion(qa.nlerp(self.start, self.end, 0), self.start)
        self.check_quaternion(qa.nlerp(self.start, self.end, 1), self.end)

    def test_nlerp_midpoint(self):

        # the normalized midpoint of two unit quaternions bisects the angle between them
        self.check_quaternion(qa.nlerp(self.start, self.end, 0.5), qa.axis_angle([0, 0, 1], np.pi / 4))

    def test_nlerp_datetimes(self):

        time0 = datetime(2024, 1, 1)
        time1 = time0 + timedelta(seconds=10)

        self.check_quaternion(qa.nlerp(self.start, self.end, time0 + timedelta(seconds=5), time0, time1),
                              qa.axis_angle([0, 0, 1], np.pi / 4))

        self.check_quaternion(qa.nlerp(self.start, self.end, Timestamp(time1), Timestamp(time0), Timestamp(time1)),
                              self.end)

    def test_bad_times(self):

        with self.assertRaises(TypeError):
            qa.nlerp(self.start, self.end, 'noon')

        with self.assertRaises(TypeError):
            qa.slerp(self.start, self.end, datetime(2024, 1, 1))

    def test_slerp(self):

        self.check_quaternion(qa.slerp(self.start, self.end, 0), self.start)
        self.check_quaternion(qa.slerp(self.start, self.end, 1), self.end)
        self.check_quaternion(qa.slerp(self.start, self.end, 0.25), qa.axis_angle([0, 0, 1], np.pi / 8))
        self.check_quaternion(qa.slerp(self.start, self.end, 2.5, 0, 10), qa.axis_angle([0, 0, 1], np.pi / 8))

    def test_slerp_shortest_path(self):

        negated_end = qa.scale(self.end, -1)

        self.check_quaternion(qa.slerp(self.start, negated_end, 0.5), qa.axis_angle([0, 0, 1], np.pi / 4))

    def test_slerp_close(self):

        q0 = random_unit_quaternion()
        q1 = qa.normalize(qa.add(q0, (1e-4, [0, 0, 0])))

        result = qa.slerp(q0, q1, 0.5)

        self.assertAlmostEqual(qa.length(result), 1)
        self.check_quaternion(result, q0, decimal=4)

    def test_slerp_same_rotation_opposite_sign(self):

        q = qa.axis_angle([0, 0, 1], 0.7)

        result = qa.slerp(q, qa.scale(q, -1), 0.5)

        self.assertFalse(np.isnan(result.w))
        self.check_quaternion(result, q)

        nearly_opposite = qa.scale(qa.normalize(qa.add(q, (0, [1e-5, 0, 0]))), -1)

        self.check_quaternion(qa.slerp(q, nearly_opposite, 0.5), q, decimal=4)

    def test_slerp_single_only(self):

        batch = qa.axis_angle(np.eye(3), np.array([0.1, 0.2, 0.3]))

        with self.assertRaises(ValueError):
            qa.slerp(batch, batch, 0.5)
