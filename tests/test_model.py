"""
Unit tests for the GaussianProcess model: lifecycle, prediction,
derivative, credible interval, precision and locking.
"""

import math
import threading
import unittest

import gpr
import gpr.num as gnp
from gpr import GaussianProcess, GaussianProcessDouble, GaussianProcessFloat, InversionMethod, ModelState
from gpr.errors import NotInitializedError, PreconditionViolationError
from gpr.kernel import GaussianKernel


def three_point_model(**kwargs):
    gp = GaussianProcess(GaussianKernel(1.0, 1.0), sigma=0.01, **kwargs)
    for x, y in [(0.0, 0.0), (1.0, 1.0), (2.0, 4.0)]:
        gp.add_sample([x], [y])
    return gp


def planar_model(n=10, seed=7, **kwargs):
    gnp.set_seed(seed)
    xi = 4.0 * gnp.rand(n, 2) - 2.0
    zi = gpr.misc.testfunctions.planar_field(xi)
    gp = GaussianProcess(GaussianKernel(1.0, 1.0), sigma=0.01, **kwargs)
    for x, z in zip(xi, zi):
        gp.add_sample(x, z)
    return gp


class TestLifecycle(unittest.TestCase):

    def test_new_model_is_dirty(self):
        gp = GaussianProcess(GaussianKernel(1.0))
        self.assertEqual(gp.state, ModelState.DIRTY)
        self.assertEqual(gp.number_of_samples, 0)
        self.assertEqual(gp.input_dimension, 0)

    def test_predict_trains(self):
        gp = three_point_model()
        self.assertFalse(gp.is_ready())
        gp.predict([0.5])
        self.assertTrue(gp.is_ready())

    def test_changes_make_the_model_dirty(self):
        gp = three_point_model()
        changes = [
            lambda: gp.add_sample([3.0], [9.0]),
            lambda: setattr(gp, "sigma", 0.02),
            lambda: setattr(gp, "kernel", GaussianKernel(2.0)),
            lambda: setattr(gp, "efficient_storage", True),
        ]
        for change in changes:
            gp.initialize()
            self.assertTrue(gp.is_ready())
            change()
            self.assertEqual(gp.state, ModelState.DIRTY)

    def test_inversion_method_keeps_the_model_ready(self):
        gp = three_point_model()
        gp.initialize()
        gp.inversion_method = InversionMethod.JACOBI_SVD
        self.assertTrue(gp.is_ready())
        self.assertIs(gp.inversion_method, InversionMethod.JACOBI_SVD)

    def test_initialize_is_idempotent(self):
        gp = three_point_model()
        gp.initialize()
        A = gp._regression_vectors
        gp.initialize()
        self.assertIs(gp._regression_vectors, A)

    def test_empty_model(self):
        gp = GaussianProcess(GaussianKernel(1.0))
        with self.assertRaises(NotInitializedError):
            gp.initialize()
        with self.assertRaises(PreconditionViolationError):
            gp.predict([0.0])
        self.assertEqual(gp.state, ModelState.DIRTY)

    def test_negative_sigma(self):
        with self.assertRaises(ValueError):
            GaussianProcess(GaussianKernel(1.0), sigma=-1.0)
        gp = three_point_model()
        with self.assertRaises(ValueError):
            gp.sigma = -0.5
        with self.assertRaises(ValueError):
            gp.sigma = float("nan")
        with self.assertRaises(ValueError):
            gp.sigma = float("inf")
        self.assertEqual(gp.sigma, 0.01)

    def test_summary(self):
        gp = three_point_model()
        text = str(gp)
        self.assertIn("Number of samples: 3", text)
        self.assertIn("Kernel: GaussianKernel", text)
        with self.assertLogs("gpr", level="INFO"):
            gp.describe()

    def test_debug_trace(self):
        gp = three_point_model(debug=True)
        with self.assertLogs("gpr", level="INFO") as cm:
            gp.initialize()
        self.assertTrue(any("GaussianProcess:" in line for line in cm.output))
        gp.debug_off()
        self.assertFalse(gp.debug)


class TestPrediction(unittest.TestCase):

    def test_three_point_regression(self):
        gp = three_point_model()
        mean = gp.predict([1.0])
        self.assertEqual(mean.shape, (1,))
        self.assertAlmostEqual(gnp.to_scalar(mean[0]), 1.0, delta=0.1)

    def test_deterministic(self):
        gp = three_point_model()
        other = three_point_model()
        self.assertTrue(gnp.array_equal(gp.predict([0.3]), gp.predict([0.3])))
        self.assertTrue(gnp.array_equal(gp.predict([0.3]), other.predict([0.3])))

    def test_interpolation_without_noise(self):
        xi = [0.7 * i for i in range(6)]
        for method in InversionMethod:
            gp = GaussianProcess(GaussianKernel(0.5), sigma=0.0, inversion_method=method)
            for x in xi:
                gp.add_sample([x], [math.sin(x)])
            for x in xi:
                self.assertAlmostEqual(
                    gnp.to_scalar(gp.predict([x])[0]), math.sin(x), delta=1e-6, msg=method.value
                )

    def test_multi_output(self):
        gp = planar_model()
        self.assertEqual(gp.input_dimension, 2)
        self.assertEqual(gp.output_dimension, 2)
        self.assertEqual(gp.predict([0.1, 0.2]).shape, (2,))

    def test_all_methods_agree(self):
        x = [0.25, -0.5]
        ref = planar_model().predict(x)
        for method in InversionMethod:
            mean = planar_model(inversion_method=method).predict(x)
            self.assertTrue(gnp.allclose(mean, ref, rtol=1e-7, atol=1e-9), msg=method.value)

    def test_efficient_storage_gives_same_prediction(self):
        gp = planar_model()
        gp_small = planar_model(efficient_storage=True)
        gp_small.initialize()
        self.assertIsNone(gp_small._core_matrix)
        x = [0.3, 0.4]
        self.assertTrue(gnp.array_equal(gp.predict(x), gp_small.predict(x)))
        self.assertAlmostEqual(gp.credible_interval(x), gp_small.credible_interval(x), places=10)


class TestDerivative(unittest.TestCase):

    def test_shapes(self):
        gp = GaussianProcess(GaussianKernel(1.0), sigma=0.1)
        gp.add_sample([0.0, 0.0, 0.0], [1.0, 2.0])
        mean, D = gp.predict_derivative([0.5, 0.5, 0.5])
        self.assertEqual(mean.shape, (2,))
        self.assertEqual(D.shape, (3, 2))
        for i in range(4):
            gp.add_sample([float(i), 1.0, -1.0], [0.0, 1.0])
        mean, D = gp.predict_derivative([0.5, 0.5, 0.5])
        self.assertEqual(D.shape, (3, 2))

    def test_same_mean_as_predict(self):
        gp = planar_model()
        x = [0.2, -0.3]
        mean, _ = gp.predict_derivative(x)
        self.assertTrue(gnp.array_equal(mean, gp.predict(x)))

    def test_matches_finite_differences(self):
        # with a unit length scale the derivative is the exact gradient of the mean
        gp = planar_model()
        x = gnp.asarray([0.4, -0.1])
        _, D = gp.predict_derivative(x)
        h = 1e-5
        for i in range(2):
            e = gnp.zeros(2)
            e[i] = h
            fd = (gp.predict(x + e) - gp.predict(x - e)) / (2 * h)
            self.assertTrue(gnp.allclose(D[i, :], fd, rtol=1e-5, atol=1e-5))

    def test_derivative_vanishes_at_a_single_sample(self):
        gp = GaussianProcess(GaussianKernel(1.0), sigma=0.1)
        gp.add_sample([1.0, 2.0], [3.0])
        _, D = gp.predict_derivative([1.0, 2.0])
        self.assertTrue(gnp.array_equal(D, gnp.zeros((2, 1))))


class TestCredibleInterval(unittest.TestCase):

    def test_far_from_data(self):
        gp = three_point_model()
        self.assertAlmostEqual(gp.credible_interval([100.0]), 1.96, places=10)

    def test_near_data(self):
        gp = three_point_model()
        self.assertLess(gp.credible_interval([1.0]), 0.25)
        self.assertGreaterEqual(gp.credible_interval([1.0]), 0.0)

    def test_posterior_covariance(self):
        gp = three_point_model()
        self.assertAlmostEqual(gp([0.5], [1.5]), gp([1.5], [0.5]), places=12)
        self.assertAlmostEqual(gp([50.0], [-50.0]), 0.0, places=12)

    def test_no_negative_variance(self):
        gp = GaussianProcess(GaussianKernel(1.0), sigma=0.0)
        gp.add_sample([0.0], [1.0])
        self.assertAlmostEqual(gp.credible_interval([0.0]), 0.0, places=6)


class TestPrecision(unittest.TestCase):

    def test_float_model(self):
        gp = GaussianProcessFloat(GaussianKernel(1.0), sigma=0.01)
        for x, y in [(0.0, 0.0), (1.0, 1.0), (2.0, 4.0)]:
            gp.add_sample([x], [y])
        mean, D = gp.predict_derivative([1.0])
        self.assertIs(gp.dtype, gnp.float32)
        self.assertEqual(mean.dtype, gnp.float32)
        self.assertEqual(D.dtype, gnp.float32)
        ref = three_point_model().predict([1.0])
        self.assertTrue(gnp.allclose(mean, ref, rtol=1e-4))

    def test_double_model(self):
        gp = GaussianProcessDouble(GaussianKernel(1.0))
        self.assertIs(gp.dtype, gnp.float64)

    def test_dtype_argument(self):
        gp = GaussianProcess(GaussianKernel(1.0), dtype="float32")
        self.assertIs(gp.dtype, gnp.float32)
        with self.assertRaises(ValueError):
            GaussianProcess(GaussianKernel(1.0), dtype="int32")


class TestLocking(unittest.TestCase):

    def test_lock_unlock(self):
        gp = three_point_model()
        gp.lock()
        self.assertTrue(gp._lock.locked())
        gp.unlock()
        self.assertFalse(gp._lock.locked())
        with gp.locked() as m:
            self.assertIs(m, gp)
            self.assertTrue(gp._lock.locked())
        self.assertFalse(gp._lock.locked())

    def test_concurrent_writers_under_lock(self):
        gp = GaussianProcess(GaussianKernel(1.0), sigma=0.01)

        def writer(offset):
            for i in range(25):
                with gp.locked():
                    gp.add_sample([offset + 0.01 * i], [float(i)])

        threads = [threading.Thread(target=writer, args=(k,)) for k in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(gp.number_of_samples, 100)
        with gp.locked():
            self.assertEqual(gp.predict([0.5]).shape, (1,))


if __name__ == "__main__":
    unittest.main()
