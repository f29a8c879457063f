import unittest

import numpy

import gpr.num as gnp
from gpr.core import solver
from gpr.core.solver import InversionMethod
from gpr.errors import NotInitializedError
from gpr.kernel import GaussianKernel


def training_data(n=12, seed=1):
    gnp.set_seed(seed)
    samples = [2.0 * gnp.rand(2) - 1.0 for _ in range(n)]
    labels = [gnp.asarray([x[0] ** 2 - x[1], x[0] * x[1]]) for x in samples]
    return samples, labels


class TestInversion(unittest.TestCase):

    def setUp(self):
        samples, _ = training_data()
        self.K = solver.regularized_kernel_matrix(GaussianKernel(0.5), samples, 0.01)
        self.K_inv = numpy.linalg.inv(self.K)

    def test_all_methods_agree(self):
        for method in InversionMethod:
            C = solver.invert_kernel_matrix(self.K.copy(), method)
            self.assertTrue(
                gnp.allclose(C, self.K_inv, rtol=1e-8, atol=1e-10), msg=method.value
            )

    def test_method_from_string(self):
        C = solver.invert_kernel_matrix(self.K.copy(), "bdc_svd")
        self.assertTrue(gnp.allclose(C, self.K_inv, rtol=1e-8, atol=1e-10))
        with self.assertRaises(ValueError):
            solver.invert_kernel_matrix(self.K.copy(), "qr")

    def test_singular_matrix(self):
        with self.assertRaises(gnp.LinAlgError):
            solver.invert_kernel_matrix(gnp.ones((2, 2)), InversionMethod.FULL_PIVOT_LU)
        with self.assertRaises(gnp.LinAlgError):
            solver.invert_kernel_matrix(
                gnp.zeros((2, 2)), InversionMethod.SELF_ADJOINT_EIGEN_SOLVER
            )

    def test_indefinite_symmetric_matrix(self):
        A = gnp.asarray([[0.0, 1.0], [1.0, 0.0]])
        with self.assertLogs("gpr", level="WARNING"):
            C = solver.invert_kernel_matrix(A, InversionMethod.SELF_ADJOINT_EIGEN_SOLVER)
        self.assertTrue(gnp.allclose(C, A))


class TestNoise(unittest.TestCase):

    def test_noise_is_added_once_to_the_diagonal(self):
        K = gnp.zeros((3, 3))
        solver.add_noise_to_kernel_matrix(K, 0.25)
        self.assertTrue(gnp.array_equal(K, 0.25 * gnp.eye(3)))


class TestRegressionVectors(unittest.TestCase):

    def test_solution(self):
        samples, labels = training_data()
        kernel = GaussianKernel(0.5)
        A, C = solver.compute_regression_vectors(kernel, samples, labels, 0.01)
        K = solver.regularized_kernel_matrix(kernel, samples, 0.01)
        Y = gnp.vstack(labels)
        self.assertEqual(A.shape, (12, 2))
        self.assertEqual(C.shape, (12, 12))
        self.assertTrue(gnp.allclose(gnp.matmul(K, A), Y, atol=1e-8))

    def test_all_methods_give_same_vectors(self):
        samples, labels = training_data()
        kernel = GaussianKernel(0.5)
        A_ref, _ = solver.compute_regression_vectors(kernel, samples, labels, 0.01)
        for method in InversionMethod:
            A, _ = solver.compute_regression_vectors(kernel, samples, labels, 0.01, method)
            self.assertTrue(gnp.allclose(A, A_ref, rtol=1e-7, atol=1e-9), msg=method.value)

    def test_trace_messages(self):
        samples, labels = training_data(n=3)
        messages = []
        solver.compute_regression_vectors(
            GaussianKernel(1.0), samples, labels, 0.1, trace=messages.append
        )
        self.assertTrue(any("regression vectors" in m for m in messages))

    def test_no_samples(self):
        with self.assertRaises(NotInitializedError):
            solver.compute_regression_vectors(GaussianKernel(1.0), [], [], 0.1)
        with self.assertRaises(NotInitializedError):
            solver.core_matrix(GaussianKernel(1.0), [], 0.1)

    def test_logdet(self):
        samples, _ = training_data()
        kernel = GaussianKernel(0.5)
        C, logdet = solver.core_matrix_with_logdet(kernel, samples, 0.01)
        K = solver.regularized_kernel_matrix(kernel, samples, 0.01)
        sign, expected = numpy.linalg.slogdet(K)
        self.assertEqual(sign, 1.0)
        self.assertAlmostEqual(logdet, expected, places=8)
        self.assertTrue(gnp.allclose(gnp.matmul(C, K), gnp.eye(12), atol=1e-8))


if __name__ == "__main__":
    unittest.main()
