# gpr/core/solver.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Regression step of the Gaussian process.

The regression vectors solve (K + sigma I) A = Y, where K is the Gram
matrix of the samples and Y the label matrix. The inverse of K + sigma I
("core matrix") is computed with one of several methods, which trade
speed for numerical stability:

- FULL_PIVOT_LU: LU factorization with pivoting. Fastest, but on
  ill-conditioned Gram matrices the inverse may lose symmetry and
  positive definiteness, which shows up as inconsistent predictions.
- JACOBI_SVD: SVD (LAPACK gesvd). Most accurate, too slow for large
  problems.
- BDC_SVD: divide-and-conquer SVD (LAPACK gesdd). Accurate, faster
  than JACOBI_SVD but still slower than LU.
- SELF_ADJOINT_EIGEN_SOLVER: exploits symmetry (Cholesky, falling back
  to a symmetric eigendecomposition). Good for medium sized problems.

The method is a performance knob: it does not change the definition of
the result.
"""
from enum import Enum

import gpr.num as gnp
from gpr.errors import NotInitializedError
from . import gram


class InversionMethod(str, Enum):
    FULL_PIVOT_LU = "full_pivot_lu"
    JACOBI_SVD = "jacobi_svd"
    BDC_SVD = "bdc_svd"
    SELF_ADJOINT_EIGEN_SOLVER = "self_adjoint_eigen_solver"


def invert_kernel_matrix(K, method=InversionMethod.FULL_PIVOT_LU):
    """Return the inverse of the square matrix K using `method`.

    Parameters
    ----------
    K : ndarray, shape (n, n)
    method : InversionMethod or str

    Raises
    ------
    numpy.linalg.LinAlgError
        If K is singular.
    """
    method = InversionMethod(method)
    if method is InversionMethod.FULL_PIVOT_LU:
        return gnp.lu_inv(K)
    if method is InversionMethod.JACOBI_SVD:
        return gnp.svd_inv(K, driver="gesvd")
    if method is InversionMethod.BDC_SVD:
        return gnp.svd_inv(K, driver="gesdd")
    return gnp.eigh_inv(K)


def add_noise_to_kernel_matrix(K, sigma):
    """Add sigma to each diagonal entry of K, in place."""
    idx = gnp.arange(K.shape[0])
    K[idx, idx] += sigma
    return K


def regularized_kernel_matrix(kernel, samples, sigma, dtype=None, n_jobs=None):
    """K + sigma I over `samples`."""
    K = gram.kernel_matrix(kernel, samples, dtype, n_jobs)
    return add_noise_to_kernel_matrix(K, sigma)


def core_matrix(kernel, samples, sigma, method=InversionMethod.FULL_PIVOT_LU, dtype=None):
    """Return C = inv(K + sigma I)."""
    if len(samples) == 0:
        raise NotInitializedError("core_matrix: no input samples defined.")
    K = regularized_kernel_matrix(kernel, samples, sigma, dtype)
    return invert_kernel_matrix(K, method)


def core_matrix_with_logdet(
    kernel, samples, sigma, method=InversionMethod.FULL_PIVOT_LU, dtype=None
):
    """Return (inv(K + sigma I), log det(K + sigma I))."""
    if len(samples) == 0:
        raise NotInitializedError("core_matrix_with_logdet: no input samples defined.")
    K = regularized_kernel_matrix(kernel, samples, sigma, dtype)
    return invert_kernel_matrix(K, method), gnp.logdet(K)


def compute_regression_vectors(
    kernel,
    samples,
    labels,
    sigma,
    method=InversionMethod.FULL_PIVOT_LU,
    dtype=None,
    trace=None,
):
    """Learning step.

    Parameters
    ----------
    kernel : gpr.kernel.Kernel
    samples, labels : list of ndarray
        Input vectors (n of them, dimension d_in) and output vectors
        (n of them, dimension d_out).
    sigma : float
        Observation noise added to the diagonal of the Gram matrix.
    method : InversionMethod
    dtype : numpy.float32 or numpy.float64, optional
    trace : callable, optional
        Progress reporter, called with a message string.

    Returns
    -------
    A : ndarray, shape (n, d_out)
        Regression vectors (one column per output dimension).
    C : ndarray, shape (n, n)
        Core matrix inv(K + sigma I).

    Raises
    ------
    NotInitializedError
        If there are no samples.
    """
    if len(samples) == 0:
        raise NotInitializedError(
            "compute_regression_vectors: no input samples defined during initialization"
        )
    if len(labels) == 0:
        raise NotInitializedError(
            "compute_regression_vectors: no output labels defined during initialization"
        )
    trace = trace or (lambda msg: None)

    trace(f"building kernel matrix ({len(samples)} samples)")
    K = gram.kernel_matrix(kernel, samples, dtype)
    add_noise_to_kernel_matrix(K, sigma)

    Y = gram.label_matrix(labels, dtype)

    trace(f"inverting kernel matrix (inversion method: {InversionMethod(method).value})")
    C = invert_kernel_matrix(K, method)
    A = gnp.matmul(C, Y)
    trace("regression vectors computed")
    return A, C
