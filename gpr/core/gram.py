# gpr/core/gram.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Kernel evaluations over the stored samples.

Functions
---------
kernel_matrix(kernel, samples, dtype=None, n_jobs=None)
    Gram matrix K_ij = k(x_i, x_j).
kernel_matrix_trace(kernel, samples)
    sum_i k(x_i, x_i).
label_matrix(labels, dtype=None)
    Outputs stacked as rows.
kernel_vector(kernel, x, samples, dtype=None, n_jobs=None)
    Kx_i = k(x, x_i).
difference_matrix(x, samples)
    Rows x - x_i.
"""
import gpr.num as gnp
from gpr.errors import NotInitializedError
from .parallel import parallel_map


def kernel_matrix(kernel, samples, dtype=None, n_jobs=None):
    """Compute the Gram matrix of `kernel` over `samples`.

    The kernel is symmetric, so only the upper triangle (j >= i) is
    evaluated; each value is mirrored to the lower triangle, which makes
    the result exactly symmetric. Rows of the upper triangle are
    independent and are distributed over workers.

    Parameters
    ----------
    kernel : gpr.kernel.Kernel
    samples : list of ndarray, each of shape (d,)
    dtype : numpy.float32 or numpy.float64, optional
    n_jobs : int, optional
        Number of workers, defaults to the configured value.

    Returns
    -------
    K : ndarray, shape (n, n)
    """
    n = len(samples)
    K = gnp.empty((n, n), dtype)

    def upper_row(i):
        xi = samples[i]
        return [kernel(xi, samples[j]) for j in range(i, n)]

    rows = parallel_map(upper_row, range(n), n_jobs)
    for i, row in enumerate(rows):
        v = gnp.asarray(row, K.dtype)
        K[i, i:] = v
        K[i:, i] = v
    return K


def kernel_matrix_trace(kernel, samples):
    """Return sum_i k(x_i, x_i)."""
    return sum(kernel(x, x) for x in samples)


def label_matrix(labels, dtype=None):
    """Stack the label vectors as the rows of an (n, d_out) matrix."""
    if len(labels) == 0:
        raise NotInitializedError(
            "label_matrix: no output labels defined during computation of the regression vectors."
        )
    return gnp.asarray(gnp.vstack(labels), dtype)


def kernel_vector(kernel, x, samples, dtype=None, n_jobs=None):
    """Return the vector Kx with Kx[i] = k(x, x_i), shape (n,)."""
    values = parallel_map(lambda xi: kernel(x, xi), samples, n_jobs)
    return gnp.asarray(values, dtype).reshape(-1)


def difference_matrix(x, samples):
    """Return X with rows X[i] = x - x_i, shape (n, d)."""
    if len(samples) == 0:
        return gnp.zeros((0, x.shape[0]), x.dtype.type)
    return x[None, :] - gnp.vstack(samples)
