# gpr/num/numpy_backend.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""NumPy numerical backend for gpr.

This module defines the NumPy/SciPy implementation of the gpr.num API:
dtype-aware array constructors, the matrix inversion drivers selected
by `gpr.core.solver`, and a seeded random generator for tests and
examples.
"""

from typing import Any, Optional

from gpr.config import get_logger, normalize_dtype

ArrayLike = Any

_logger = get_logger()


# -----------------------------------------------------
#
#                      NUMPY
#
# -----------------------------------------------------

import numpy
from numpy import (
    array_equal,
    allclose,
    vstack,
    stack,
    diag,
    arange,
    sqrt,
    exp,
    sin,
    pi,
    einsum,
    matmul,
    trace,
    float32,
    float64,
)
from numpy.linalg import norm, LinAlgError
import scipy.linalg

# ..................................................


def asarray(x, dtype=None):
    return numpy.asarray(x, dtype=normalize_dtype(dtype))


def asvector(x, dtype=None):
    """Return x as a 1D array; scalars become vectors of length 1."""
    return numpy.atleast_1d(numpy.asarray(x, dtype=normalize_dtype(dtype)))


def empty(shape, dtype=None):
    return numpy.empty(shape, dtype=normalize_dtype(dtype))


def zeros(shape, dtype=None):
    return numpy.zeros(shape, dtype=normalize_dtype(dtype))


def ones(shape, dtype=None):
    return numpy.ones(shape, dtype=normalize_dtype(dtype))


def eye(n, dtype=None):
    return numpy.eye(n, dtype=normalize_dtype(dtype))


def linspace(start, stop, num=50, dtype=None):
    return numpy.linspace(start, stop, num=num, dtype=normalize_dtype(dtype))


def to_scalar(x):
    return x.item()



def float_format(dtype=None):
    """printf-style format that round-trips a value of the given precision."""
    if normalize_dtype(dtype) is float32:
        return "%.9g"
    return "%.17g"


# ..................................................
#
# Inversion drivers. All of them return the inverse of a square matrix A
# in the dtype of A and raise LinAlgError when A is singular.


def lu_inv(A):
    """Inverse through an LU factorization with pivoting (LAPACK getrf/getri)."""
    return scipy.linalg.inv(A, check_finite=True)


def svd_inv(A, driver="gesvd"):
    """Inverse through a singular value decomposition.

    Parameters
    ----------
    A : ndarray, shape (n, n)
    driver : {'gesvd', 'gesdd'}
        LAPACK driver. 'gesvd' is the slow and most accurate one-sided
        Jacobi-like path, 'gesdd' the divide-and-conquer bidiagonal one.

    Returns
    -------
    ndarray, shape (n, n)
        V diag(1/s) U^T
    """
    U, s, Vt = scipy.linalg.svd(A, full_matrices=False, lapack_driver=driver)
    if numpy.any(s == 0.0):
        raise LinAlgError("singular matrix: zero singular value")
    return matmul(Vt.T * (1.0 / s), U.T)


def eigh_inv(A):
    """Inverse of a symmetric matrix.

    A Cholesky inverse is tried first; if A is not positive definite the
    eigendecomposition A = V diag(w) V^T is used instead, giving
    V diag(1/w) V^T.
    """
    n = A.shape[0]
    try:
        c, lower = scipy.linalg.cho_factor(A, lower=True)
        return scipy.linalg.cho_solve((c, lower), numpy.eye(n, dtype=A.dtype))
    except LinAlgError:
        pass
    w, V = scipy.linalg.eigh(A)
    if numpy.any(w < 0.0):
        _logger.warning(
            "eigh_inv: matrix has %d negative eigenvalue(s), smallest %g",
            int(numpy.sum(w < 0.0)),
            float(w[0]),
        )
    if numpy.any(w == 0.0):
        raise LinAlgError("singular matrix: zero eigenvalue")
    return matmul(V * (1.0 / w), V.T)


def logdet(A):
    """log |det(A)|, raising LinAlgError when det(A) <= 0."""
    sign, logabsdet = numpy.linalg.slogdet(A)
    if sign <= 0:
        raise LinAlgError(
            "Matrix is not positive definite (or has non-positive determinant)."
        )
    return logabsdet


# ..................................................

# Build one global RNG (or let the user set the seed somewhere):
_np_rng = numpy.random.default_rng(seed=1234)


def set_seed(seed: int) -> None:
    """Set the global NumPy generator seed."""
    global _np_rng
    _np_rng = numpy.random.default_rng(seed=seed)


def rand(*shape: int, dtype: Optional[Any] = None) -> ArrayLike:
    return _np_rng.random(shape).astype(normalize_dtype(dtype), copy=False)


def randn(*shape: int, dtype: Optional[Any] = None) -> ArrayLike:
    return _np_rng.normal(loc=0, scale=1, size=shape).astype(
        normalize_dtype(dtype), copy=False
    )
