# gpr/core/prediction.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Posterior mean, derivative and posterior covariance of a trained model.

This module contains the numerical routines used by
`gpr.core.GaussianProcess` at prediction time. Every entry point first
brings the model to the READY state (training it if needed) and checks
the dimension of the query points.

Functions
---------
predict(model, x)
    Posterior mean at x, shape (d_out,).
predict_derivative(model, x)
    Posterior mean at x and its derivative, shape (d_in, d_out).
posterior_covariance(model, x, y)
    k(x, y) - Kx^T C Ky, with C = inv(K + sigma I).
credible_interval(model, x)
    Half-width of the 95% credible interval at x.
"""
import gpr.num as gnp
from gpr.errors import DimensionMismatchError
from . import gram
from . import solver
from .samples import check_input_dimension

CREDIBLE_INTERVAL_FACTOR = 1.96


def _prepare_input(model, x, msg_prefix):
    x = gnp.asvector(x, model.dtype)
    if x.ndim != 1:
        raise DimensionMismatchError(f"{msg_prefix}x must be a vector, got shape {x.shape}")
    check_input_dimension(x, model.input_dimension, msg_prefix)
    return x


def _kernel_vector(model, x):
    return gram.kernel_vector(model.kernel, x, model._store.samples, model.dtype)


def _core(model):
    """Core matrix of the model; recomputed (not cached) when it was dropped."""
    if model._core_matrix is not None:
        return model._core_matrix
    return solver.core_matrix(
        model.kernel,
        model._store.samples,
        model.sigma,
        model.inversion_method,
        model.dtype,
    )


# --------------------------------------------------------------------------
# Public entry points
# --------------------------------------------------------------------------
def predict(model, x):
    """Posterior mean at x.

    Parameters
    ----------
    model : gpr.core.GaussianProcess
    x : array_like, shape (d_in,)

    Returns
    -------
    ndarray, shape (d_out,)
        Kx^T A, with A the regression vectors.
    """
    model.initialize()
    x = _prepare_input(model, x, "GaussianProcess.predict: ")
    Kx = _kernel_vector(model, x)
    return gnp.matmul(Kx, model._regression_vectors)


def predict_derivative(model, x):
    """Posterior mean at x and its derivative with respect to x.

    With X the difference matrix (rows x - x_i), column c of the
    derivative is -X^T (Kx * A[:, c]). This is the derivative of the mean
    for kernels whose gradient in the first argument is proportional to
    -(x - x_i) k(x, x_i).

    Returns
    -------
    prediction : ndarray, shape (d_out,)
    D : ndarray, shape (d_in, d_out)
    """
    model.initialize()
    x = _prepare_input(model, x, "GaussianProcess.predict_derivative: ")
    Kx = _kernel_vector(model, x)
    X = gram.difference_matrix(x, model._store.samples)
    A = model._regression_vectors

    D = -gnp.matmul(X.T, Kx[:, None] * A)
    return gnp.matmul(Kx, A), D


def posterior_covariance(model, x, y):
    """Scalar product of x and y in the RKHS of the trained process.

    .. math::
        k(x, y) - K_x^T (K + \\sigma I)^{-1} K_y
    """
    model.initialize()
    x = _prepare_input(model, x, "GaussianProcess.posterior_covariance: ")
    y = _prepare_input(model, y, "GaussianProcess.posterior_covariance: ")
    C = _core(model)
    Kx = _kernel_vector(model, x)
    Ky = Kx if y is x else _kernel_vector(model, y)
    return model.kernel(x, y) - float(gnp.matmul(Kx, gnp.matmul(C, Ky)))


def credible_interval(model, x):
    """Half-width of the 95% credible interval of the posterior at x.

    Negative posterior variances caused by rounding are clipped to zero.
    """
    variance = posterior_covariance(model, x, x)
    return CREDIBLE_INTERVAL_FACTOR * float(gnp.sqrt(max(variance, 0.0)))
