# gpr/core/internals.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Read access to the matrices of a model, for code that scores or tunes
it (likelihoods, hyperparameter search).

These functions never modify the samples, the kernel or sigma of the
model. `regression_vectors` trains the model if it is DIRTY, like
`GaussianProcess.predict`. Matrices that the model does not cache are
recomputed with the same builders as training.
"""
import gpr.num as gnp
from . import gram
from . import solver


def samples(model):
    """Copies of the input vectors, in insertion order."""
    return [x.copy() for x in model._store.samples]


def labels(model):
    """Copies of the output vectors, in insertion order."""
    return [y.copy() for y in model._store.labels]


def kernel_matrix(model):
    """Gram matrix K over the samples, without noise, shape (n, n)."""
    return gram.kernel_matrix(model.kernel, model._store.samples, model.dtype)


def kernel_matrix_trace(model):
    """sum_i k(x_i, x_i)."""
    return gram.kernel_matrix_trace(model.kernel, model._store.samples)


def label_matrix(model):
    """Outputs stacked as rows, shape (n, d_out)."""
    return gram.label_matrix(model._store.labels, model.dtype)


def core_matrix(model):
    """inv(K + sigma I), shape (n, n).

    The cached matrix is returned (as a copy) when the model is READY and
    keeps it, otherwise it is recomputed.
    """
    if model.is_ready() and model._core_matrix is not None:
        return model._core_matrix.copy()
    return solver.core_matrix(
        model.kernel,
        model._store.samples,
        model.sigma,
        model.inversion_method,
        model.dtype,
    )


def core_matrix_with_logdet(model):
    """(inv(K + sigma I), log det(K + sigma I))."""
    return solver.core_matrix_with_logdet(
        model.kernel,
        model._store.samples,
        model.sigma,
        model.inversion_method,
        model.dtype,
    )


def regression_vectors(model):
    """Regression vectors of the trained model, shape (n, d_out)."""
    model.initialize()
    return gnp.asarray(model._regression_vectors, model.dtype).copy()
