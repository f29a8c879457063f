# gpr/core/equality.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Strict value equality of two Gaussian process models.

No tolerance is applied: the comparison is meant to check that a model
saved and loaded again is the same model.
"""
import gpr.num as gnp
from gpr.config import get_logger

_logger = get_logger()


def _matrices_equal(a, b):
    if a is None or b is None:
        return a is None and b is None
    if a.shape != b.shape:
        return False
    return a.size == 0 or gnp.norm(a - b) == 0


def _vector_lists_equal(u, v):
    if len(u) != len(v):
        return False
    return all(ui.shape == vi.shape and gnp.norm(ui - vi) == 0 for ui, vi in zip(u, v))


def first_difference(a, b):
    """Name of the first field in which models a and b differ, or None.

    Fields are compared in this order: regression vectors, sample
    vectors, label vectors, kernel, sigma, state, input dimension,
    output dimension, debug flag, and finally the core matrices when
    both models keep one.
    """
    if not _matrices_equal(a._regression_vectors, b._regression_vectors):
        return "regression vectors"
    if not _vector_lists_equal(a._store.samples, b._store.samples):
        return "sample vectors"
    if not _vector_lists_equal(a._store.labels, b._store.labels):
        return "label vectors"
    if a.kernel != b.kernel:
        return "kernel"
    if a.sigma != b.sigma:
        return "sigma"
    if a.state != b.state:
        return "initialization state"
    if a.input_dimension != b.input_dimension:
        return "input dimension"
    if a.output_dimension != b.output_dimension:
        return "output dimension"
    if a.debug != b.debug:
        return "debug state"
    if a._core_matrix is not None and b._core_matrix is not None:
        if not _matrices_equal(a._core_matrix, b._core_matrix):
            return "core matrix"
    return None


def models_equal(a, b):
    """Return True if models a and b hold the same values."""
    diff = first_difference(a, b)
    if diff is None:
        _logger.debug("GaussianProcess comparison: is equal")
        return True
    _logger.debug("GaussianProcess comparison: %s not equal", diff)
    return False
