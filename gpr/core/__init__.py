# gpr/core/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------

"""
Core components of the gpr package.

This subpackage contains the regression engine: sample storage, kernel
matrix construction, regression solver with selectable inversion
methods, prediction, persistence and model comparison.

Public API
----------
GaussianProcess : class
    Main Gaussian Process model façade combining all core routines.
GaussianProcessFloat, GaussianProcessDouble : class
    Single and double precision variants.
InversionMethod : enum
    Inversion methods of the regression solver.
ModelState : enum
    DIRTY / READY lifecycle of a model.
"""

from .model import GaussianProcess, GaussianProcessFloat, GaussianProcessDouble, ModelState
from .solver import InversionMethod
from . import internals

__all__ = [
    "GaussianProcess",
    "GaussianProcessFloat",
    "GaussianProcessDouble",
    "InversionMethod",
    "ModelState",
    "internals",
]
