# gpr/kernel/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Kernels used by the Gaussian process engine.

Modules
-------
base
    Abstract `Kernel` contract (evaluation, name, parameters, equality).
gaussian
    Gaussian (squared exponential) kernel.
periodic
    Periodic kernel.
registry
    Name -> kernel mapping used when loading a saved model.

Public API
-----------
Kernel, GaussianKernel, PeriodicKernel, KERNELS, make_kernel
"""

from .base import Kernel
from .gaussian import GaussianKernel
from .periodic import PeriodicKernel
from .registry import KERNELS, make_kernel

__all__ = [
    "Kernel",
    "GaussianKernel",
    "PeriodicKernel",
    "KERNELS",
    "make_kernel",
]
