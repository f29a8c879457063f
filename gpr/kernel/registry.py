# gpr/kernel/registry.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""Kernels that can be rebuilt from their name and parameters."""
from gpr.errors import UnknownKernelError
from .gaussian import GaussianKernel
from .periodic import PeriodicKernel

# name -> (class, number of parameters)
KERNELS = {
    "GaussianKernel": (GaussianKernel, 2),
    "PeriodicKernel": (PeriodicKernel, 3),
}


def make_kernel(name, parameters):
    """Build a kernel from its type tag and its parameter list.

    Raises
    ------
    UnknownKernelError
        If `name` is not registered, or if the number of parameters does
        not match the registered kernel.
    """
    try:
        cls, count = KERNELS[name]
    except KeyError:
        raise UnknownKernelError(f"kernel '{name}' not recognized") from None
    if len(parameters) != count:
        raise UnknownKernelError(
            f"{name} expects {count} parameters, {len(parameters)} given"
        )
    return cls(*[float(p) for p in parameters])
