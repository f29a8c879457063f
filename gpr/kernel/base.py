# gpr/kernel/base.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Kernel contract consumed by `gpr.core`.

A kernel is a symmetric positive (semi-)definite function k(x, y) of two
vectors, described by a name (used as a type tag on disk) and an ordered
tuple of scalar parameters.
"""
from abc import ABC, abstractmethod
from typing import Tuple


class Kernel(ABC):
    """Abstract base class for kernels.

    Subclasses implement `evaluate` and `parameters`. Two kernels are
    equal when they have the same type and identical parameters.
    """

    @abstractmethod
    def evaluate(self, x, y) -> float:
        """Return k(x, y) for two 1D arrays of the same length."""

    @property
    @abstractmethod
    def parameters(self) -> Tuple[float, ...]:
        """Ordered kernel parameters, as written to the parameter file."""

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def __call__(self, x, y) -> float:
        return self.evaluate(x, y)

    def __eq__(self, other):
        if not isinstance(other, Kernel):
            return NotImplemented
        return type(self) is type(other) and self.parameters == other.parameters

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash((self.name, self.parameters))

    def __repr__(self):
        params = ", ".join(repr(p) for p in self.parameters)
        return f"{self.name}({params})"
