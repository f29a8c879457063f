# gpr/kernel/periodic.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
import math

import gpr.num as gnp
from .base import Kernel


class PeriodicKernel(Kernel):
    """Periodic kernel.

    .. math::
        k(x, y) = s \\exp\\left(-\\frac{2}{\\sigma^2}
                  \\sum_j \\sin^2\\left(\\frac{\\pi (x_j - y_j)}{p}\\right)\\right)

    Parameters
    ----------
    scale : float
        Signal variance :math:`s`.
    period : float
        Period :math:`p > 0`.
    sigma : float
        Length scale :math:`\\sigma > 0`.
    """

    def __init__(self, scale: float, period: float, sigma: float):
        if not all(math.isfinite(p) for p in (scale, period, sigma)):
            raise ValueError("PeriodicKernel: parameters must be finite")
        if period <= 0 or sigma <= 0:
            raise ValueError("PeriodicKernel: period and sigma must be positive")
        self.scale = float(scale)
        self.period = float(period)
        self.sigma = float(sigma)
        self._sigma2 = self.sigma * self.sigma

    @property
    def parameters(self):
        return (self.scale, self.period, self.sigma)

    def evaluate(self, x, y):
        s = gnp.sin(gnp.pi * (x - y) / self.period)
        return self.scale * float(gnp.exp(-2.0 * gnp.einsum("i,i->", s, s) / self._sigma2))
