# gpr/kernel/gaussian.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
import math

import gpr.num as gnp
from .base import Kernel


class GaussianKernel(Kernel):
    """Gaussian (squared exponential) kernel.

    .. math::
        k(x, y) = s \\exp\\left(-\\frac{\\|x - y\\|^2}{2\\sigma^2}\\right)

    Parameters
    ----------
    sigma : float
        Length scale :math:`\\sigma > 0`.
    scale : float, optional
        Signal variance :math:`s`, default 1.
    """

    def __init__(self, sigma: float, scale: float = 1.0):
        if not (math.isfinite(sigma) and math.isfinite(scale)):
            raise ValueError("GaussianKernel: parameters must be finite")
        if sigma <= 0:
            raise ValueError("GaussianKernel: sigma must be positive")
        self.sigma = float(sigma)
        self.scale = float(scale)
        self._sigma2 = self.sigma * self.sigma

    @property
    def parameters(self):
        return (self.sigma, self.scale)

    def evaluate(self, x, y):
        d = x - y
        r2 = gnp.einsum("i,i->", d, d)
        return self.scale * float(gnp.exp(-0.5 * r2 / self._sigma2))
