# coding: utf-8
## --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022, CentraleSupelec
# License: GPLv3 (see LICENSE)
## --------------------------------------------------------------
import numpy as np


def twobumps(x):
    """
    Computes the response Z of the TwoBumps function at X.

    The TwoBumps function is defined as:

       TwoBumps(x) = - (0.7x + sin(5x + 1) + 0.1 sin(10x))

    Parameters
    ----------
    x : numpy.ndarray
        Input array of shape (n,) or (n, 1)

    Returns
    -------
    numpy.ndarray
        Output array of shape (n,)
    """
    x = np.asarray(x).reshape([-1])
    z = -(0.7 * x + (np.sin(5 * x + 1)) + 0.1 * (np.sin(10 * x)))
    return z


def planar_field(x):
    """Two-output smooth function of two inputs.

    .. math::
        f(x) = (\\sin(x_1) \\cos(x_2),\\; x_1 x_2 / 4)

    Parameters
    ----------
    x : numpy.ndarray, shape (n, 2)

    Returns
    -------
    numpy.ndarray, shape (n, 2)
    """
    x = np.atleast_2d(x)
    return np.column_stack(
        (np.sin(x[:, 0]) * np.cos(x[:, 1]), 0.25 * x[:, 0] * x[:, 1])
    )
