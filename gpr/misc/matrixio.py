# gpr/misc/matrixio.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Plain-text matrix files.

One matrix row per line, values separated by a single space, written
with enough digits to be read back bit for bit in the same precision.
"""
import os

import numpy

import gpr.num as gnp
from gpr.errors import PersistenceCorruptError, PersistenceMissingError


def check_file(filename):
    """Raise PersistenceMissingError unless `filename` is an existing regular file."""
    if not os.path.exists(filename) or os.path.isdir(filename):
        raise PersistenceMissingError(f"{filename} does not exist or is a directory.")


def write_matrix(M, filename):
    """Write a 2D array to `filename`.

    Parameters
    ----------
    M : ndarray, shape (r, c)
        float32 or float64 matrix.
    filename : str
    """
    M = numpy.asarray(M)
    if M.ndim != 2:
        raise ValueError(f"write_matrix: expected a 2D array, got shape {M.shape}")
    numpy.savetxt(filename, M, fmt=gnp.float_format(M.dtype.type), delimiter=" ")


def read_matrix(filename, dtype=None):
    """Read a matrix written by `write_matrix`.

    Returns
    -------
    ndarray, shape (r, c)
        Always 2D, also for single-row or single-column files.

    Raises
    ------
    PersistenceMissingError
        If the file is absent or is a directory.
    PersistenceCorruptError
        If the file is empty, ragged, or holds non-numeric values.
    """
    check_file(filename)
    try:
        M = numpy.loadtxt(filename, dtype=gnp.normalize_dtype(dtype), ndmin=2)
    except ValueError as e:
        raise PersistenceCorruptError(f"{filename}: malformed matrix ({e})") from e
    if M.size == 0:
        raise PersistenceCorruptError(f"{filename}: empty matrix file")
    return M
