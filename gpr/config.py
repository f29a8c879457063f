# gpr/config.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
import os
import logging

import numpy

# Read version from VERSION file
_version_file = os.path.join(os.path.dirname(__file__), "..", "VERSION")
try:
    with open(os.path.abspath(_version_file), "r") as f:
        __version__ = f.read().strip()
except FileNotFoundError:
    __version__ = "0.0.0"

_DTYPES = {
    "float32": numpy.float32,
    "float64": numpy.float64,
}


def normalize_dtype(dtype):
    """Return numpy.float32 or numpy.float64 for a dtype given as a type, a string or None."""
    if dtype is None:
        return _config.dtype
    if isinstance(dtype, str):
        try:
            return _DTYPES[dtype]
        except KeyError:
            raise ValueError(f"Unsupported dtype '{dtype}', use 'float32' or 'float64'") from None
    resolved = numpy.dtype(dtype).type
    if resolved not in (numpy.float32, numpy.float64):
        raise ValueError(f"Unsupported dtype {dtype!r}, use float32 or float64")
    return resolved


class _GPRConfig:
    def __init__(self):
        self.version = __version__
        self.dtype = _DTYPES.get(os.environ.get("GPR_DTYPE", "float64"), numpy.float64)
        self.n_jobs = int(os.environ.get("GPR_N_JOBS", "-1"))
        # below this many rows, kernel evaluations stay in the caller's thread
        self.parallel_threshold = 256
        self.inversion_method = "full_pivot_lu"
        # logger lives in config
        self.logger = logging.getLogger("gpr")
        if not self.logger.handlers:
            h = logging.StreamHandler()
            h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
            self.logger.addHandler(h)
        self.logger.setLevel(logging.INFO)

    def __str__(self):
        return (
            f"GPRConfig("
            f"version={self.version}, "
            f"dtype={numpy.dtype(self.dtype).name}, "
            f"n_jobs={self.n_jobs}, "
            f"parallel_threshold={self.parallel_threshold}, "
            f"inversion_method={self.inversion_method})"
        )

    def __repr__(self):
        return (
            f"<GPRConfig "
            f"version={self.version!r}, "
            f"dtype={self.dtype!r}, "
            f"n_jobs={self.n_jobs!r}, "
            f"parallel_threshold={self.parallel_threshold!r}, "
            f"inversion_method={self.inversion_method!r}>"
        )

    def update(self, **kwargs):
        for k, v in kwargs.items():
            if not hasattr(self, k):
                raise AttributeError(f"Unknown configuration entry '{k}'")
            setattr(self, k, v)
        return self


_config = _GPRConfig()


def get_config():
    return _config


def set_dtype(dtype):
    """Set the default floating-point precision of new models."""
    _config.dtype = normalize_dtype(dtype)


def set_n_jobs(n_jobs: int):
    """Set the number of workers used for kernel evaluations (-1: all cores)."""
    if n_jobs == 0:
        raise ValueError("n_jobs must be a non-zero integer")
    _config.n_jobs = int(n_jobs)


def get_logger():
    return _config.logger


def set_log_level(level):
    _config.logger.setLevel(level)
