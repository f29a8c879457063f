# gpr/errors.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Exceptions raised by gpr.

Each class also derives from the closest builtin exception so that
callers catching ``ValueError`` or ``FileNotFoundError`` keep working.
"""


class GPRError(Exception):
    """Base class of all gpr failures."""


class DimensionMismatchError(GPRError, ValueError):
    """A vector does not match the input/output dimension locked by the model."""


class PreconditionViolationError(GPRError, RuntimeError):
    """An operation was called in a state where it is not allowed."""


class NotInitializedError(PreconditionViolationError):
    """Trained coefficients are required but the model has no training data."""


class PersistenceMissingError(GPRError, FileNotFoundError):
    """A file required to load a model is absent or is a directory."""


class PersistenceCorruptError(GPRError, ValueError):
    """A persisted file cannot be parsed."""


class UnknownKernelError(GPRError, ValueError):
    """Kernel name not recognized, or wrong parameter count for a known kernel."""
