# gpr/core/persistence.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Saving and loading a trained model.

A model saved under the path prefix P is made of four text files:

- ``P-RegressionVectors.txt``: regression vectors, (n, d_out)
- ``P-SampleVectors.txt``: input vectors as columns, (d_in, n)
- ``P-LabelVectors.txt``: output vectors as columns, (d_out, n)
- ``P-ParameterFile.txt``: a single line
  ``<kernel name> <number of kernel parameters> <kernel parameters...>
  <sigma> <input dimension> <output dimension> <debug 0|1>``

Loading parses all four files into a `SavedState` before anything is
written to the target model, so that a failure leaves it untouched.
The inversion method and the efficient-storage flag are runtime
settings and are not saved.
"""
import math
from dataclasses import dataclass
from typing import Any

from gpr.errors import PersistenceCorruptError, UnknownKernelError
from gpr.kernel import make_kernel
from gpr.misc.matrixio import check_file, read_matrix, write_matrix
from .samples import SampleStore

REGRESSION_VECTORS_SUFFIX = "-RegressionVectors.txt"
SAMPLE_VECTORS_SUFFIX = "-SampleVectors.txt"
LABEL_VECTORS_SUFFIX = "-LabelVectors.txt"
PARAMETER_FILE_SUFFIX = "-ParameterFile.txt"

_PARAMETER_FORMAT = "%.17g"


def filenames(prefix):
    """The four filenames of a model saved under `prefix`, in loading order."""
    return (
        prefix + REGRESSION_VECTORS_SUFFIX,
        prefix + SAMPLE_VECTORS_SUFFIX,
        prefix + LABEL_VECTORS_SUFFIX,
        prefix + PARAMETER_FILE_SUFFIX,
    )


@dataclass
class SavedState:
    """Everything read back from a saved model."""

    kernel: Any
    sigma: float
    store: SampleStore
    regression_vectors: Any
    debug: bool


@dataclass
class _Parameters:
    kernel_name: str
    kernel_parameters: list
    sigma: float
    input_dimension: int
    output_dimension: int
    debug: bool


# ----------------------------------------------------------------------
# Save
# ----------------------------------------------------------------------
def format_parameter_line(kernel, sigma, input_dimension, output_dimension, debug):
    params = list(kernel.parameters)
    fields = [kernel.name, str(len(params))]
    fields += [_PARAMETER_FORMAT % p for p in params]
    fields += [
        _PARAMETER_FORMAT % sigma,
        str(int(input_dimension)),
        str(int(output_dimension)),
        "1" if debug else "0",
    ]
    return " ".join(fields)


def save(model, prefix):
    """Write `model` under `prefix`. Trains the model first if needed.

    Raises
    ------
    NotInitializedError
        If the model has no samples.
    """
    model.initialize()
    rv_filename, sv_filename, lv_filename, pf_filename = filenames(prefix)
    model._trace(f"writing gaussian process: {rv_filename}, {sv_filename}, {lv_filename}, {pf_filename}")

    write_matrix(model._regression_vectors, rv_filename)
    write_matrix(model._store.input_matrix(), sv_filename)
    write_matrix(model._store.label_columns(), lv_filename)

    line = format_parameter_line(
        model.kernel,
        model.sigma,
        model.input_dimension,
        model.output_dimension,
        model.debug,
    )
    with open(pf_filename, "w") as f:
        f.write(line + "\n")


# ----------------------------------------------------------------------
# Load
# ----------------------------------------------------------------------
def _parse_int(token, what, filename):
    try:
        value = int(token)
    except ValueError:
        raise PersistenceCorruptError(
            f"{filename}: {what} '{token}' is not an integer"
        ) from None
    if value < 0:
        raise PersistenceCorruptError(f"{filename}: {what} is negative")
    return value


def _parse_float(token, what, filename):
    try:
        return float(token)
    except ValueError:
        raise PersistenceCorruptError(
            f"{filename}: {what} '{token}' is not a number"
        ) from None


def parse_parameter_line(line, filename="parameter file"):
    """Parse the single line of a parameter file.

    Raises
    ------
    PersistenceCorruptError
        If fields are missing, unparsable, or in excess, or if sigma is
        negative or not finite.
    """
    tokens = line.split()
    if len(tokens) < 2:
        raise PersistenceCorruptError(f"{filename}: parameter file is corrupt")
    kernel_name = tokens[0]
    count = _parse_int(tokens[1], "number of kernel parameters", filename)
    expected = 2 + count + 4
    if len(tokens) != expected:
        raise PersistenceCorruptError(
            f"{filename}: parameter file is corrupt "
            f"(expected {expected} fields, found {len(tokens)})"
        )
    kernel_parameters = [
        _parse_float(t, "kernel parameter", filename) for t in tokens[2 : 2 + count]
    ]
    sigma_token, din_token, dout_token, debug_token = tokens[2 + count :]
    if debug_token not in ("0", "1"):
        raise PersistenceCorruptError(
            f"{filename}: debug flag '{debug_token}' is not 0 or 1"
        )
    sigma = _parse_float(sigma_token, "sigma", filename)
    if not (math.isfinite(sigma) and sigma >= 0.0):
        raise PersistenceCorruptError(
            f"{filename}: sigma must be finite and non-negative, got {sigma_token}"
        )
    return _Parameters(
        kernel_name=kernel_name,
        kernel_parameters=kernel_parameters,
        sigma=sigma,
        input_dimension=_parse_int(din_token, "input dimension", filename),
        output_dimension=_parse_int(dout_token, "output dimension", filename),
        debug=debug_token == "1",
    )


def read_parameter_file(filename):
    check_file(filename)
    with open(filename, "r") as f:
        line = f.readline()
    return parse_parameter_line(line, filename)


def read_state(prefix, dtype=None, trace=None) -> SavedState:
    """Read a saved model without touching any live model.

    Raises
    ------
    PersistenceMissingError
        If one of the files is absent or is a directory.
    PersistenceCorruptError
        If a file cannot be parsed or the files are inconsistent.
    UnknownKernelError
        If the kernel name is unknown or has the wrong parameter count.
    """
    rv_filename, sv_filename, lv_filename, pf_filename = filenames(prefix)
    if trace is not None:
        trace(f"loading gaussian process: {rv_filename}, {sv_filename}, {lv_filename}, {pf_filename}")

    A = read_matrix(rv_filename, dtype)
    X = read_matrix(sv_filename, dtype)
    Y = read_matrix(lv_filename, dtype)
    params = read_parameter_file(pf_filename)

    try:
        kernel = make_kernel(params.kernel_name, params.kernel_parameters)
    except UnknownKernelError:
        raise
    except ValueError as e:
        raise PersistenceCorruptError(f"{pf_filename}: {e}") from e

    n = X.shape[1]
    if X.shape[0] != params.input_dimension:
        raise PersistenceCorruptError(
            f"{sv_filename}: {X.shape[0]} rows, input dimension is {params.input_dimension}"
        )
    if Y.shape != (params.output_dimension, n):
        raise PersistenceCorruptError(
            f"{lv_filename}: shape {Y.shape}, expected ({params.output_dimension}, {n})"
        )
    if A.shape != (n, params.output_dimension):
        raise PersistenceCorruptError(
            f"{rv_filename}: shape {A.shape}, expected ({n}, {params.output_dimension})"
        )

    return SavedState(
        kernel=kernel,
        sigma=params.sigma,
        store=SampleStore.from_columns(X, Y, dtype),
        regression_vectors=A,
        debug=params.debug,
    )


def load(model, prefix):
    """Replace the state of `model` by the model saved under `prefix`.

    The model is left unchanged if loading fails.
    """
    state = read_state(prefix, model.dtype, trace=model._trace)
    model._restore(state)
