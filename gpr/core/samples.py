# gpr/core/samples.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Ordered storage of (input, output) vector pairs.

The first pair added fixes the input and output dimensions; every later
pair must match them. Index i refers to the i-th pair added, for both
inputs and outputs.
"""
from typing import Iterator, List, Tuple

import gpr.num as gnp
from gpr.errors import DimensionMismatchError


def check_input_dimension(x, input_dimension, msg_prefix=""):
    if x.shape[0] != input_dimension:
        raise DimensionMismatchError(
            f"{msg_prefix}dimension of input vector ({x.shape[0]}) does not "
            f"correspond to the input dimension ({input_dimension})."
        )


def check_output_dimension(y, output_dimension, msg_prefix=""):
    if y.shape[0] != output_dimension:
        raise DimensionMismatchError(
            f"{msg_prefix}dimension of output vector ({y.shape[0]}) does not "
            f"correspond to the output dimension ({output_dimension})."
        )


class SampleStore:
    """Sample vectors and label vectors of a Gaussian process.

    Parameters
    ----------
    dtype : numpy.float32 or numpy.float64, optional
        Precision in which vectors are stored.
    """

    def __init__(self, dtype=None):
        self.dtype = gnp.normalize_dtype(dtype)
        self.samples: List = []
        self.labels: List = []
        self.input_dimension = 0
        self.output_dimension = 0

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[Tuple]:
        return zip(self.samples, self.labels)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(n={len(self)}, "
            f"input_dimension={self.input_dimension}, "
            f"output_dimension={self.output_dimension})"
        )

    def add(self, x, y):
        """Append the pair (x, y).

        Raises
        ------
        DimensionMismatchError
            If x or y does not match the dimensions locked by the first
            pair. The store is left unchanged.
        """
        x = gnp.asvector(x, self.dtype)
        y = gnp.asvector(y, self.dtype)
        if x.ndim != 1 or y.ndim != 1:
            raise DimensionMismatchError(
                f"SampleStore.add: x and y must be vectors, got shapes {x.shape} and {y.shape}"
            )
        if len(self.samples) == 0:
            # first pair defines the dimensionality of input and output spaces
            input_dimension, output_dimension = x.shape[0], y.shape[0]
        else:
            input_dimension, output_dimension = self.input_dimension, self.output_dimension
        check_input_dimension(x, input_dimension, "SampleStore.add: ")
        check_output_dimension(y, output_dimension, "SampleStore.add: ")

        self.input_dimension = input_dimension
        self.output_dimension = output_dimension
        self.samples.append(x.copy())
        self.labels.append(y.copy())

    def input_matrix(self):
        """Return the inputs as columns, shape (input_dimension, n)."""
        return gnp.stack(self.samples, axis=1)

    def label_columns(self):
        """Return the outputs as columns, shape (output_dimension, n)."""
        return gnp.stack(self.labels, axis=1)

    @classmethod
    def from_columns(cls, X, Y, dtype=None):
        """Build a store from column matrices X (d_in, n) and Y (d_out, n).

        The dimensions are taken from the row counts of X and Y, even
        when n is zero.
        """
        if X.shape[1] != Y.shape[1]:
            raise DimensionMismatchError(
                f"SampleStore.from_columns: {X.shape[1]} samples but {Y.shape[1]} labels"
            )
        store = cls(dtype)
        store.samples = [gnp.asarray(X[:, i], store.dtype).copy() for i in range(X.shape[1])]
        store.labels = [gnp.asarray(Y[:, i], store.dtype).copy() for i in range(Y.shape[1])]
        store.input_dimension = X.shape[0]
        store.output_dimension = Y.shape[0]
        return store
