# gpr/core/model.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Gaussian Process model class.
"""
import math
import threading
from contextlib import contextmanager
from enum import Enum

import numpy

from gpr.config import get_config, get_logger, normalize_dtype

from . import equality
from . import persistence
from . import prediction
from . import solver
from .samples import SampleStore
from .solver import InversionMethod

_logger = get_logger()


class ModelState(str, Enum):
    """Lifecycle of a model.

    DIRTY after any change of samples, kernel, sigma or storage mode;
    READY after training. DIRTY -> READY only happens in `initialize`.
    """

    DIRTY = "dirty"
    READY = "ready"


class GaussianProcess:
    """Gaussian Process (GP) regression model.

    Samples (x, y) are added one at a time; x has the input dimension
    d_in and y the output dimension d_out, both fixed by the first
    sample. Training solves (K + sigma I) A = Y for the regression
    vectors A, where K_ij = k(x_i, x_j) and the rows of Y are the
    outputs. The posterior mean at x is then Kx^T A with Kx_i = k(x, x_i).

    Attributes
    ----------
    kernel : gpr.kernel.Kernel
        Kernel of the process. It may be shared with other models;
        assigning a new kernel makes the model DIRTY.
    sigma : float
        Observation noise added to the diagonal of the Gram matrix.
        Assigning it makes the model DIRTY.
    inversion_method : InversionMethod
        Method used to invert K + sigma I (see `gpr.core.solver`).
        It only affects accuracy and speed, and is not saved.
    efficient_storage : bool
        If True, the inverse of K + sigma I is dropped after training,
        keeping O(n d_out) memory instead of O(n^2). Predictions are not
        affected. Assigning it makes the model DIRTY.
    debug : bool
        If True, training, saving and loading report progress through
        the "gpr" logger.
    dtype : numpy.float32 or numpy.float64
        Precision of every stored vector and matrix.

    Public API (methods)
    --------------------
    add_sample
        Append a training pair.
    initialize
        Train the model if it is DIRTY.
    predict
        Posterior mean at x.
    predict_derivative
        Posterior mean at x and its derivative.
    credible_interval
        Half-width of the 95% credible interval at x.
    save, load, from_saved
        Persistence to four text files.
    lock, unlock, locked
        Caller-managed mutual exclusion.

    Thread safety
    -------------
    The model is not internally synchronized. Results are only
    guaranteed for sequential calls, or for concurrent calls that are
    all bracketed by the caller holding the model lock (`lock` /
    `unlock` or `with model.locked():`). The model never takes this
    lock itself, so callers decide how to batch work, e.g. add many
    samples and then train under a single acquisition. Calling
    `add_sample` and `predict` concurrently without the lock is a data
    race.

    Examples
    --------
    >>> from gpr import GaussianProcess
    >>> from gpr.kernel import GaussianKernel
    >>> gp = GaussianProcess(GaussianKernel(1.0, 1.0), sigma=0.01)
    >>> for x, y in [(0.0, 0.0), (1.0, 1.0), (2.0, 4.0)]:
    ...     gp.add_sample([x], [y])
    >>> gp.predict([1.0])
    """

    #: Precision used when no dtype is passed to the constructor
    #: (None: the configured default).
    default_dtype = None

    def __init__(
        self,
        kernel,
        sigma=0.0,
        dtype=None,
        inversion_method=None,
        efficient_storage=False,
        debug=False,
    ):
        """
        Parameters
        ----------
        kernel : gpr.kernel.Kernel
            Kernel of the process.
        sigma : float, optional
            Observation noise, non-negative. Default 0.
        dtype : numpy.float32 or numpy.float64 or str, optional
            Precision; defaults to `default_dtype`, then to the
            configured dtype.
        inversion_method : InversionMethod or str, optional
            Defaults to the configured method (FULL_PIVOT_LU).
        efficient_storage : bool, optional
        debug : bool, optional
        """
        self.dtype = normalize_dtype(dtype if dtype is not None else self.default_dtype)
        self._kernel = kernel
        self._sigma = self._check_sigma(sigma)
        self._store = SampleStore(self.dtype)
        self._regression_vectors = None
        self._core_matrix = None
        self._state = ModelState.DIRTY
        if inversion_method is None:
            inversion_method = get_config().inversion_method
        self._inversion_method = InversionMethod(inversion_method)
        self._efficient_storage = bool(efficient_storage)
        self.debug = bool(debug)
        self._lock = threading.Lock()

    def __repr__(self):
        output = str("<gpr.core.GaussianProcess object> " + hex(id(self)))
        return output

    def __str__(self):
        params = ", ".join(repr(p) for p in self.kernel.parameters)
        return (
            f"Gaussian Process:\n"
            f"  State: {self._state.value}\n"
            f"  Number of samples: {len(self._store.samples)}\n"
            f"  Number of labels: {len(self._store.labels)}\n"
            f"  Noise: {self._sigma}\n"
            f"  Input dimension: {self.input_dimension}\n"
            f"  Output dimension: {self.output_dimension}\n"
            f"  Precision: {numpy.dtype(self.dtype).name}\n"
            f"  Inversion method: {self._inversion_method.value}\n"
            f"  Kernel: {self.kernel.name}\n"
            f"  Kernel parameters: {params}"
        )

    def describe(self):
        """Log the summary returned by str()."""
        _logger.info("%s", self)

    def _trace(self, msg):
        if self.debug:
            _logger.info("GaussianProcess: %s", msg)

    @staticmethod
    def _check_sigma(sigma):
        sigma = float(sigma)
        if not (math.isfinite(sigma) and sigma >= 0.0):
            raise ValueError(f"sigma must be finite and non-negative, got {sigma}")
        return sigma

    def _invalidate(self):
        self._state = ModelState.DIRTY

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    @property
    def kernel(self):
        return self._kernel

    @kernel.setter
    def kernel(self, k):
        self._kernel = k
        self._invalidate()

    @property
    def sigma(self):
        return self._sigma

    @sigma.setter
    def sigma(self, sigma):
        self._sigma = self._check_sigma(sigma)
        self._invalidate()

    @property
    def inversion_method(self):
        return self._inversion_method

    @inversion_method.setter
    def inversion_method(self, method):
        self._inversion_method = InversionMethod(method)

    @property
    def efficient_storage(self):
        return self._efficient_storage

    @efficient_storage.setter
    def efficient_storage(self, s):
        self._efficient_storage = bool(s)
        self._invalidate()

    def debug_on(self):
        self.debug = True

    def debug_off(self):
        self.debug = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def state(self):
        return self._state

    def is_ready(self):
        return self._state is ModelState.READY

    @property
    def number_of_samples(self):
        return len(self._store)

    def __len__(self):
        return len(self._store)

    @property
    def input_dimension(self):
        return self._store.input_dimension

    @property
    def output_dimension(self):
        return self._store.output_dimension

    # ------------------------------------------------------------------
    # Samples and training
    # ------------------------------------------------------------------
    def add_sample(self, x, y):
        """Add the input vector x with its label vector y.

        The first call fixes the input and output dimensions.

        Raises
        ------
        DimensionMismatchError
            If x or y does not match the dimensions of earlier samples.
        """
        self._store.add(x, y)
        self._invalidate()

    def initialize(self):
        """Compute the regression vectors if the model is DIRTY.

        Raises
        ------
        NotInitializedError
            If no sample has been added.
        numpy.linalg.LinAlgError
            If K + sigma I is singular.
        """
        if self._state is ModelState.READY:
            return
        A, C = solver.compute_regression_vectors(
            self._kernel,
            self._store.samples,
            self._store.labels,
            self._sigma,
            self._inversion_method,
            self.dtype,
            trace=self._trace,
        )
        self._regression_vectors = A
        self._core_matrix = None if self._efficient_storage else C
        self._state = ModelState.READY

    # ------------------------------------------------------------------
    # Prediction (delegating to gpr.core.prediction)
    # ------------------------------------------------------------------
    def predict(self, x):
        """Posterior mean at x, shape (d_out,). Trains the model if needed."""
        return prediction.predict(self, x)

    def predict_derivative(self, x):
        """Posterior mean at x and its derivative.

        Returns
        -------
        prediction : ndarray, shape (d_out,)
            Same value as `predict(x)`.
        D : ndarray, shape (d_in, d_out)
            Column c is -X^T (Kx * A[:, c]), X having rows x - x_i.
        """
        return prediction.predict_derivative(self, x)

    def __call__(self, x, y):
        """Scalar product of x and y in the RKHS of the trained process."""
        return prediction.posterior_covariance(self, x, y)

    def credible_interval(self, x):
        """Half-width of the 95% credible interval at x."""
        return prediction.credible_interval(self, x)

    # ------------------------------------------------------------------
    # Persistence (delegating to gpr.core.persistence)
    # ------------------------------------------------------------------
    def save(self, prefix):
        """Save the trained model to the four files ``prefix-*.txt``."""
        persistence.save(self, prefix)

    def load(self, prefix):
        """Load the model saved under `prefix` into this object.

        All files are parsed before the model is modified; on failure the
        model keeps its previous state. On success the model is READY
        without retraining. The inversion method and the storage mode
        of this object are kept.
        """
        persistence.load(self, prefix)

    @classmethod
    def from_saved(cls, prefix, dtype=None, **kwargs):
        """Build a new model from the files saved under `prefix`."""
        dtype = normalize_dtype(dtype if dtype is not None else cls.default_dtype)
        state = persistence.read_state(prefix, dtype)
        model = cls(state.kernel, dtype=dtype, **kwargs)
        model._restore(state)
        return model

    def _restore(self, state):
        self._kernel = state.kernel
        self._sigma = state.sigma
        self._store = state.store
        self._regression_vectors = state.regression_vectors
        self._core_matrix = None
        self.debug = state.debug
        self._state = ModelState.READY

    # ------------------------------------------------------------------
    # Locking
    # ------------------------------------------------------------------
    def lock(self):
        """Acquire the model lock (blocking)."""
        self._lock.acquire()

    def unlock(self):
        """Release the model lock."""
        self._lock.release()

    @contextmanager
    def locked(self):
        """Context manager holding the model lock."""
        with self._lock:
            yield self

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------
    def __eq__(self, other):
        if not isinstance(other, GaussianProcess):
            return NotImplemented
        return equality.models_equal(self, other)

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None


class GaussianProcessFloat(GaussianProcess):
    """Single precision Gaussian process."""

    default_dtype = numpy.float32


class GaussianProcessDouble(GaussianProcess):
    """Double precision Gaussian process."""

    default_dtype = numpy.float64
