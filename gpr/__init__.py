# gpr/__init__.py

from . import config
from . import errors
from . import num
from . import kernel
from . import misc
from . import core
from .core import (
    GaussianProcess,
    GaussianProcessFloat,
    GaussianProcessDouble,
    InversionMethod,
    ModelState,
)
from .config import __version__

__all__ = [
    "num",
    "kernel",
    "GaussianProcess",
    "GaussianProcessFloat",
    "GaussianProcessDouble",
    "InversionMethod",
    "ModelState",
    "__version__",
]
