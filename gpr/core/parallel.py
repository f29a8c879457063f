# gpr/core/parallel.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Data-parallel fan-out over independent index ranges.

Work items are evaluated with a joblib thread pool and joined before
returning, so callers never observe partial results. Small workloads,
or ``n_jobs == 1``, run sequentially in the caller's thread.
"""
import os
from typing import Callable, List, Optional, Sequence

from joblib import Parallel, delayed

from gpr.config import get_config


def resolve_workers(n_items: int, n_jobs: Optional[int] = None) -> int:
    """Number of workers to use for `n_items` independent items."""
    config = get_config()
    if n_jobs is None:
        n_jobs = config.n_jobs
    if n_items < config.parallel_threshold:
        return 1
    cpu = os.cpu_count() or 1
    if n_jobs < 0:
        n_jobs = max(1, cpu + 1 + n_jobs)
    return max(1, min(n_jobs, n_items))


def parallel_map(func: Callable, items: Sequence, n_jobs: Optional[int] = None) -> List:
    """Return ``[func(item) for item in items]``, possibly computed in parallel.

    The order of the results is the order of `items`.
    """
    items = list(items)
    workers = resolve_workers(len(items), n_jobs)
    if workers == 1:
        return [func(item) for item in items]
    return Parallel(n_jobs=workers, prefer="threads")(delayed(func)(item) for item in items)
