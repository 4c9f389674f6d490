# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# sweep.py
# -----------------------------------------------------------------------------
# Purpose:
#   Run simulate() over the Cartesian product of parameter values on a pool of
#   threads and collect one result row per combination into a DataFrame.
#
# Design notes:
#   - Every parameter may be a scalar or a collection; scalars are wrapped as
#     one‑element lists so the product has a single code path.
#   - Runs share nothing: each builds its own Env, state and random stream.
#     Rows are gathered by the submitting thread once futures complete, so the
#     result list itself needs no lock.
#   - With a base seed, combination i runs with seed + i; the table is then
#     identical for any thread count.
#   - The first failing run cancels the pending ones and re-raises; a partial
#     table is never returned.
#
# Usage:
#   from warehouse_sim.sweep import sweep
#   df = sweep(1, 1, 4, 6, [10, 20, 30], 10, range(1, 4), 100, seed=0)
# -----------------------------------------------------------------------------

from __future__ import annotations
import itertools, logging, os
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, List, Optional
import pandas as pd
from .metrics import COLUMNS
from .simulation import PARAM_NAMES, run_one, validate_params

logger = logging.getLogger(__name__)

def as_values(value: Any) -> List[Any]:
    """Normalize a scalar-or-collection parameter to a list of values."""
    # 0-d arrays are Iterable by type but raise on iteration
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable) or getattr(value, "ndim", None) == 0:
        return [value]
    return list(value)

def expand_grid(lam_g, lam_f, p_g, p_f, Q_g, Q_f, n, duration) -> List[Dict[str, Any]]:
    """
    Every parameter combination, in lexicographic product order over
    (lam_g, lam_f, p_g, p_f, Q_g, Q_f, n, duration); duration varies fastest.
    """
    axes = [as_values(v) for v in (lam_g, lam_f, p_g, p_f, Q_g, Q_f, n, duration)]
    return [dict(zip(PARAM_NAMES, combo)) for combo in itertools.product(*axes)]

def sweep(lam_g, lam_f, p_g, p_f, Q_g, Q_f, n, duration, *,
          max_workers: Optional[int] = None, seed: Optional[int] = None) -> pd.DataFrame:
    """
    Simulate every combination of the given parameter values.

    Examples
    --------
    Durations between 1000 and 5000 time units:

        sweep(1, 4, 1, 2, 10, 100, 8, range(1000, 5001, 1000))

    Several arrival rates for groceries and frozen goods (9 runs):

        sweep([1, 2, 3], [1, 2, 3], 1, 2, 10, 100, 8, 1000)

    Returns
    -------
    pandas.DataFrame
        One row per combination with columns metrics.COLUMNS.
    """
    combos = expand_grid(lam_g, lam_f, p_g, p_f, Q_g, Q_f, n, duration)
    # Fail before any run if a single combination is invalid
    for c in combos:
        validate_params(**c)
    if not combos:
        return pd.DataFrame(columns=COLUMNS)
    if seed is not None:
        for i, c in enumerate(combos):
            c["seed"] = seed + i

    threads = max(1, min(max_workers or os.cpu_count() or 1, len(combos)))
    logger.info("Sweeping %d combinations on %d threads", len(combos), threads)
    with ThreadPoolExecutor(max_workers=threads) as pool:
        futures = [pool.submit(run_one, c) for c in combos]
        try:
            for done, fut in enumerate(as_completed(futures), start=1):
                fut.result()
                logger.debug("Run %d/%d finished", done, len(futures))
        except BaseException:
            for fut in futures:
                fut.cancel()
            raise
        rows = [fut.result() for fut in futures]
    return pd.DataFrame(rows, columns=COLUMNS)
