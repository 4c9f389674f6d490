# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# simulation.py
# -----------------------------------------------------------------------------
# Purpose:
#   Simulate a single replication: validate parameters, build the lanes and
#   workers, run the event loop to the horizon, finalize, return metrics.
#
# Design notes:
#   - Every run owns its Env and its random.Random, so runs on different
#     threads never share a clock or a random stream.
#   - Parameter sweeps live in sweep.py.
#
# Usage:
#   from warehouse_sim.simulation import simulate
#   row = simulate(1.0, 2.0, 3.0, 4.0, 10, 20, 2, 30.0, seed=7)
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging
import random
from typing import Any, Dict, Mapping, Optional
from .queues import Env
from .entities import Worker
from .stations import WarehouseState
from .workers import worker_process
from .metrics import Metrics
from .errors import ConfigError, require_int, require_positive

logger = logging.getLogger(__name__)

PARAM_NAMES = ("lam_g", "lam_f", "p_g", "p_f", "Q_g", "Q_f", "n", "duration")

def validate_params(lam_g, lam_f, p_g, p_f, Q_g, Q_f, n, duration) -> Dict[str, Any]:
    """Check and coerce the eight run parameters; raises ConfigError."""
    return {
        "lam_g": require_positive(lam_g, "lam_g"),
        "lam_f": require_positive(lam_f, "lam_f"),
        "p_g": require_positive(p_g, "p_g"),
        "p_f": require_positive(p_f, "p_f"),
        "Q_g": require_int(Q_g, "Q_g", minimum=1),
        "Q_f": require_int(Q_f, "Q_f", minimum=1),
        "n": require_int(n, "n", minimum=0),
        "duration": require_positive(duration, "duration"),
    }

def simulate(lam_g, lam_f, p_g, p_f, Q_g, Q_f, n, duration, seed: Optional[int] = None) -> Dict[str, Any]:
    """
    Simulate the warehouse intake for `duration` time units.

    Parameters
    ----------
    lam_g, lam_f : float
        Arrival rates for groceries and frozen goods.
    p_g, p_f : float
        Mean processing times for groceries and frozen goods.
    Q_g, Q_f : int
        Lane capacities.
    n : int
        Number of workers, each processing one shipment at a time.
    duration : float
        Simulation horizon.
    seed : int, optional
        Seed for this run's private random stream.

    Returns
    -------
    dict
        One result row keyed by metrics.COLUMNS.
    """
    params = validate_params(lam_g, lam_f, p_g, p_f, Q_g, Q_f, n, duration)
    rng = random.Random(seed)

    env = Env()
    state = WarehouseState(env, params["lam_g"], params["lam_f"], params["Q_g"], params["Q_f"], rng)
    workers = [Worker(f"worker-{i + 1}") for i in range(params["n"])]
    for w in workers:
        env.process(worker_process(env, state, w, params["p_g"], params["p_f"], rng), name=w.name)

    logger.debug("Start simulation %s", params)
    env.run_until(params["duration"])

    for w in workers:
        w.finalize(env.now)
    state.finalize()

    M = Metrics(params)
    M.attach(state, workers)
    return M.summary()

def run_one(cfg: Mapping[str, Any]) -> Dict[str, Any]:
    """Run simulate() from a mapping holding the eight parameters (+ optional seed)."""
    missing = [k for k in PARAM_NAMES if k not in cfg]
    if missing:
        raise ConfigError(f"Missing simulation parameters: {', '.join(missing)}")
    return simulate(*(cfg[k] for k in PARAM_NAMES), seed=cfg.get("seed"))
