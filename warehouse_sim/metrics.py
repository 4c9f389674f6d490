# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# metrics.py
# -----------------------------------------------------------------------------
# Purpose:
#   Turn the final state of one run into a result row: rejections,
#   throughput, utilization, waits and queue full/empty rates.
#
# Design notes:
#   - summary() must run after the workers and lanes have been finalized,
#     otherwise intervals still open at the horizon are missing.
#   - Rows are plain JSON‑serializable dicts keyed by COLUMNS for easy
#     tabulation.
#
# Usage:
#   M = Metrics(params); M.attach(state, workers); row = M.summary()
# -----------------------------------------------------------------------------

from __future__ import annotations
from typing import Any, Dict, List, Tuple
from .entities import Shipment, Worker

PARAM_COLUMNS = ["λ_g", "λ_f", "p_g", "p_f", "Q_g", "Q_f", "n", "duration"]

COLUMNS = PARAM_COLUMNS + [
    "rejects_g", "rejects_f",
    "finished_g", "finished_f",
    "worker_util",
    "avg_wait_g", "avg_wait_f",
    "full_rate_g", "full_rate_f",
    "empty_rate_g", "empty_rate_f",
]

def mean_wait(processed: List[Tuple[Shipment, float]]) -> float:
    """Average time from arrival to start of service; 0 with no completions."""
    if not processed:
        return 0.0
    return sum(s.wait_time() for s, _ in processed) / len(processed)

class Metrics:
    def __init__(self, params: Dict[str, Any]):
        # params: lam_g, lam_f, p_g, p_f, Q_g, Q_f, n, duration (validated)
        self.params = params
        self.state = None
        self.workers: List[Worker] = []

    def attach(self, state, workers: List[Worker]):
        self.state = state
        self.workers = list(workers)

    def utilization(self) -> float:
        if not self.workers:
            return 0.0
        duration = self.params["duration"]
        busy = sum(w.working_time for w in self.workers) / len(self.workers)
        return busy / duration

    def summary(self) -> Dict[str, Any]:
        p = self.params
        st = self.state
        duration = p["duration"]
        g, f = st.grocery_queue, st.frozen_queue
        return {
            "λ_g": p["lam_g"],
            "λ_f": p["lam_f"],
            "p_g": p["p_g"],
            "p_f": p["p_f"],
            "Q_g": p["Q_g"],
            "Q_f": p["Q_f"],
            "n": p["n"],
            "duration": duration,
            "rejects_g": g.n_rejected,
            "rejects_f": f.n_rejected,
            "finished_g": len(st.processed_groceries),
            "finished_f": len(st.processed_frozen),
            "worker_util": self.utilization(),
            "avg_wait_g": mean_wait(st.processed_groceries),
            "avg_wait_f": mean_wait(st.processed_frozen),
            "full_rate_g": g.full_time / duration,
            "full_rate_f": f.full_time / duration,
            "empty_rate_g": g.empty_time / duration,
            "empty_rate_f": f.empty_time / duration,
        }
