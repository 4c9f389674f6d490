"""
experiments/scenarios.py

Holds scenario definitions (parameter grids) to sweep during experiments.
Each scenario overrides keys of the base config's `warehouse` section; values
may be scalars, lists or "start:step:stop" range strings.
"""

from __future__ import annotations

BASELINE = {
    "name": "baseline",
    "overrides": {},  # override config keys here per scenario
}

STAFFING = {
    "name": "staffing",
    "overrides": {
        "warehouse": {
            "n": "1:6",
        },
    },
}

BUFFER_SIZES = {
    "name": "buffer_sizes",
    "overrides": {
        "warehouse": {
            "Q_g": "5:5:30",
            "Q_f": "5:5:30",
            "n": [2, 3],
        },
    },
}

PEAK_LOAD = {
    "name": "peak_load",
    "overrides": {
        "warehouse": {
            "lam_g": [1.0, 1.5, 2.0],
            "lam_f": 1.5,
            "n": "2:6",
        },
    },
}

SCENARIOS = [BASELINE, STAFFING, BUFFER_SIZES, PEAK_LOAD]
