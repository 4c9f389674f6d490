# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# policies.py
# -----------------------------------------------------------------------------
# Purpose:
#   Lane names and the rule a worker uses to pick which lane to serve next.
#
# Design notes:
#   - Keep pure functions to ease testing (queue lengths -> decision).
#   - Groceries win only when strictly longer; ties go to frozen goods.
#
# Usage:
#   from warehouse_sim.policies import pick_lane, GROCERY, FROZEN
# -----------------------------------------------------------------------------

from __future__ import annotations

GROCERY = "grocery"
FROZEN = "frozen"

def pick_lane(grocery_len: int, frozen_len: int) -> str:
    """Return the lane a worker should take from given the current lengths."""
    if grocery_len > frozen_len:
        return GROCERY
    return FROZEN
