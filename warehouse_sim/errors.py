# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# errors.py
# -----------------------------------------------------------------------------
# Purpose:
#   Exception types shared by the simulation and the sweep harness, plus the
#   parameter checks that raise ConfigError.
#
# Design notes:
#   - ConfigError is fatal and raised before any event is scheduled.
#   - QueueFullError is only seen by direct callers of ShipmentQueue.put; the
#     arrival process pre-checks capacity and never triggers it.
#
# Usage:
#   from warehouse_sim.errors import ConfigError, QueueFullError
# -----------------------------------------------------------------------------

from __future__ import annotations
import math


class ConfigError(ValueError):
    """Invalid simulation parameters (non-integral sizes, non-positive rates)."""


class QueueFullError(RuntimeError):
    """Raised when a shipment is put into a lane that is already at capacity."""

    def __init__(self, queue_name: str, capacity: int):
        super().__init__(f"Can't put shipment: {queue_name} queue is full ({capacity})")
        self.queue_name = queue_name
        self.capacity = capacity


def require_int(value, name: str, minimum: int = 0) -> int:
    """
    Coerce an integral count (queue size, worker count) to int.

    Integral floats such as 10.0 are accepted; 3.5, bools, NaN and values
    below `minimum` raise ConfigError.
    """
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    try:
        as_float = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None
    if not math.isfinite(as_float) or not as_float.is_integer():
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    count = int(as_float)
    if count < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {count}")
    return count


def require_positive(value, name: str) -> float:
    """Coerce a rate or duration to a finite float > 0."""
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be a positive number, got {value!r}")
    try:
        as_float = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a positive number, got {value!r}") from None
    if not math.isfinite(as_float) or as_float <= 0.0:
        raise ConfigError(f"{name} must be a positive number, got {value!r}")
    return as_float
