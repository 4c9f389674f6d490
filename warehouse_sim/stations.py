# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# stations.py
# -----------------------------------------------------------------------------
# Purpose:
#   Concrete stations of the warehouse: the bounded ShipmentQueue used for
#   each lane, and WarehouseState which owns both lanes, the "shipment
#   available" signal and the processed-shipment records.
#
# Design notes:
#   - ShipmentQueue keeps full/empty dwell-time accumulators. An interval is
#     open exactly when its *_start_time is not None; at most one is open.
#   - A fresh queue is empty, so the empty interval is open from t=0.
#   - Intervals still open at the horizon are closed by finalize().
#
# Usage:
#   from warehouse_sim.stations import ShipmentQueue, WarehouseState
# -----------------------------------------------------------------------------

from __future__ import annotations
import random
from typing import List, Optional, Tuple
from .queues import Env, Signal, Store, StoreGet
from .entities import Shipment
from .errors import QueueFullError, require_int, require_positive
from .arrivals import arrival_process
from .policies import GROCERY, FROZEN


class ShipmentQueue(Store):
    """Bounded FIFO lane with blocking take() and full/empty accounting.

    Parameters
    ----------
    env : Env
        Owning environment (source of the clock).
    name : str
        Lane name, used in logs and errors.
    lam : float
        Mean arrival rate of shipments into this lane.
    capacity : int
        Q_max. Must be an integer >= 1; 3.5 raises ConfigError.
    """
    def __init__(self, env: Env, name: str, lam: float, capacity):
        super().__init__(env)
        self.name = name
        self.lam = require_positive(lam, f"{name} arrival rate")
        self.capacity = require_int(capacity, f"{name} capacity", minimum=1)
        self.rejected: List[Shipment] = []
        self.arrivals = 0
        self.full_time = 0.0
        self.full_start_time: Optional[float] = None
        self.empty_time = 0.0
        self.empty_start_time: Optional[float] = env.now

    def is_full(self) -> bool:
        return len(self.items) >= self.capacity

    def is_empty(self) -> bool:
        return not self.items

    @property
    def n_rejected(self) -> int:
        return len(self.rejected)

    def put(self, item: Shipment):
        if self.is_full():
            self.reject(item)
            raise QueueFullError(self.name, self.capacity)
        if self.is_empty():
            self._close_empty()
        self.items.append(item)
        if self.is_full():
            self._open_full()
        self._dispatch()

    def reject(self, item: Shipment):
        """Record a turned-away shipment; starts the full timer if not running."""
        self.rejected.append(item)
        self._open_full()

    def take(self) -> StoreGet:
        """Waitable that resumes the caller with the oldest shipment."""
        return self.get()

    def _pop(self) -> Shipment:
        # Runs at the instant the item actually leaves the lane
        if self.is_full():
            self._close_full()
        item = self.items.popleft()
        if self.is_empty():
            self.empty_start_time = self.env.now
        return item

    def finalize(self):
        """Close whichever interval is still open at the current time."""
        self._close_full()
        self._close_empty()

    def _open_full(self):
        if self.full_start_time is None:
            self.full_start_time = self.env.now

    def _close_full(self):
        if self.full_start_time is not None:
            self.full_time += self.env.now - self.full_start_time
            self.full_start_time = None

    def _close_empty(self):
        if self.empty_start_time is not None:
            self.empty_time += self.env.now - self.empty_start_time
            self.empty_start_time = None

    def __repr__(self):
        return f"<ShipmentQueue {self.name} {len(self)}/{self.capacity}>"


class WarehouseState:
    """
    Both lanes plus the shared bookkeeping the workers need. Building the
    state also starts one arrival process per lane on `env`.
    """
    def __init__(self, env: Env, lam_g: float, lam_f: float, Q_g, Q_f,
                 rng: Optional[random.Random] = None):
        self.env = env
        self.rng = rng if rng is not None else random.Random()
        self.grocery_queue = ShipmentQueue(env, GROCERY, lam_g, Q_g)
        self.frozen_queue = ShipmentQueue(env, FROZEN, lam_f, Q_f)
        self.available = Signal(env)   # one token per shipment waiting in either lane
        self.processed_groceries: List[Tuple[Shipment, float]] = []
        self.processed_frozen: List[Tuple[Shipment, float]] = []
        env.process(arrival_process(env, self, self.grocery_queue, self.rng), name="arrivals-grocery")
        env.process(arrival_process(env, self, self.frozen_queue, self.rng), name="arrivals-frozen")

    def queue(self, lane: str) -> ShipmentQueue:
        return self.grocery_queue if lane == GROCERY else self.frozen_queue

    def processed(self, lane: str) -> List[Tuple[Shipment, float]]:
        return self.processed_groceries if lane == GROCERY else self.processed_frozen

    def finalize(self):
        self.grocery_queue.finalize()
        self.frozen_queue.finalize()
