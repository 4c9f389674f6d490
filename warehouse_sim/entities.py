# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# entities.py
# -----------------------------------------------------------------------------
# Purpose:
#   Entity definitions for the warehouse DES: Shipment and Worker.
#   These objects carry the timestamps and counters the metrics read back.
#
# Design notes:
#   - Shipments compare by identity; two shipments arriving at the same
#     instant are still distinct.
#   - Timestamps are None until set; a completed shipment always satisfies
#     arrival_time <= start_processing <= end_processing.
#
# Usage:
#   from warehouse_sim.entities import Shipment, Worker
# -----------------------------------------------------------------------------

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

@dataclass(eq=False)
class Shipment:
    arrival_time: float
    start_processing: Optional[float] = None   # set when a worker takes it
    end_processing: Optional[float] = None     # set when service completes

    def wait_time(self) -> Optional[float]:
        if self.start_processing is None:
            return None
        return self.start_processing - self.arrival_time

@dataclass(eq=False)
class Worker:
    name: str
    working_time: float = 0.0
    current_shipment: Optional[Shipment] = None   # in-flight shipment, None while idle

    def finalize(self, now: float):
        """
        Credit the partial service of a shipment still in progress at the
        horizon, so work cut off by the end of the run counts toward
        utilization.
        """
        s = self.current_shipment
        if s is not None and s.start_processing is not None and s.end_processing is None:
            self.working_time += now - s.start_processing
