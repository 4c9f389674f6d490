# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# arrivals.py
# -----------------------------------------------------------------------------
# Purpose:
#   Generate exogenous shipment arrivals for one lane as a Poisson stream.
#
# Design notes:
#   - One generator process per lane, started by WarehouseState.
#   - Capacity is pre-checked, so a full lane is a counted rejection and not
#     an exception. Rejected shipments never signal availability.
#   - The loop never returns; the Env simply stops resuming it at the horizon.
#
# Usage:
#   env.process(arrival_process(env, state, state.grocery_queue, rng))
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging
import random
from .queues import Env
from .entities import Shipment

logger = logging.getLogger(__name__)

def arrival_process(env: Env, state, queue, rng: random.Random):
    while True:
        # exponential inter-arrival times with rate lam (mean 1/lam)
        yield env.timeout(rng.expovariate(queue.lam))
        shipment = Shipment(arrival_time=env.now)
        queue.arrivals += 1
        if queue.is_full():
            queue.reject(shipment)
            logger.debug("T %.4f: shipment rejected, %s lane full (%d)", env.now, queue.name, queue.capacity)
            continue
        queue.put(shipment)
        state.available.release()
        logger.debug("T %.4f: shipment arrived in %s lane (%d/%d)", env.now, queue.name, len(queue), queue.capacity)
