# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# workers.py
# -----------------------------------------------------------------------------
# Purpose:
#   Worker process: wait until any lane holds a shipment, pick the lane with
#   policies.pick_lane, process one shipment, record it, repeat.
#
# Design notes:
#   - Two suspension points before service: the system-wide availability
#     signal, then the chosen lane's take(). The second one covers the case
#     where another worker emptied the lane in between.
#   - Service times are exponential with MEAN p (expovariate(1/p)), i.e. p_g
#     and p_f are processing times, not rates.
#
# Usage:
#   w = Worker("worker-1"); env.process(worker_process(env, state, w, p_g, p_f, rng))
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging
import random
from .queues import Env
from .entities import Worker
from .policies import pick_lane, GROCERY

logger = logging.getLogger(__name__)

def draw_service(rng: random.Random, mean_time: float) -> float:
    """Draw an exponential service time with the given mean."""
    return rng.expovariate(1.0 / mean_time)

def worker_process(env: Env, state, worker: Worker, p_g: float, p_f: float, rng: random.Random):
    while True:
        yield state.available.acquire()
        lane = pick_lane(len(state.grocery_queue), len(state.frozen_queue))
        shipment = yield state.queue(lane).take()
        worker.current_shipment = shipment
        shipment.start_processing = env.now
        logger.debug("T %.4f: %s starts %s shipment", env.now, worker.name, lane)
        yield env.timeout(draw_service(rng, p_g if lane == GROCERY else p_f))
        shipment.end_processing = env.now
        state.processed(lane).append((shipment, env.now))
        worker.working_time += shipment.end_processing - shipment.start_processing
        worker.current_shipment = None
        logger.debug("T %.4f: %s finished %s shipment", env.now, worker.name, lane)
