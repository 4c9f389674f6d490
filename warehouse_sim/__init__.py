"""
warehouse_sim package initializer.

This package contains the simulation engine, primitives (event list, stores,
signals), the bounded lane queues, arrival and worker processes, metric
collection and the parallel parameter sweep used by the two‑lane warehouse
intake model (groceries, frozen goods).
"""
__all__ = [
    "errors", "entities", "queues", "stations", "policies",
    "arrivals", "workers", "metrics", "simulation", "sweep",
]
