# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# queues.py
# -----------------------------------------------------------------------------
# Purpose:
#   Minimal discrete‑event primitives: Event, Env, generator Processes, and the
#   waitables they yield (Timeout, Store.get, Signal.acquire).
#
# Design notes:
#   - Processes are plain generators. A process suspends by yielding a
#     Waitable; the Env resumes it by scheduling a "resume" event on the FEL.
#   - Events at the same time fire in scheduling order (seq counter). Callers
#     must not rely on that order between independent processes.
#   - One Env per run; nothing here is shared across threads.
#
# Usage:
#   from warehouse_sim.queues import Env, Store, Signal
#   env = Env(); env.process(gen(env)); env.run_until(100.0)
# -----------------------------------------------------------------------------

from __future__ import annotations
import heapq, itertools
from collections import deque
from typing import Any, Deque, Generator, List, Optional

class Event:
    """Minimal event object for the Future Event List (FEL)."""
    __slots__ = ("t", "seq", "kind", "data")
    def __init__(self, t: float, kind: str, data: dict):
        self.t = t; self.seq = 0; self.kind = kind; self.data = data
    def __lt__(self, other: "Event"):
        return (self.t, self.seq) < (other.t, other.seq)


class Process:
    """Handle for a generator registered with Env.process()."""
    __slots__ = ("gen", "name", "alive")
    def __init__(self, gen: Generator, name: Optional[str] = None):
        self.gen = gen
        self.name = name or getattr(gen, "__name__", "process")
        self.alive = True

    def __repr__(self):
        return f"<Process {self.name}{'' if self.alive else ' (done)'}>"


class Waitable:
    """Anything a process may yield. subscribe() arranges the later resume."""
    def subscribe(self, env: "Env", proc: Process):
        raise NotImplementedError


class Timeout(Waitable):
    """Resume the yielding process after `delay` units of virtual time."""
    __slots__ = ("delay",)
    def __init__(self, delay: float):
        if delay < 0:
            raise ValueError(f"Negative delay {delay}")
        self.delay = delay

    def subscribe(self, env: "Env", proc: Process):
        env.schedule(Event(env.t + self.delay, "resume", {"proc": proc, "value": None}))


class Env:
    """Simulation environment holding the clock and the FEL.

    Attributes
    ----------
    t : float
        Simulation time. Starts at 0 and never decreases.
    FEL : list[Event]
        Min‑heap of scheduled events ordered by (t, seq).
    """
    def __init__(self):
        self.t: float = 0.0
        self.FEL: List[Event] = []
        self._seq = itertools.count()

    @property
    def now(self) -> float:
        return self.t

    def schedule(self, ev: Event):
        if ev.t < self.t:
            raise ValueError(f"Cannot schedule event at {ev.t} before now ({self.t})")
        ev.seq = next(self._seq)
        heapq.heappush(self.FEL, ev)

    def timeout(self, delay: float) -> Timeout:
        return Timeout(delay)

    def process(self, gen: Generator, name: Optional[str] = None) -> Process:
        """Register a generator; its first step runs at the current instant."""
        proc = Process(gen, name)
        self.resume(proc)
        return proc

    def resume(self, proc: Process, value: Any = None):
        """Wake `proc` at the current instant, sending `value` into it."""
        self.schedule(Event(self.t, "resume", {"proc": proc, "value": value}))

    def run_until(self, T_end: float):
        """
        Process every event with t <= T_end, then park the clock at T_end.
        Events beyond the horizon stay on the FEL; their processes are simply
        never resumed.
        """
        if T_end < self.t:
            raise ValueError(f"Horizon {T_end} is before now ({self.t})")
        while self.FEL and self.FEL[0].t <= T_end:
            ev = heapq.heappop(self.FEL)
            self.t = ev.t
            if ev.kind == "resume":
                self._step(ev.data["proc"], ev.data["value"])
        self.t = T_end

    def _step(self, proc: Process, value: Any):
        # Advance one process to its next suspension point
        try:
            target = proc.gen.send(value)
        except StopIteration:
            proc.alive = False
            return
        if not isinstance(target, Waitable):
            raise TypeError(f"{proc.name} yielded {target!r}; expected a Waitable")
        target.subscribe(self, proc)


class Store:
    """Unbounded FIFO store with blocking get().

    Waiting getters are served longest‑waiting first. Subclasses can override
    _pop() to hook bookkeeping onto the moment an item actually leaves.
    """
    def __init__(self, env: Env):
        self.env = env
        self.items: Deque[Any] = deque()
        self._getters: Deque[Process] = deque()

    def __len__(self) -> int:
        return len(self.items)

    @property
    def waiting(self) -> int:
        return len(self._getters)

    def put(self, item: Any):
        self.items.append(item)
        self._dispatch()

    def get(self) -> "StoreGet":
        return StoreGet(self)

    def _pop(self) -> Any:
        return self.items.popleft()

    def _dispatch(self):
        while self.items and self._getters:
            proc = self._getters.popleft()
            self.env.resume(proc, self._pop())


class StoreGet(Waitable):
    __slots__ = ("store",)
    def __init__(self, store: Store):
        self.store = store

    def subscribe(self, env: Env, proc: Process):
        self.store._getters.append(proc)
        self.store._dispatch()


class Signal(Store):
    """Counting semaphore: release() adds a token, acquire() waits for one."""
    def release(self):
        self.put(None)

    def acquire(self) -> StoreGet:
        return self.get()

    @property
    def count(self) -> int:
        return len(self.items)
