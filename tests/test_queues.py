"""Tests for the event engine primitives: Env, Timeout, Store, Signal."""

from __future__ import annotations

import pytest

from warehouse_sim.queues import Env, Signal, Store


class TestEnv:

    def test_clock_starts_at_zero(self):
        assert Env().now == 0.0

    def test_timeout_resumes_after_delay(self):
        """A process resumes exactly `delay` after it yielded."""
        env = Env()
        seen = []

        def proc():
            yield env.timeout(2.5)
            seen.append(env.now)
            yield env.timeout(1.0)
            seen.append(env.now)

        env.process(proc())
        env.run_until(10.0)

        assert seen == [2.5, 3.5]

    def test_run_until_parks_clock_at_horizon(self):
        """Events beyond the horizon stay pending; the clock stops at the horizon."""
        env = Env()
        ticks = []

        def ticker():
            while True:
                yield env.timeout(1.0)
                ticks.append(env.now)

        env.process(ticker())
        env.run_until(3.5)

        assert ticks == [1.0, 2.0, 3.0]
        assert env.now == 3.5
        assert env.FEL and env.FEL[0].t == 4.0

    def test_event_at_horizon_runs_and_run_can_continue(self):
        env = Env()
        ticks = []

        def ticker():
            while True:
                yield env.timeout(1.0)
                ticks.append(env.now)

        env.process(ticker())
        env.run_until(2.0)
        assert ticks == [1.0, 2.0]

        env.run_until(5.0)
        assert ticks == [1.0, 2.0, 3.0, 4.0, 5.0]

    def test_time_never_moves_backwards(self):
        env = Env()
        stamps = []

        def proc(delays):
            for d in delays:
                yield env.timeout(d)
                stamps.append(env.now)

        env.process(proc([0.3, 2.0, 0.0, 1.1]))
        env.process(proc([1.7, 0.2, 0.9]))
        env.process(proc([0.0, 0.0, 4.0]))
        env.run_until(10.0)

        assert len(stamps) == 10
        assert stamps == sorted(stamps)

    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError):
            Env().timeout(-0.1)

    def test_horizon_before_now_rejected(self):
        env = Env()
        env.run_until(5.0)
        with pytest.raises(ValueError):
            env.run_until(4.0)

    def test_yielding_non_waitable_raises(self):
        env = Env()

        def bad():
            yield 3

        env.process(bad())
        with pytest.raises(TypeError):
            env.run_until(1.0)

    def test_finished_process_is_marked_dead(self):
        env = Env()

        def short():
            yield env.timeout(1.0)

        proc = env.process(short())
        env.run_until(2.0)

        assert not proc.alive


class TestStore:

    def test_get_blocks_until_put(self):
        env = Env()
        store = Store(env)
        got = []

        def consumer():
            item = yield store.get()
            got.append((item, env.now))

        def producer():
            yield env.timeout(3.0)
            store.put("box")

        env.process(consumer())
        env.process(producer())
        env.run_until(1.0)
        assert got == []
        assert store.waiting == 1

        env.run_until(10.0)
        assert got == [("box", 3.0)]
        assert store.waiting == 0

    def test_items_leave_in_fifo_order(self):
        env = Env()
        store = Store(env)
        for item in ("a", "b", "c"):
            store.put(item)
        got = []

        def drain():
            while True:
                got.append((yield store.get()))

        env.process(drain())
        env.run_until(1.0)

        assert got == ["a", "b", "c"]
        assert len(store) == 0

    def test_longest_waiting_getter_served_first(self):
        env = Env()
        store = Store(env)
        got = {}

        def consumer(name, delay):
            yield env.timeout(delay)
            got[name] = yield store.get()

        def producer():
            yield env.timeout(5.0)
            store.put("first")
            store.put("second")

        env.process(consumer("late", 2.0))
        env.process(consumer("early", 1.0))
        env.process(producer())
        env.run_until(10.0)

        assert got == {"early": "first", "late": "second"}


class TestSignal:

    def test_release_before_acquire_does_not_block(self):
        env = Env()
        sig = Signal(env)
        sig.release()
        sig.release()
        assert sig.count == 2
        woke = []

        def waiter():
            yield sig.acquire()
            woke.append(env.now)

        env.process(waiter())
        env.run_until(0.0)

        assert woke == [0.0]
        assert sig.count == 1

    def test_acquire_waits_for_release(self):
        env = Env()
        sig = Signal(env)
        woke = []

        def waiter():
            yield sig.acquire()
            woke.append(env.now)

        def releaser():
            yield env.timeout(4.0)
            sig.release()

        env.process(waiter())
        env.process(releaser())
        env.run_until(10.0)

        assert woke == [4.0]
        assert sig.count == 0
