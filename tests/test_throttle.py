"""Tests for ricer.render.throttle — bounded concurrency and join."""

from __future__ import annotations

import threading
import time

import pytest

from ricer.render.throttle import DEFAULT_CONCURRENCY, Throttle


class _Tracker:
    """Records the peak number of simultaneously running calls."""

    def __init__(self, hold: float = 0.005) -> None:
        self.hold = hold
        self.running = 0
        self.peak = 0
        self.done = 0
        self._lock = threading.Lock()

    def __call__(self, i: int) -> int:
        with self._lock:
            self.running += 1
            self.peak = max(self.peak, self.running)
        time.sleep(self.hold)
        with self._lock:
            self.running -= 1
            self.done += 1
        return i


class TestThrottle:
    def test_default_limit(self):
        assert DEFAULT_CONCURRENCY == 4
        assert Throttle().limit == 4

    @pytest.mark.parametrize("limit", [0, -1])
    def test_invalid_limit(self, limit):
        with pytest.raises(ValueError):
            Throttle(limit)

    @pytest.mark.parametrize("n", [0, 1, 4, 5, 100])
    def test_never_exceeds_limit(self, n):
        tracker = _Tracker()
        with Throttle(4) as throttle:
            for i in range(n):
                throttle.submit(tracker, i)
        assert tracker.done == n
        assert tracker.peak <= 4
        if n >= 4:
            assert tracker.peak >= 1

    def test_join_returns_all_futures_in_submission_order(self):
        throttle = Throttle(3)
        for i in range(10):
            throttle.submit(_Tracker(hold=0.001), i)
        futures = throttle.join()
        throttle.shutdown()
        assert all(f.done() for f in futures)
        assert [f.result() for f in futures] == list(range(10))

    def test_failing_job_does_not_affect_siblings(self):
        def job(i):
            if i == 2:
                raise RuntimeError("boom")
            return i

        with Throttle(2) as throttle:
            for i in range(5):
                throttle.submit(job, i)
        futures = throttle.futures
        assert isinstance(futures[2].exception(), RuntimeError)
        assert [f.result() for i, f in enumerate(futures) if i != 2] == [0, 1, 3, 4]

    def test_submit_blocks_when_saturated(self):
        gate = threading.Event()
        started = threading.Semaphore(0)

        def blocker():
            started.release()
            gate.wait(5)

        throttle = Throttle(1)
        throttle.submit(blocker)
        started.acquire(timeout=5)

        submitted = threading.Event()

        def dispatch():
            throttle.submit(lambda: None)
            submitted.set()

        t = threading.Thread(target=dispatch)
        t.start()
        # Slot is held by blocker, so the second submit must wait.
        assert not submitted.wait(0.1)
        gate.set()
        assert submitted.wait(5)
        t.join(5)
        throttle.join()
        throttle.shutdown()
        assert len(throttle.futures) == 2
