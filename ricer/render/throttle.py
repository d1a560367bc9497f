"""Bounded fan-out for render jobs.

A fixed-size thread pool alone would accept every submission and queue
the rest internally.  :class:`Throttle` also gates :meth:`Throttle.submit`
with a semaphore so the dispatcher blocks while ``limit`` jobs are in
flight, and the backlog never grows past the pool size.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, Callable, List

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 4


class Throttle:
    """Run callables on at most *limit* worker threads at once.

    Usage::

        with Throttle(4) as throttle:
            for path in templates:
                throttle.submit(render, path)
        futures = throttle.futures
    """

    def __init__(self, limit: int = DEFAULT_CONCURRENCY) -> None:
        if limit < 1:
            raise ValueError(f"Throttle limit must be >= 1, got {limit}")
        self.limit = limit
        self._slots = threading.BoundedSemaphore(limit)
        self._pool = ThreadPoolExecutor(max_workers=limit, thread_name_prefix="ricer-render")
        self._futures: List[Future] = []

    @property
    def futures(self) -> List[Future]:
        """Futures in submission order."""
        return list(self._futures)

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        """Schedule ``fn(*args, **kwargs)``; blocks while the throttle is full."""
        self._slots.acquire()
        try:
            future = self._pool.submit(fn, *args, **kwargs)
        except BaseException:
            self._slots.release()
            raise
        future.add_done_callback(self._release)
        self._futures.append(future)
        return future

    def _release(self, _future: Future) -> None:
        self._slots.release()

    def join(self) -> List[Future]:
        """Wait until every submitted job has finished; return their futures.

        Exceptions raised by jobs stay on their futures.
        """
        wait(self._futures)
        logger.debug("Throttle joined %d job(s)", len(self._futures))
        return self.futures

    def shutdown(self) -> None:
        self._pool.shutdown(wait=True)

    def __enter__(self) -> "Throttle":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.join()
        self.shutdown()
