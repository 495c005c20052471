from __future__ import annotations

import logging
import os
import time
import threading
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Hashable, Optional, Set, TypeVar

R = TypeVar("R")

log = logging.getLogger(__name__)


class DuplicateTaskError(RuntimeError):
    """A task with the same key is already queued or running."""


@dataclass
class ThreadStats:
    start_ts: float
    tasks_submitted: int = 0
    tasks_completed: int = 0
    tasks_failed: int = 0
    tasks_cancelled: int = 0

    @property
    def uptime_sec(self) -> float:
        return time.time() - self.start_ts

    @property
    def in_flight(self) -> int:
        done = self.tasks_completed + self.tasks_failed + self.tasks_cancelled
        return max(0, self.tasks_submitted - done)


class ThreadManager:
    """
    Bounded thread pool for per-item, I/O-bound work (ffprobe runs, cache reads).

    - submit(fn, *args, **kwargs) -> Future
    - submit_keyed(key, fn, *args, **kwargs) -> Future; refuses a key that is
      already in flight, so one item never runs on two workers at once
    - Outstanding tasks bounded by a semaphore (max_queue)
    - Tasks still queued when the stop event is set raise CancelledError
      instead of running
    - Stats snapshot, idempotent shutdown, context manager
    """

    def __init__(
        self,
        name: str = "probe",
        max_workers: Optional[int] = None,
        max_queue: Optional[int] = None,
        log_exceptions: bool = True,
    ) -> None:
        if max_workers is None:
            n = os.cpu_count() or 4
            max_workers = max(4, min(8, n * 2))  # I/O-friendly default

        self._name = name
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix=name)
        self._stop = threading.Event()
        self._stats = ThreadStats(start_ts=time.time())
        self._log_exceptions = log_exceptions

        if not max_queue or max_queue <= 0:
            self._slots = None  # unbounded
        else:
            self._slots = threading.Semaphore(max_queue)

        self._inflight_keys: Set[Hashable] = set()
        self._closed = False
        self._lock = threading.Lock()

    # -------------------------
    # Lifecycle
    # -------------------------
    def shutdown(self, wait: bool = True, cancel_futures: bool = False) -> None:
        """Shut down the executor. Safe to call multiple times."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._stop.set()
        self._executor.shutdown(wait=wait, cancel_futures=cancel_futures)

    def __enter__(self) -> "ThreadManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True, cancel_futures=True)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def stop_event(self) -> threading.Event:
        return self._stop

    def stats(self) -> ThreadStats:
        """Return a *snapshot* of current stats."""
        with self._lock:
            return ThreadStats(
                start_ts=self._stats.start_ts,
                tasks_submitted=self._stats.tasks_submitted,
                tasks_completed=self._stats.tasks_completed,
                tasks_failed=self._stats.tasks_failed,
                tasks_cancelled=self._stats.tasks_cancelled,
            )

    def is_in_flight(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._inflight_keys

    # -------------------------
    # Submission
    # -------------------------
    def submit(self, fn: Callable[..., R], /, *args, **kwargs) -> Future[R]:
        return self._submit(None, fn, args, kwargs)

    def submit_keyed(self, key: Hashable, fn: Callable[..., R], /, *args, **kwargs) -> Future[R]:
        with self._lock:
            if key in self._inflight_keys:
                raise DuplicateTaskError(f"{self._name}: task {key!r} is already in flight")
            self._inflight_keys.add(key)
        try:
            return self._submit(key, fn, args, kwargs)
        except BaseException:
            with self._lock:
                self._inflight_keys.discard(key)
            raise

    def _submit(self, key: Optional[Hashable], fn: Callable[..., R], args, kwargs) -> Future[R]:
        if self._closed:
            raise RuntimeError(f"{self._name}: submit() after shutdown")

        # Apply backpressure if bounded
        if self._slots is not None:
            self._slots.acquire()

        def _wrapped() -> R:
            try:
                if self._stop.is_set():
                    raise CancelledError(f"{self._name}: stopped before task started")
                return fn(*args, **kwargs)
            finally:
                if self._slots is not None:
                    self._slots.release()

        with self._lock:
            self._stats.tasks_submitted += 1

        try:
            fut: Future[R] = self._executor.submit(_wrapped)
        except RuntimeError:
            # executor shut down between our check and submit
            if self._slots is not None:
                self._slots.release()
            with self._lock:
                self._stats.tasks_submitted -= 1
            raise

        def _cb(f: Future[R]) -> None:
            with self._lock:
                if key is not None:
                    self._inflight_keys.discard(key)
                if f.cancelled():
                    # never started, so _wrapped did not release its slot
                    if self._slots is not None:
                        self._slots.release()
                    self._stats.tasks_cancelled += 1
                    return
                exc = f.exception()
                if exc is None:
                    self._stats.tasks_completed += 1
                elif isinstance(exc, CancelledError):
                    self._stats.tasks_cancelled += 1
                else:
                    self._stats.tasks_failed += 1
            if exc is not None and not isinstance(exc, CancelledError) and self._log_exceptions:
                log.error("%s task %s failed: %s", self._name, key if key is not None else "", exc, exc_info=exc)

        fut.add_done_callback(_cb)
        return fut
