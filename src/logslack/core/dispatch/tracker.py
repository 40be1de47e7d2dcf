from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable, Iterator
from concurrent.futures import Executor, ThreadPoolExecutor
from contextlib import contextmanager

from .errors import ErrorHandler, LoggingErrorHandler

logger = logging.getLogger("logslack.dispatch")

_DEFAULT_MAX_WORKERS = 4

_send_state = threading.local()


def in_tracked_send() -> bool:
    """True while the current thread is building or posting a tracked send."""
    return getattr(_send_state, "depth", 0) > 0


@contextmanager
def _mark_send() -> Iterator[None]:
    _send_state.depth = getattr(_send_state, "depth", 0) + 1
    try:
        yield
    finally:
        _send_state.depth -= 1


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class DispatchTracker:
    """Runs sends on a worker pool and waits for all of them on drain.

    The counter and the idle event only change together under ``_lock``; the
    event is set exactly when nothing is in flight.
    """

    def __init__(
        self,
        executor: Executor | None = None,
        error_handler: ErrorHandler | None = None,
        max_workers: int | None = None,
    ) -> None:
        self._owns_executor = executor is None
        if executor is None:
            workers = max_workers if max_workers is not None else _get_int_env("LOGSLACK_MAX_WORKERS", _DEFAULT_MAX_WORKERS)
            executor = ThreadPoolExecutor(max_workers=max(1, workers), thread_name_prefix="logslack-send")
        self._executor = executor
        self.error_handler = error_handler or LoggingErrorHandler()
        self._lock = threading.Lock()
        self._idle = threading.Event()
        self._idle.set()
        self._count = 0

    @property
    def in_flight(self) -> int:
        with self._lock:
            return self._count

    def _acquire(self) -> None:
        with self._lock:
            self._count += 1
            self._idle.clear()
            logger.debug("Watched task count: %d", self._count)

    def _release(self) -> None:
        with self._lock:
            self._count -= 1
            logger.debug("Watched task count: %d", self._count)
            if self._count == 0:
                logger.debug("Watched task count is zero, setting idle event")
                self._idle.set()

    @contextmanager
    def track(self) -> Iterator[None]:
        """Count synchronous work on the caller's thread as in flight."""
        self._acquire()
        try:
            with _mark_send():
                yield
        finally:
            self._release()

    def submit(self, operation: Callable[[], object]) -> None:
        self._acquire()
        try:
            self._executor.submit(self._run, operation)
        except Exception as exc:
            self._release()
            self.error_handler.error("Unable to schedule Slack send", exc)

    def _run(self, operation: Callable[[], object]) -> None:
        # Records logged here (httpx included) must not come back as notifications.
        with _mark_send():
            try:
                operation()
            except Exception as exc:
                self.error_handler.error("Error sending message to Slack", exc)
            finally:
                logger.debug("Watched task completed")
                self._release()

    def drain(self, timeout: float | None = None) -> bool:
        """Block until every submitted send has settled.

        Returns False only when ``timeout`` elapses first.
        """
        logger.debug("Waiting for all tasks to complete")
        done = self._idle.wait(timeout)
        if done:
            logger.debug("All tasks completed")
        else:
            logger.warning("Timed out waiting for %d in-flight Slack sends", self.in_flight)
        return done

    def shutdown(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=True)
