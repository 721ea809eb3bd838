"""Request throttle for provider calls.

This module provides the process-wide admission controller that bounds the
number of in-flight provider calls and spaces consecutive call starts by a
minimum interval. Waiters are admitted strictly in arrival order.
"""

from __future__ import annotations

import logging
import threading
import time
import types
from collections import deque
from typing import Any

from typing_extensions import Self

from kitchensync.shared.constants import BASE_MILLISECOND, NetworkConfig
from kitchensync.shared.errors import (
    ApplicationError,
    ErrorCode,
    ErrorContext,
    ThrottleShutdownError,
)
from kitchensync.shared.logging import log_operation_success

logger = logging.getLogger(__name__)


class RequestThrottle:
    """FIFO admission controller for outbound provider calls.

    A caller is admitted when it is at the head of the wait queue and fewer
    than ``max_concurrent_requests`` calls are active. On admission it
    reserves the next start slot, so admitted call starts are always at least
    ``min_interval_millis`` apart; the admitted caller sleeps out the
    remainder of the interval outside the lock while already holding its
    concurrency slot.

    Every ``acquire()`` must be paired with exactly one ``release()``,
    preferably through the context manager::

        with throttle:
            response = session.get(url)

    Args:
        max_concurrent_requests: Maximum number of in-flight calls (>= 1)
        min_interval_millis: Minimum spacing between call starts (>= 0)
    """

    def __init__(
        self,
        max_concurrent_requests: int = NetworkConfig.DEFAULT_MAX_CONCURRENT_REQUESTS,
        min_interval_millis: int = NetworkConfig.DEFAULT_MIN_INTERVAL_MILLIS,
    ) -> None:
        context = ErrorContext(
            operation="request_throttle_init",
            additional_data={
                "max_concurrent_requests": max_concurrent_requests,
                "min_interval_millis": min_interval_millis,
            },
        )
        if max_concurrent_requests < 1:
            raise ApplicationError(
                code=ErrorCode.VALIDATION_ERROR,
                message=f"max_concurrent_requests must be at least 1, got: {max_concurrent_requests}",
                context=context,
            )
        if min_interval_millis < 0:
            raise ApplicationError(
                code=ErrorCode.VALIDATION_ERROR,
                message=f"min_interval_millis must be non-negative, got: {min_interval_millis}",
                context=context,
            )

        self.max_concurrent_requests = max_concurrent_requests
        self.min_interval_millis = min_interval_millis
        self._min_interval = min_interval_millis * BASE_MILLISECOND

        self._condition = threading.Condition(threading.Lock())
        self._waiters: deque[object] = deque()
        self._active_count = 0
        self._next_start: float | None = None
        self._last_start_time: float | None = None
        self._admitted_total = 0
        self._shutdown = threading.Event()

        log_operation_success(
            logger=logger,
            operation="request_throttle_init",
            duration_ms=0,
            context=context,
        )

    def acquire(self) -> None:
        """Block until the caller may start a provider call.

        Raises:
            ThrottleShutdownError: If the throttle is or gets shut down
        """
        ticket = object()
        with self._condition:
            if self._shutdown.is_set():
                raise ThrottleShutdownError
            self._waiters.append(ticket)
            try:
                while not self._shutdown.is_set() and (
                    self._waiters[0] is not ticket
                    or self._active_count >= self.max_concurrent_requests
                ):
                    self._condition.wait()
            except BaseException:
                self._waiters.remove(ticket)
                self._condition.notify_all()
                raise

            if self._shutdown.is_set():
                self._waiters.remove(ticket)
                raise ThrottleShutdownError

            self._waiters.popleft()
            self._active_count += 1
            self._admitted_total += 1

            now = time.monotonic()
            start_at = now if self._next_start is None else max(now, self._next_start)
            self._next_start = start_at + self._min_interval
            self._last_start_time = start_at
            queued = len(self._waiters)
            # the next waiter becomes head and may be admissible
            self._condition.notify_all()

        logger.debug(
            "Throttle admitted call",
            extra={
                "operation": "throttle_acquire",
                "context": {
                    "delay_ms": round((start_at - now) / BASE_MILLISECOND, 2),
                    "queued": queued,
                },
            },
        )

        remaining = start_at - time.monotonic()
        while remaining > 0:
            if self._shutdown.wait(remaining):
                self.release()
                raise ThrottleShutdownError
            remaining = start_at - time.monotonic()

    def release(self) -> None:
        """Mark an admitted call as finished and wake the queue head.

        Raises:
            ApplicationError: If there is no active call to release
        """
        with self._condition:
            if self._active_count <= 0:
                raise ApplicationError(
                    code=ErrorCode.CONCURRENCY_ERROR,
                    message="release() called without a matching acquire()",
                    context=ErrorContext(operation="throttle_release"),
                )
            self._active_count -= 1
            self._condition.notify_all()

    def shutdown(self) -> None:
        """Reject current waiters and every future acquire()."""
        self._shutdown.set()
        with self._condition:
            self._condition.notify_all()
        logger.debug(
            "Request throttle shut down",
            extra={"operation": "throttle_shutdown"},
        )

    @property
    def is_shutdown(self) -> bool:
        return self._shutdown.is_set()

    @property
    def active_count(self) -> int:
        with self._condition:
            return self._active_count

    @property
    def queue_depth(self) -> int:
        with self._condition:
            return len(self._waiters)

    @property
    def last_start_time(self) -> float | None:
        """Monotonic start time of the most recently admitted call."""
        with self._condition:
            return self._last_start_time

    def get_stats(self) -> dict[str, Any]:
        """Snapshot of the throttle state for diagnostics."""
        with self._condition:
            return {
                "max_concurrent_requests": self.max_concurrent_requests,
                "min_interval_millis": self.min_interval_millis,
                "active_count": self._active_count,
                "queue_depth": len(self._waiters),
                "admitted_total": self._admitted_total,
                "shutdown": self._shutdown.is_set(),
            }

    def __enter__(self) -> Self:
        self.acquire()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        self.release()

    def __repr__(self) -> str:
        return (
            f"RequestThrottle(max_concurrent_requests={self.max_concurrent_requests}, "
            f"min_interval_millis={self.min_interval_millis})"
        )
