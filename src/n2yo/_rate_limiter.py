"""Sliding-window rate limiter with an optional FIFO request queue.

N2YO enforces per-hour transaction limits on each API key (1000/hour
for positions and TLE, 100/hour for passes and above). The limiter keeps
the timestamps of requests made in the trailing window and either
admits, queues or rejects each new request.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from n2yo._errors import RateLimitError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_U32_MAX = 2**32 - 1


@dataclass
class RateLimitConfig:
    """Configuration for client-side rate limiting.

    Args:
        max_per_hour: Maximum requests per rolling window.
        window: Window length in seconds.
        queue_requests: Queue requests over the limit instead of raising
            :class:`~n2yo.RateLimitError`.
        request_delay: Pause in seconds between queued requests.
        retry_delay: Pause in seconds before re-checking capacity while
            the queue is blocked.
    """

    max_per_hour: int = 1000
    window: float = 3600.0
    queue_requests: bool = True
    request_delay: float = 0.1
    retry_delay: float = 1.0

    @classmethod
    def disabled(cls) -> RateLimitConfig:
        """Create a configuration that disables rate limiting.

        Returns:
            A RateLimitConfig with an effectively unlimited ceiling.
        """
        return cls(max_per_hour=_U32_MAX)

    def __str__(self) -> str:
        return (
            f"RateLimitConfig(max_per_hour={self.max_per_hour}, "
            f"window={self.window}, queue_requests={self.queue_requests})"
        )

    def __repr__(self) -> str:
        return self.__str__()


@dataclass
class RateLimitStatus:
    """Snapshot of rate limiter state."""

    requests_this_hour: int
    max_per_hour: int
    queue_length: int
    can_make_request: bool


@dataclass
class _PendingRequest:
    operation: Callable[[], Awaitable[Any]]
    future: asyncio.Future


class RateLimiter:
    """Sliding-window rate limiter that tracks request timestamps.

    Requests over the ceiling wait in a FIFO queue drained by a single
    background task. Not thread-safe; all calls must come from the same
    event loop.

    Args:
        config: Rate limit configuration.
        log: Diagnostic hook receiving debug messages. Defaults to this
            module's logger.
    """

    def __init__(
        self,
        config: RateLimitConfig | None = None,
        log: Callable[[str], None] | None = None,
    ) -> None:
        self._config = config if config is not None else RateLimitConfig()
        self._log = log if log is not None else logger.debug
        self._timestamps: deque[float] = deque()
        self._queue: deque[_PendingRequest] = deque()
        self._processing = False
        self._drain_task: asyncio.Task | None = None

    @property
    def config(self) -> RateLimitConfig:
        return self._config

    def _prune(self) -> None:
        """Drop timestamps that fell out of the window."""
        cutoff = time.monotonic() - self._config.window
        while self._timestamps and self._timestamps[0] <= cutoff:
            self._timestamps.popleft()

    def can_make_request(self) -> bool:
        """Whether a request would be admitted right now."""
        self._prune()
        return len(self._timestamps) < self._config.max_per_hour

    def _record(self) -> None:
        self._timestamps.append(time.monotonic())

    async def submit(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run *operation* once the rate limit allows it.

        Args:
            operation: Zero-argument coroutine function performing one
                request.

        Returns:
            The operation's result.

        Raises:
            RateLimitError: If the ceiling is reached and queueing is
                disabled.
        """
        if not self._queue and self.can_make_request():
            self._record()
            return await operation()

        if not self._config.queue_requests:
            self._log(
                f"[RateLimit] Rejected: {len(self._timestamps)} requests "
                f"in window (limit {self._config.max_per_hour})"
            )
            raise RateLimitError(
                f"Local rate limit of {self._config.max_per_hour} requests "
                f"per {self._config.window:g}s exceeded"
            )

        future = asyncio.get_running_loop().create_future()
        self._queue.append(_PendingRequest(operation, future))
        self._log(f"[RateLimit] Queued request (queue length {len(self._queue)})")
        self._schedule_drain()
        return await future

    def _schedule_drain(self) -> None:
        if self._processing:
            return
        self._processing = True
        self._drain_task = asyncio.get_running_loop().create_task(self._drain())

    async def _drain(self) -> None:
        """Execute queued requests in FIFO order as capacity allows."""
        try:
            while self._queue:
                if not self.can_make_request():
                    await asyncio.sleep(self._config.retry_delay)
                    continue

                pending = self._queue.popleft()
                self._record()
                try:
                    result = await pending.operation()
                except asyncio.CancelledError:
                    if not pending.future.done():
                        pending.future.set_exception(
                            RateLimitError("Client closed while queued request was running")
                        )
                    raise
                except Exception as exc:
                    if not pending.future.done():
                        pending.future.set_exception(exc)
                else:
                    if not pending.future.done():
                        pending.future.set_result(result)

                if self._queue:
                    await asyncio.sleep(self._config.request_delay)
        finally:
            self._processing = False
            self._drain_task = None

    def status(self) -> RateLimitStatus:
        """Return the current request count, ceiling and queue depth."""
        self._prune()
        return RateLimitStatus(
            requests_this_hour=len(self._timestamps),
            max_per_hour=self._config.max_per_hour,
            queue_length=len(self._queue),
            can_make_request=len(self._timestamps) < self._config.max_per_hour,
        )

    def close(self) -> None:
        """Cancel the drain task and fail any requests still queued."""
        if self._drain_task is not None:
            self._drain_task.cancel()
            self._drain_task = None
        self._processing = False
        while self._queue:
            pending = self._queue.popleft()
            if not pending.future.done():
                pending.future.set_exception(
                    RateLimitError("Client closed before queued request ran")
                )
