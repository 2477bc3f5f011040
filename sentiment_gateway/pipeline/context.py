"""Per-request cancellation and deadline tracking.

A :class:`RequestContext` travels with one inbound request through the
pipeline.  It answers two questions: "has the caller given up?" and "how
much time is left?".  The caller gives up when the deadline passes, when
someone calls :meth:`RequestContext.cancel`, or when the optional
disconnect probe (Starlette's ``Request.is_disconnected``) reports the
client is gone.

Cancellation is also observable while a remote call is in flight:
:meth:`RequestContext.wait_done` resolves as soon as the request is over,
so the pipeline can race it against the call and abandon the call early.
"""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable

from sentiment_gateway.utils.errors import RequestCancelledError


class RequestContext:
    """Deadline plus cancellation signal for a single request.

    Parameters
    ----------
    timeout:
        Seconds from now until the deadline; ``None`` means no deadline.
    is_disconnected:
        Optional async probe returning ``True`` once the client has gone.
    timer:
        Monotonic clock, injectable for tests.
    """

    def __init__(
        self,
        timeout: float | None = None,
        *,
        is_disconnected: Callable[[], Awaitable[bool]] | None = None,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._timer = timer
        self._deadline = None if timeout is None else timer() + timeout
        self._is_disconnected = is_disconnected
        self._cancel_reason: str | None = None
        self._cancelled = asyncio.Event()

    @property
    def deadline(self) -> float | None:
        return self._deadline

    def cancel(self, reason: str = "cancelled by caller") -> None:
        """Mark the request as abandoned.  Idempotent; the first reason wins."""
        if self._cancel_reason is None:
            self._cancel_reason = reason
            self._cancelled.set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline (never negative), or ``None``."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - self._timer())

    def deadline_exceeded(self) -> bool:
        return self._deadline is not None and self._timer() >= self._deadline

    async def done_reason(self) -> str | None:
        """Return why the request is over, or ``None`` while it is live."""
        if self._cancel_reason is not None:
            return self._cancel_reason
        if self.deadline_exceeded():
            return "deadline exceeded"
        if self._is_disconnected is not None and await self._is_disconnected():
            self.cancel("client disconnected")
            return self._cancel_reason
        return None

    async def ensure_active(self) -> None:
        """Raise :class:`RequestCancelledError` if the request is over."""
        reason = await self.done_reason()
        if reason is not None:
            raise RequestCancelledError(message=f"Request cancelled: {reason}")

    async def wait_done(self, poll_interval: float = 0.1) -> str:
        """Block until the request is over and return the reason.

        An explicit :meth:`cancel` wakes this immediately.  The disconnect
        probe has no push notification, so it is polled every
        *poll_interval* seconds.  The deadline is not waited on here; callers
        bound their own wait with :meth:`remaining`.
        """
        while True:
            reason = await self.done_reason()
            if reason is not None:
                return reason
            if self._is_disconnected is None:
                await self._cancelled.wait()
                continue
            try:
                await asyncio.wait_for(self._cancelled.wait(), timeout=poll_interval)
            except asyncio.TimeoutError:
                # Nothing was cancelled in this interval; poll the probe again.
                continue
