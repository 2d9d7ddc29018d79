"""Cancellation context for client calls."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable
from typing import TypeVar

from gqlhttp.exceptions import CancellationError

T = TypeVar("T")


class Context:
    """Cancellation signal with an optional deadline.

    A context is handed to :meth:`gqlhttp.GraphClient.run`; cancelling it, or
    letting its deadline pass, aborts the call with :class:`CancellationError`.
    ``cancel()`` must be called from the thread running the event loop.
    """

    def __init__(self, *, deadline: float | None = None) -> None:
        self._deadline = deadline
        self._cancelled = False
        self._cancel_event = asyncio.Event()

    @classmethod
    def with_timeout(cls, seconds: float) -> Context:
        """Create a context whose deadline is *seconds* from now."""
        return cls(deadline=time.monotonic() + seconds)

    @property
    def deadline(self) -> float | None:
        """Deadline on the :func:`time.monotonic` clock, or None."""
        return self._deadline

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def done(self) -> bool:
        return self._cancelled or self.expired

    def remaining(self) -> float | None:
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def cancel(self) -> None:
        self._cancelled = True
        self._cancel_event.set()

    def error(self) -> CancellationError:
        if self._cancelled:
            return CancellationError("context canceled")
        return CancellationError("context deadline exceeded")

    def check(self) -> None:
        """Raise :class:`CancellationError` if the context is done."""
        if self.done:
            raise self.error()

    async def run(self, awaitable: Awaitable[T]) -> T:
        """Await *awaitable*, aborting it if the context is cancelled or expires.

        Raises:
            CancellationError: The context finished first; the pending work
                has been cancelled.
        """
        if self.done:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise self.error()
        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._cancel_event.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter},
                timeout=self.remaining(),
                return_when=asyncio.FIRST_COMPLETED,
            )
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            waiter.cancel()

        if task in done:
            return task.result()

        task.cancel()
        await asyncio.wait({task})
        raise self.error()
