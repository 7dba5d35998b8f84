from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Generic, Optional, TypeVar

T = TypeVar("T")

_log = logging.getLogger(__name__)


class SingleFlightGate(Generic[T]):
    """Deduplicates concurrent async work behind a single in-flight task.

    While a task is in flight, ``run_or_join`` hands back that same task and
    never calls the producer. The slot is released by a done-callback on the
    task itself, so the next call after completion (success, failure or
    cancellation) starts fresh work.

    All access must happen on the owning event loop; ``run_or_join`` does not
    await, so the check-and-set cannot interleave with other coroutines.
    """

    def __init__(self) -> None:
        self._in_flight: Optional[asyncio.Future[T]] = None

    @property
    def has_in_flight(self) -> bool:
        return self._in_flight is not None

    def run_or_join(self, producer: Callable[[], Awaitable[T]]) -> asyncio.Future[T]:
        existing = self._in_flight
        if existing is not None:
            _log.debug("joining in-flight task %r", existing)
            return existing
        task = asyncio.ensure_future(producer())
        self._in_flight = task
        # Registered before any caller can await the task, so the slot is
        # already free when waiters resume.
        task.add_done_callback(self._release)
        return task

    def clear(self) -> None:
        """Forget the current task without cancelling it.

        Holders of the old handle still observe its completion; the next
        ``run_or_join`` starts independent work right away.
        """
        self._in_flight = None

    def _release(self, task: asyncio.Future[T]) -> None:
        # A task orphaned by clear() must not release a newer task's slot.
        if self._in_flight is task:
            self._in_flight = None
