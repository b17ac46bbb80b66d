# ABOUTME: FIFO queue of requests that arrived while the throttler was rate limited.
# ABOUTME: Entries are drained from the head by the ApiThrottler drain loop.
"""Retry queue records for rate-limited requests."""

from __future__ import annotations

import asyncio
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Deque, Iterator, Optional

AsyncAction = Callable[[], Awaitable[Any]]


@dataclass(eq=False)
class QueuedRequest:
    """A deferred request waiting for capacity.

    ``future`` is the caller's result handle. It is settled exactly once: with
    the action's value, with its exception, or by cancellation.
    """

    key: str
    action: AsyncAction
    future: asyncio.Future[Any]
    enqueued_at: float = field(default_factory=time.monotonic)

    def settle_from(self, task: asyncio.Task[Any]) -> None:
        """Copy the outcome of ``task`` into this request's future."""
        if self.future.done():
            return
        if task.cancelled():
            self.future.cancel()
            return
        exc = task.exception()
        if exc is not None:
            self.future.set_exception(exc)
        else:
            self.future.set_result(task.result())


class RetryQueue:
    """Strict FIFO queue of :class:`QueuedRequest` entries."""

    def __init__(self) -> None:
        self._entries: Deque[QueuedRequest] = deque()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[QueuedRequest]:
        return iter(self._entries)

    def enqueue(self, key: str, action: AsyncAction) -> QueuedRequest:
        loop = asyncio.get_running_loop()
        request = QueuedRequest(key=key, action=action, future=loop.create_future())
        self._entries.append(request)
        return request

    def pop_next(self) -> Optional[QueuedRequest]:
        if not self._entries:
            return None
        return self._entries.popleft()

    def discard(self, request: QueuedRequest) -> bool:
        """Remove ``request`` if it is still waiting; False if already gone."""
        try:
            self._entries.remove(request)
        except ValueError:
            return False
        return True

    def cancel_all(self) -> int:
        """Drop every pending entry and cancel its result handle.

        Returns the number of entries that still had a waiting caller.
        """
        count = 0
        while self._entries:
            request = self._entries.popleft()
            if not request.future.done():
                request.future.cancel()
                count += 1
        return count
