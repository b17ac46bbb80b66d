# ABOUTME: Tracks in-flight executions by caller-supplied request key.
# ABOUTME: Lets concurrent callers with the same key share one result.
"""Key-based in-flight request coalescing."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional


class RequestDeduplicator:
    """Map request keys to the task currently executing for that key.

    Keys are opaque strings; two logically different operations sharing a key
    are indistinguishable here.
    """

    def __init__(self) -> None:
        self._in_flight: Dict[str, asyncio.Task[Any]] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._in_flight

    def __len__(self) -> int:
        return len(self._in_flight)

    def get(self, key: str) -> Optional[asyncio.Task[Any]]:
        return self._in_flight.get(key)

    def track(self, key: str, task: asyncio.Task[Any]) -> None:
        """Register ``task`` for ``key`` until it settles."""
        self._in_flight[key] = task
        task.add_done_callback(lambda done: self._release(key, done))

    def _release(self, key: str, task: asyncio.Task[Any]) -> None:
        # A drained request may have replaced the entry with a newer task.
        if self._in_flight.get(key) is task:
            del self._in_flight[key]

    async def join(self, key: str) -> Any:
        """Wait for the in-flight execution of ``key`` and return its outcome."""
        task = self._in_flight[key]
        return await asyncio.shield(task)
