"""Debouncing tailored to search-as-you-type inputs."""

from __future__ import annotations

from typing import Any, Callable, Optional

from throttle_debounce.config import settings
from throttle_debounce.services.timers import LoopTimer

__all__ = ["SearchDebouncer"]


class SearchDebouncer(LoopTimer):
    """Debounce search queries, skipping ones shorter than ``min_length``.

    Short queries fire ``on_clear_results`` instead of the search callback, so
    a UI can clear stale results once the user empties the field.
    """

    def __init__(
        self,
        delay: Optional[float] = None,
        min_length: Optional[int] = None,
        trim_query: Optional[bool] = None,
        on_clear_results: Optional[Callable[[], Any]] = None,
    ) -> None:
        super().__init__()
        self.delay = settings.debounce_delay_seconds if delay is None else max(0.0, float(delay))
        self.min_length = settings.search_min_length if min_length is None else min_length
        self.trim_query = settings.search_trim_query if trim_query is None else trim_query
        self.on_clear_results = on_clear_results
        self._last_query: Optional[str] = None

    @property
    def last_query(self) -> Optional[str]:
        return self._last_query

    def search(self, query: str, on_search: Callable[[str], Any]) -> None:
        processed = self._process(query)
        self._last_query = processed
        self._schedule(self.delay, self._deliver, processed, on_search)

    def would_trigger_search(self, query: str) -> bool:
        return len(self._process(query)) >= self.min_length

    def clear(self) -> None:
        self.cancel()
        self._last_query = None

    def dispose(self) -> None:
        self.clear()

    def _process(self, query: str) -> str:
        return query.strip() if self.trim_query else query

    def _deliver(self, query: str, on_search: Callable[[str], Any]) -> None:
        if self._last_query != query:
            return
        if len(query) >= self.min_length:
            self._invoke(on_search, query)
        elif self.on_clear_results is not None:
            self._invoke(self.on_clear_results)
