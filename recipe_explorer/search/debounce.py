from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

from ..recipes.models import SearchFilters
from .config import DEFAULT_SEARCH_CONFIG

SearchFn = Callable[[str, "SearchFilters | None"], Awaitable[Any]]


class SearchDebouncer:
    """Run ``search`` only after input has been quiet for ``wait`` seconds.

    Each ``submit`` replaces whatever was pending, so the latest query wins.
    Blank queries clear the pending search without starting a new one.
    Must be used from inside a running event loop.
    """

    def __init__(self, search: SearchFn, wait: float = DEFAULT_SEARCH_CONFIG.debounce_seconds) -> None:
        self._search = search
        self._wait = wait
        self._pending: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def submit(self, query: str, filters: SearchFilters | None = None) -> None:
        self.cancel()
        query = query.strip()
        if not query:
            return
        self._pending = asyncio.get_running_loop().create_task(self._run(query, filters))

    async def _run(self, query: str, filters: SearchFilters | None) -> Any:
        await asyncio.sleep(self._wait)
        return await self._search(query, filters)

    def cancel(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def flush(self) -> Any | None:
        """Wait for the pending search, if any, and return its result.

        A submission made while waiting supersedes the awaited search; the
        newer one is followed instead, or ``None`` is returned when nothing
        replaced it.
        """
        while True:
            task = self._pending
            if task is None:
                return None
            try:
                # Cancelling the caller leaves the search pending
                return await asyncio.shield(task)
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise
            finally:
                if self._pending is task and task.done():
                    self._pending = None
