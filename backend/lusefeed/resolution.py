from __future__ import annotations

import logging
import threading

from lusefeed.cache import CacheEntry, ResultCache, Table
from lusefeed.errors import ChainExhausted
from lusefeed.providers.base import Provider
from lusefeed.providers.selector import fetch_with_fallback
from lusefeed.schemas.rows import build_table, fallback_table


logger = logging.getLogger(__name__)

FALLBACK_SOURCE = "fallback"


class ResolutionChain:
    """Serves the price table from cache, upstream providers or the fallback.

    Providers run one at a time in their configured order. Concurrent cache
    misses are coalesced: one caller resolves while the others wait and then
    read the fresh entry.
    """

    def __init__(self, providers: list[Provider], cache: ResultCache) -> None:
        self.providers = providers
        self.cache = cache
        self._resolving = threading.Lock()

    def resolve(self) -> Table:
        return self.resolve_entry().rows

    def resolve_entry(self) -> CacheEntry:
        cached = self.cache.get()
        if cached is not None:
            return cached

        with self._resolving:
            cached = self.cache.get()
            if cached is not None:
                return cached
            try:
                return self._resolve_upstream()
            except ChainExhausted as exc:
                logger.warning("%s; serving fallback table", exc)
                return self.cache.set(fallback_table(), FALLBACK_SOURCE)

    def _resolve_upstream(self) -> CacheEntry:
        result = fetch_with_fallback(self.providers)
        if result is None:
            raise ChainExhausted([provider.name for provider in self.providers])
        logger.info("Resolved %d rows from %s", len(result.rows), result.provider)
        return self.cache.set(build_table(result.rows), result.provider)
