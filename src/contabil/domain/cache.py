"""In-process cache of per-period aggregations."""

import weakref
from typing import Callable, Optional

from contabil.config.logging import get_logger
from contabil.domain.aggregation import PeriodAggregator
from contabil.domain.catalog import StatementType

logger = get_logger(__name__)

CacheKey = tuple[int, int, StatementType]


class StatementCache:
    """Aggregators keyed by (client_id, year, statement_type).

    Entries are built lazily and dropped whenever the rows or the chart of
    accounts behind them change.
    """

    def __init__(self):
        self._entries: dict[CacheKey, PeriodAggregator] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

    def get(self, client_id: int, year: int, statement_type: StatementType) -> Optional[PeriodAggregator]:
        return self._entries.get((client_id, year, StatementType.parse(statement_type)))

    def get_or_build(
        self,
        client_id: int,
        year: int,
        statement_type: StatementType,
        build: Callable[[], PeriodAggregator],
    ) -> PeriodAggregator:
        """Return the cached aggregator, building and storing it on a miss."""
        key = (client_id, year, StatementType.parse(statement_type))
        aggregator = self._entries.get(key)
        if aggregator is not None:
            logger.debug("statement_cache_hit", client_id=client_id, year=year, statement_type=key[2].value)
            return aggregator
        aggregator = build()
        self._entries[key] = aggregator
        return aggregator

    def invalidate(
        self, client_id: int, year: Optional[int] = None, statement_type: Optional[StatementType] = None
    ) -> int:
        """Drop the entries of a client, optionally narrowed to a year and statement.

        Returns:
            Number of entries dropped
        """
        kind = StatementType.parse(statement_type) if statement_type is not None else None
        stale = [
            key
            for key in self._entries
            if key[0] == client_id
            and (year is None or key[1] == year)
            and (kind is None or key[2] == kind)
        ]
        for key in stale:
            del self._entries[key]
        if stale:
            logger.debug("statement_cache_invalidated", client_id=client_id, year=year, dropped=len(stale))
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()


_caches: "weakref.WeakKeyDictionary[object, StatementCache]" = weakref.WeakKeyDictionary()


def cache_for(db: object) -> StatementCache:
    """Return the cache shared by every service bound to the same database."""
    cache = _caches.get(db)
    if cache is None:
        cache = StatementCache()
        _caches[db] = cache
    return cache
