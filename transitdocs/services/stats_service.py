"""
Stats Aggregator - flat metric name -> integer counters.

Values are stored as text on ``Stat`` rows and parsed for presentation.
Only ``documents_processed`` is derived automatically (bumped by
``document_service.create_document``); every other metric comes from the
seed fixture and is not recomputed.
"""

import logging

from transitdocs.models.schemas import StatPatch

logger = logging.getLogger(__name__)

DOCUMENTS_PROCESSED = "documents_processed"


def _as_int(value: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Non-integer stat value %r treated as 0", value)
        return 0


class StatsAggregator:
    """Upsert/read access to the ``stats`` collection of a store."""

    def __init__(self, store):
        self.store = store

    def set(self, metric: str, value: int, *, session=None):
        """Upsert ``metric`` to ``value``; returns the Stat row."""
        with self.store.session_scope(session) as s:
            existing = self.store.find_first("stats", metric=metric, session=s)
            if existing is None:
                return self.store.create("stats", {"metric": metric, "value": str(value)}, session=s)
            return self.store.update("stats", existing.id, StatPatch(value=str(value)), session=s)

    def bump(self, metric: str, *, session=None) -> int:
        """Increment ``metric`` by one (missing counts as 0); returns the new value."""
        with self.store.session_scope(session) as s:
            existing = self.store.find_first("stats", metric=metric, session=s)
            new_value = (_as_int(existing.value) if existing else 0) + 1
            self.set(metric, new_value, session=s)
        logger.debug("Stat %s -> %d", metric, new_value)
        return new_value

    def get(self, metric: str) -> int | None:
        stat = self.store.find_first("stats", metric=metric)
        return _as_int(stat.value) if stat else None

    def get_all(self) -> dict[str, int]:
        return {stat.metric: _as_int(stat.value) for stat in self.store.list("stats")}
