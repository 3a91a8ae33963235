"""
Search/Filter Engine - read-only document filtering.

    search(query_text, type_filter) -> list[SearchResult]

Starts from the full document list (upload date, newest first), keeps only
``type_filter`` when it is set and not ``"all"``, then keeps documents whose
title or summary contains ``query_text`` case-insensitively. No ranking.
Results are projections without the document content.
"""

import logging
from dataclasses import asdict, dataclass

logger = logging.getLogger(__name__)

ALL_TYPES = "all"


@dataclass(frozen=True)
class SearchResult:
    id: str
    title: str
    department: str
    date: str  # YYYY-MM-DD of the upload
    summary: str
    type: str

    @classmethod
    def from_document(cls, doc) -> "SearchResult":
        return cls(
            id=doc.id,
            title=doc.title,
            department=doc.department,
            date=doc.uploaded_at.date().isoformat() if doc.uploaded_at else "",
            summary=doc.summary,
            type=doc.type,
        )

    def to_dict(self):
        return asdict(self)


class SearchEngine:
    """Predicate filtering over the ``documents`` collection of a store."""

    def __init__(self, store):
        self.store = store

    def search(self, query_text: str | None = "", type_filter: str | None = None) -> list[SearchResult]:
        docs = self.store.list("documents")

        if type_filter and type_filter != ALL_TYPES:
            docs = [d for d in docs if d.type == type_filter]

        needle = (query_text or "").lower()
        if needle:
            docs = [
                d for d in docs
                if needle in d.title.lower() or needle in d.summary.lower()
            ]

        logger.debug("Search q=%r type=%r -> %d result(s)", query_text, type_filter, len(docs))
        return [SearchResult.from_document(d) for d in docs]
