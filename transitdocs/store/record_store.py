"""
Record Store - uniform create/get/list/update over the four collections.

The store owns a private SQLAlchemy engine (in-memory SQLite by default)
and is constructed explicitly by whoever serves requests; there is no
process-wide instance.

Contract:
    - ``get`` / ``update`` return ``None`` for an unknown id; they never raise
      for a missing record. Callers decide what "absent" means.
    - ``update`` only accepts the patch type registered for the collection,
      refreshes ``updated_at`` where the entity has one and never touches
      ``id`` or the creation timestamp.
    - Every operation runs under one re-entrant lock (single writer at a
      time). Read-modify-write sequences made of several calls are not
      isolated from each other unless they share a ``transaction()``.

Usage:
    store = RecordStore()
    doc = store.create("documents", {"title": ..., "type": "finance", ...})
    store.get("documents", doc.id)

    with store.transaction() as session:
        item = store.get("workflow_items", item_id, session=session)
        store.update("workflow_items", item_id, patch, session=session)
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass

from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from transitdocs.models import Base, utcnow
from transitdocs.models.records import Document, QrCode, Stat, WorkflowItem
from transitdocs.models.schemas import (
    DocumentPatch,
    QrCodePatch,
    RecordPatch,
    StatPatch,
    WorkflowItemPatch,
)

logger = logging.getLogger(__name__)

IN_MEMORY_URL = "sqlite://"


@dataclass(frozen=True)
class Collection:
    """Static description of one record collection."""
    name: str
    model: type
    patch_type: type
    created_field: str
    # Column used by list(); descending unless ``list_ascending``.
    order_field: str
    list_ascending: bool = False


COLLECTIONS: dict[str, Collection] = {
    c.name: c
    for c in (
        Collection("documents", Document, DocumentPatch, "uploaded_at", "uploaded_at"),
        Collection("workflow_items", WorkflowItem, WorkflowItemPatch, "submitted_at", "submitted_at"),
        Collection("qr_codes", QrCode, QrCodePatch, "created_at", "created_at"),
        Collection("stats", Stat, StatPatch, "updated_at", "metric", list_ascending=True),
    )
}


def _collection(name: str) -> Collection:
    try:
        return COLLECTIONS[name]
    except KeyError:
        raise ValueError(
            f"Unknown collection: {name!r}. Use one of: {', '.join(COLLECTIONS)}"
        ) from None


class RecordStore:
    """In-memory keyed collections of typed records."""

    def __init__(self, database_url: str = IN_MEMORY_URL, *, echo: bool = False):
        engine_kwargs = {"echo": echo}
        if database_url.startswith("sqlite"):
            # One shared connection, otherwise each pool checkout of an
            # in-memory URL would see a fresh empty database.
            engine_kwargs.update(
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        self._engine = create_engine(database_url, **engine_kwargs)
        Base.metadata.create_all(self._engine)
        self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        self._lock = threading.RLock()
        logger.debug("RecordStore ready on %s", self._engine.url)

    # ── Transactions ─────────────────────────────────────────────────────

    @contextmanager
    def transaction(self):
        """Run several store calls atomically; yields the shared session."""
        with self._lock, self._session_factory() as session, session.begin():
            yield session

    @contextmanager
    def session_scope(self, session):
        """Join ``session`` when given, otherwise run in a fresh transaction."""
        if session is not None:
            yield session
        else:
            with self.transaction() as own:
                yield own

    # ── Operations ───────────────────────────────────────────────────────

    def create(self, collection: str, payload: dict, *, session=None):
        """Insert a new record and return it with id/defaults filled in.

        ``payload`` must already be cleaned (see ``transitdocs.models.schemas``);
        fields left out get the model defaults (status, stage, priority,
        timestamps).
        """
        coll = _collection(collection)
        with self.session_scope(session) as s:
            record = coll.model(**payload)
            s.add(record)
            s.flush()
            logger.debug("Created %s id=%s", coll.model.__name__, record.id)
            return record

    def get(self, collection: str, record_id: str, *, session=None):
        coll = _collection(collection)
        with self.session_scope(session) as s:
            return s.get(coll.model, record_id)

    def list(self, collection: str, *, session=None) -> list:
        """All records, newest first by the collection's timestamp; ties by id."""
        coll = _collection(collection)
        order_col = getattr(coll.model, coll.order_field)
        stmt = select(coll.model).order_by(
            order_col.asc() if coll.list_ascending else order_col.desc(),
            coll.model.id,
        )
        with self.session_scope(session) as s:
            return list(s.scalars(stmt))

    def update(self, collection: str, record_id: str, patch: RecordPatch, *, session=None):
        """Apply ``patch`` to the record; ``None`` if ``record_id`` is unknown."""
        coll = _collection(collection)
        if not isinstance(patch, coll.patch_type):
            raise TypeError(
                f"{collection} expects {coll.patch_type.__name__}, got {type(patch).__name__}"
            )
        with self.session_scope(session) as s:
            record = s.get(coll.model, record_id)
            if record is None:
                logger.info("Update on missing %s id=%s", coll.model.__name__, record_id)
                return None
            patch.apply_to(record)
            if hasattr(record, "updated_at"):
                record.updated_at = utcnow()
            s.flush()
            return record

    def find_first(self, collection: str, *, session=None, **filters):
        """Earliest-created record whose columns equal ``filters``, or ``None``."""
        coll = _collection(collection)
        stmt = (
            select(coll.model)
            .filter_by(**filters)
            .order_by(getattr(coll.model, coll.created_field).asc(), coll.model.id)
            .limit(1)
        )
        with self.session_scope(session) as s:
            return s.scalars(stmt).first()

    def count(self, collection: str, *, session=None) -> int:
        coll = _collection(collection)
        with self.session_scope(session) as s:
            return s.scalar(select(func.count()).select_from(coll.model))

    def dispose(self) -> None:
        """Release the engine; the in-memory data is gone afterwards."""
        self._engine.dispose()
