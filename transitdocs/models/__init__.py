"""
ORM base and shared column helpers.

All records live in a private in-memory database owned by a
``RecordStore`` instance (see ``transitdocs.store``). There is no
module-level session or engine: import the models, never a ``db`` object.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for every record type."""


def new_id() -> str:
    """Opaque record id (UUID4 string)."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Current UTC time as a naive datetime.

    SQLite drops tzinfo on round-trip, so records carry naive UTC values
    everywhere to keep freshly created and re-read records identical.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
