"""
Seed data loader.

Reads the four JSON fixtures once at startup and inserts them into a
``RecordStore``:

    documents.json       [{title, department, type, summary, content?, status?, uploaded_at?}]
    workflow_items.json  [{title, description, department, current_stage?, priority?, submitted_at?}]
    qr_codes.json        [{code, title, equipment, description, status?, created_at?, updated_at?}]
    stats.json           [{metric, value}]

Ids are always generated. Timestamps are optional ISO dates; when absent
the record gets "now". Any missing file, invalid JSON or invalid record
raises ``SeedDataError`` and nothing is committed.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from transitdocs.core.exceptions import SeedDataError, ValidationError
from transitdocs.models.schemas import (
    clean_document_payload,
    clean_qr_code_payload,
    clean_workflow_item_payload,
)

logger = logging.getLogger(__name__)

DEFAULT_SEED_DIR = Path(__file__).resolve().parent.parent / "seed_data"

# collection -> (fixture file, payload cleaner, accepted timestamp fields)
SEED_FILES = {
    "documents": ("documents.json", clean_document_payload, ("uploaded_at",)),
    "workflow_items": ("workflow_items.json", clean_workflow_item_payload, ("submitted_at", "updated_at")),
    "qr_codes": ("qr_codes.json", clean_qr_code_payload, ("created_at", "updated_at")),
}
STATS_FILE = "stats.json"


def _read_array(path: Path) -> list:
    if not path.is_file():
        raise SeedDataError(path, "file not found")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SeedDataError(path, f"unreadable JSON ({exc})") from exc
    if not isinstance(data, list):
        raise SeedDataError(path, "top-level value must be a JSON array")
    return data


def _parse_timestamp(value, path: Path, index: int, field: str) -> datetime:
    if not isinstance(value, str):
        raise SeedDataError(path, f"record {index}: {field} must be an ISO date string")
    try:
        ts = datetime.fromisoformat(value)
    except ValueError as exc:
        raise SeedDataError(path, f"record {index}: {field} {value!r} is not an ISO date") from exc
    if ts.tzinfo is not None:
        ts = ts.astimezone(timezone.utc).replace(tzinfo=None)
    return ts


def _record_payload(raw, cleaner, ts_fields, path: Path, index: int) -> dict:
    if not isinstance(raw, dict):
        raise SeedDataError(path, f"record {index}: must be a JSON object")
    raw = dict(raw)
    timestamps = {
        field: _parse_timestamp(raw.pop(field), path, index, field)
        for field in ts_fields
        if raw.get(field) is not None
    }
    try:
        payload = cleaner(raw)
    except ValidationError as exc:
        raise SeedDataError(path, f"record {index}: {exc} {exc.details}") from exc
    # A seeded record that was never touched was last updated when created.
    if "updated_at" in ts_fields and "updated_at" not in timestamps and timestamps:
        timestamps["updated_at"] = next(iter(timestamps.values()))
    payload.update(timestamps)
    return payload


def _stat_payload(raw, path: Path, index: int) -> dict:
    if not isinstance(raw, dict) or not isinstance(raw.get("metric"), str) or not raw["metric"].strip():
        raise SeedDataError(path, f"record {index}: metric (string) is required")
    value = raw.get("value")
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise SeedDataError(path, f"record {index}: value must be an integer")
    try:
        value = int(value)
    except ValueError as exc:
        raise SeedDataError(path, f"record {index}: value {value!r} is not an integer") from exc
    return {"metric": raw["metric"].strip(), "value": str(value)}


def load_seed_data(store, seed_dir=None) -> dict[str, int]:
    """Populate ``store`` from the fixtures in ``seed_dir``.

    Returns:
        Mapping collection name -> number of records inserted.

    Raises:
        SeedDataError: on any missing or malformed fixture.
    """
    seed_dir = Path(seed_dir) if seed_dir else DEFAULT_SEED_DIR

    # Parse everything first so a bad fixture aborts before any insert.
    planned: dict[str, list[dict]] = {}
    for collection, (filename, cleaner, ts_fields) in SEED_FILES.items():
        path = seed_dir / filename
        planned[collection] = [
            _record_payload(raw, cleaner, ts_fields, path, i)
            for i, raw in enumerate(_read_array(path))
        ]

    stats_path = seed_dir / STATS_FILE
    stats = [_stat_payload(raw, stats_path, i) for i, raw in enumerate(_read_array(stats_path))]
    seen = set()
    for i, stat in enumerate(stats):
        if stat["metric"] in seen:
            raise SeedDataError(stats_path, f"record {i}: duplicate metric {stat['metric']!r}")
        seen.add(stat["metric"])
    planned["stats"] = stats

    with store.transaction() as session:
        for collection, payloads in planned.items():
            for payload in payloads:
                store.create(collection, payload, session=session)

    counts = {collection: len(payloads) for collection, payloads in planned.items()}
    logger.info("Seed data loaded from %s: %s", seed_dir, counts)
    return counts
