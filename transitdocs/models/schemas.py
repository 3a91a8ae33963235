"""
Input schemas - creation payload cleaning and typed partial updates.

Creation:
    clean_document_payload(data)     -> dict ready for RecordStore.create
    clean_workflow_item_payload(data)
    clean_qr_code_payload(data)

Partial update ("patch") types enumerate exactly which fields of an entity
may change. Unknown or immutable fields (``id``, creation timestamps,
``type`` of a document, ...) are rejected by name instead of being merged:

    patch = WorkflowItemPatch.from_payload(request.get_json())
    store.update("workflow_items", item_id, patch)

Every failure raises ``ValidationError`` with a field -> reason mapping.
"""

from transitdocs.core.exceptions import ValidationError
from transitdocs.models.records import (
    DOCUMENT_STATUSES,
    DOCUMENT_TYPES,
    QR_STATUSES,
    WORKFLOW_PRIORITIES,
    WORKFLOW_STAGES,
)

TEXT = None  # free text instead of an allowed-value set
LONG_TEXT = "long_text"  # free text without the length cap (document bodies)

MAX_TEXT_LENGTH = 10_000


def _check_value(value, allowed, *, nullable=False) -> tuple[object, str | None]:
    """Validate one field value. Returns (normalized_value, error_or_None)."""
    if value is None:
        if nullable:
            return None, None
        return None, "Must not be null."
    if not isinstance(value, str):
        return None, "Must be a string."
    if allowed is TEXT or allowed is LONG_TEXT:
        if allowed is TEXT and len(value) > MAX_TEXT_LENGTH:
            return None, f"Must be <= {MAX_TEXT_LENGTH} characters."
        if not nullable:
            value = value.strip()
            if not value:
                return None, "Must not be empty."
        return value, None
    if value not in allowed:
        return None, f"Must be one of: {', '.join(allowed)}."
    return value, None


def _as_mapping(data) -> dict:
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


# ── Creation payloads ────────────────────────────────────────────────────────


def _clean(data, resource: str, required: dict, optional: dict, nullable=frozenset()) -> dict:
    data = _as_mapping(data)
    errors: dict[str, str] = {}
    cleaned: dict = {}

    for name in sorted(set(data) - set(required) - set(optional)):
        errors[name] = "Unknown field."

    for name, allowed in required.items():
        if data.get(name) is None:
            errors[name] = f"{name} is required."
            continue
        value, err = _check_value(data[name], allowed)
        if err:
            errors[name] = err
        else:
            cleaned[name] = value

    for name, allowed in optional.items():
        if name not in data:
            continue
        if data[name] is None and name not in nullable:
            # Explicit null means "use the default".
            continue
        value, err = _check_value(data[name], allowed, nullable=name in nullable)
        if err:
            errors[name] = err
        else:
            cleaned[name] = value

    if errors:
        raise ValidationError(f"Invalid {resource} payload", details=errors)
    return cleaned


def clean_document_payload(data) -> dict:
    return _clean(
        data,
        "Document",
        required={"title": TEXT, "department": TEXT, "type": DOCUMENT_TYPES, "summary": TEXT},
        optional={"content": LONG_TEXT, "status": DOCUMENT_STATUSES},
        nullable=frozenset({"content"}),
    )


def clean_workflow_item_payload(data) -> dict:
    return _clean(
        data,
        "WorkflowItem",
        required={"title": TEXT, "description": TEXT, "department": TEXT},
        optional={"current_stage": WORKFLOW_STAGES, "priority": WORKFLOW_PRIORITIES},
    )


def clean_qr_code_payload(data) -> dict:
    return _clean(
        data,
        "QrCode",
        required={"code": TEXT, "title": TEXT, "equipment": TEXT, "description": TEXT},
        optional={"status": QR_STATUSES},
    )


# ── Patches ──────────────────────────────────────────────────────────────────


class RecordPatch:
    """Validated set of field changes for one entity type.

    Subclasses declare ``fields`` (name -> allowed values, ``TEXT`` or
    ``LONG_TEXT``) and optionally ``nullable`` for fields that may be cleared.
    """

    resource = "Record"
    fields: dict = {}
    nullable: frozenset = frozenset()

    def __init__(self, /, **changes):
        if not changes:
            raise ValidationError(
                f"Empty {self.resource} update",
                details={"fields": f"Supply at least one of: {', '.join(self.fields)}."},
            )
        errors: dict[str, str] = {}
        cleaned = {}
        for name, value in changes.items():
            if name not in self.fields:
                errors[name] = "Unknown or immutable field."
                continue
            value, err = _check_value(value, self.fields[name], nullable=name in self.nullable)
            if err:
                errors[name] = err
            else:
                cleaned[name] = value
        if errors:
            raise ValidationError(f"Invalid {self.resource} update", details=errors)
        self.changes = cleaned

    @classmethod
    def from_payload(cls, data):
        return cls(**_as_mapping(data))

    def apply_to(self, record) -> None:
        for name, value in self.changes.items():
            setattr(record, name, value)

    def __repr__(self):
        return f"{type(self).__name__}({self.changes!r})"


class DocumentPatch(RecordPatch):
    resource = "Document"
    fields = {"status": DOCUMENT_STATUSES, "content": LONG_TEXT}
    nullable = frozenset({"content"})


class WorkflowItemPatch(RecordPatch):
    resource = "WorkflowItem"
    fields = {
        "title": TEXT,
        "description": TEXT,
        "department": TEXT,
        "current_stage": WORKFLOW_STAGES,
        "priority": WORKFLOW_PRIORITIES,
    }


class QrCodePatch(RecordPatch):
    resource = "QrCode"
    fields = {
        "title": TEXT,
        "equipment": TEXT,
        "description": TEXT,
        "status": QR_STATUSES,
    }


class StatPatch(RecordPatch):
    resource = "Stat"
    fields = {"value": TEXT}
