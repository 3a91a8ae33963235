"""
Platform-wide exception hierarchy.

Services raise these types; the application factory registers one error
handler per type so every blueprint gets the same HTTP status codes.

Note that the record store itself never raises for a missing id. It returns
``None`` and lets the caller decide; services that must fail on a missing
record convert that into ``NotFoundError``.

Usage:
    from transitdocs.core.exceptions import NotFoundError, ValidationError

    raise NotFoundError(resource="Workflow item", resource_id=item_id)
    raise ValidationError("Invalid payload", details={"title": "is required"})
"""


class NotFoundError(Exception):
    """Raised when a requested record does not exist.

    Args:
        resource: Human-readable entity name (e.g. "Document", "QR code").
        resource_id: The id or code that was looked up. Logged, not returned.
    """

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        msg = f"{resource}"
        if resource_id is not None:
            msg += f" id={resource_id}"
        msg += " not found"
        super().__init__(msg)


class ValidationError(Exception):
    """Raised when a creation payload or patch fails validation.

    Maps to HTTP 400 with field-level ``details``.

    Args:
        message: Human-readable explanation of what failed.
        details: Field name -> error description.
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message)


class WorkflowTransitionError(Exception):
    """Raised when a workflow action cannot be applied to the item's stage.

    Only reachable for stages outside the known lifecycle; the known
    stages always have a defined next stage.
    """

    def __init__(self, item_id: str, action: str, current: str) -> None:
        super().__init__(f"Cannot '{action}' workflow item {item_id} (stage={current!r})")
        self.item_id = item_id
        self.action = action
        self.current_stage = current


class SeedDataError(RuntimeError):
    """Raised at startup when a seed fixture is missing or malformed.

    Fatal: ``create_app`` lets it propagate so the process never starts
    with partially loaded data.
    """

    def __init__(self, path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Seed fixture {self.path}: {reason}")
