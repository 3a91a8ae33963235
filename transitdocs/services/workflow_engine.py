"""
Workflow Engine - approval actions on workflow items.

Stage lifecycle (suggested order, not a guard on direct updates):

    submitted -> review -> approved -> complete

Actions:
    approve   next stage from STAGE_TRANSITIONS; ``complete`` stays ``complete``
    reject    back to ``submitted`` from any stage

The store does not enforce monotonic stages: a PATCH may set any known
stage directly. A stage outside the lifecycle is never coerced; ``approve``
raises ``WorkflowTransitionError`` for it.

Usage:
    engine = WorkflowEngine(store)
    item = engine.approve(item_id)
    engine.pending_items()
"""

import logging

from transitdocs.core.exceptions import NotFoundError, WorkflowTransitionError
from transitdocs.models.schemas import WorkflowItemPatch

logger = logging.getLogger(__name__)

STAGE_TRANSITIONS = {
    "submitted": "review",
    "review": "approved",
    "approved": "complete",
    "complete": "complete",
}

REJECT_STAGE = "submitted"
TERMINAL_STAGE = "complete"


class WorkflowEngine:
    """Domain actions for workflow items, layered on a RecordStore."""

    collection = "workflow_items"

    def __init__(self, store):
        self.store = store

    def _load(self, item_id: str, session):
        item = self.store.get(self.collection, item_id, session=session)
        if item is None:
            raise NotFoundError(resource="Workflow item", resource_id=item_id)
        return item

    def approve(self, item_id: str):
        """Advance the item one stage; no-op (besides ``updated_at``) at ``complete``."""
        with self.store.transaction() as session:
            item = self._load(item_id, session)
            current = item.current_stage
            next_stage = STAGE_TRANSITIONS.get(current)
            if next_stage is None:
                raise WorkflowTransitionError(item_id, "approve", current)
            item = self.store.update(
                self.collection, item_id, WorkflowItemPatch(current_stage=next_stage), session=session,
            )
        logger.info("Workflow item %s approved: %s -> %s", item_id, current, next_stage)
        return item

    def reject(self, item_id: str):
        """Send the item back to ``submitted`` regardless of its stage."""
        with self.store.transaction() as session:
            current = self._load(item_id, session).current_stage
            item = self.store.update(
                self.collection, item_id, WorkflowItemPatch(current_stage=REJECT_STAGE), session=session,
            )
        logger.info("Workflow item %s rejected: %s -> %s", item_id, current, REJECT_STAGE)
        return item

    def pending_items(self) -> list:
        """Items not yet complete, in store list order (newest submission first)."""
        return [i for i in self.store.list(self.collection) if i.current_stage != TERMINAL_STAGE]

    @staticmethod
    def available_actions(item) -> list[str]:
        if item.current_stage in STAGE_TRANSITIONS and item.current_stage != TERMINAL_STAGE:
            return ["approve", "reject"]
        return ["reject"]
