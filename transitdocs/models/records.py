"""
Record models - documents, workflow items, QR job cards and stats.

Value sets are kept as tuples next to the models; validation against them
happens in ``transitdocs.models.schemas`` before anything reaches the store.
"""

from sqlalchemy import Column, DateTime, String, Text

from transitdocs.models import Base, iso, new_id, utcnow

DOCUMENT_TYPES = ("maintenance", "safety", "finance", "hr")
DOCUMENT_STATUSES = ("active", "archived")

# Ordered lifecycle; index order is the suggested progression.
WORKFLOW_STAGES = ("submitted", "review", "approved", "complete")
WORKFLOW_PRIORITIES = ("normal", "urgent")

QR_STATUSES = ("pending", "in_progress", "completed")


class Document(Base):
    """An uploaded or seeded document."""
    __tablename__ = "documents"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(300), nullable=False)
    department = Column(String(100), nullable=False)
    type = Column(String(20), nullable=False)  # maintenance, safety, finance, hr
    summary = Column(Text, nullable=False)
    content = Column(Text)
    uploaded_at = Column(DateTime, nullable=False, default=utcnow)
    status = Column(String(20), nullable=False, default="active")  # active, archived

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "department": self.department,
            "type": self.type,
            "summary": self.summary,
            "content": self.content,
            "uploaded_at": iso(self.uploaded_at),
            "status": self.status,
        }


class WorkflowItem(Base):
    """An item moving through the approval lifecycle."""
    __tablename__ = "workflow_items"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(300), nullable=False)
    description = Column(Text, nullable=False)
    current_stage = Column(String(20), nullable=False, default="submitted")
    priority = Column(String(20), nullable=False, default="normal")  # normal, urgent
    department = Column(String(100), nullable=False)
    submitted_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "current_stage": self.current_stage,
            "priority": self.priority,
            "department": self.department,
            "submitted_at": iso(self.submitted_at),
            "updated_at": iso(self.updated_at),
        }


class QrCode(Base):
    """A maintenance job card addressable by its printed QR code."""
    __tablename__ = "qr_codes"

    id = Column(String(36), primary_key=True, default=new_id)
    # Not unique: lookups by code return the earliest match.
    code = Column(String(100), nullable=False, index=True)
    title = Column(String(300), nullable=False)
    equipment = Column(String(200), nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    description = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "code": self.code,
            "title": self.title,
            "equipment": self.equipment,
            "status": self.status,
            "description": self.description,
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }


class Stat(Base):
    """One dashboard metric; value kept as text, parsed on read."""
    __tablename__ = "stats"

    id = Column(String(36), primary_key=True, default=new_id)
    metric = Column(String(100), unique=True, nullable=False)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "metric": self.metric,
            "value": self.value,
            "updated_at": iso(self.updated_at),
        }
