"""
SQLAlchemy ORM models for persistence layer.
Only the automation is persisted - the trigger and the workflow nodes are
stored as JSON within the automation record, nodes in their flat form.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AutomationModel(Base):
    """
    Database model for a workflow automation, scoped to one organization.
    """

    __tablename__ = "workflow_automations"
    __table_args__ = (Index("ix_workflow_automations_org_active", "org_id", "is_active"),)

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    org_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=False, nullable=False)

    # Trigger stored as JSON: {"objectType": "...", "fromStatus": "...", "toStatus": "..."}
    trigger = Column(JSON, nullable=False)

    # Nodes stored as the flat array: [{"id": "...", "type": "...", "nextNodeId": "...", ...}, ...]
    nodes = Column(JSON, default=list, nullable=False)

    created_by = Column(String, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)
    last_triggered_at = Column(DateTime, nullable=True)
    trigger_count = Column(Integer, default=0, nullable=False)

    def __repr__(self) -> str:
        return f"<AutomationModel(id={self.id}, org_id={self.org_id}, name={self.name})>"
