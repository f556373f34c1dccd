"""
Conversion utilities between Pydantic models and SQLAlchemy DB models.
"""

from typing import Any, Dict, List

from models import Automation, AutomationRecord, FlatNode, Trigger

from .models import AutomationModel


def trigger_to_json(trigger: Trigger) -> Dict[str, Any]:
    return trigger.model_dump(by_alias=True, exclude_none=True)


def nodes_to_json(nodes: List[FlatNode]) -> List[Dict[str, Any]]:
    """Serialize nodes to the persisted camelCase shape, omitting unset references."""
    return [node.model_dump(by_alias=True, exclude_none=True, mode="json") for node in nodes]


def pydantic_to_db_automation(
    automation: Automation,
    org_id: str,
    created_by: str,
    automation_id: str | None = None,
) -> AutomationModel:
    """
    Convert a Pydantic Automation model to a SQLAlchemy AutomationModel.

    Args:
        automation: Pydantic Automation model to convert
        org_id: Organization that owns the automation
        created_by: Id of the user creating it
        automation_id: Optional ID to assign (if None, will be generated on save)
    """
    return AutomationModel(
        id=automation_id,
        org_id=org_id,
        name=automation.name,
        description=automation.description,
        is_active=automation.is_active,
        trigger=trigger_to_json(automation.trigger),
        nodes=nodes_to_json(automation.nodes),
        created_by=created_by,
    )


def db_to_pydantic_automation(db_automation: AutomationModel) -> AutomationRecord:
    """
    Convert a SQLAlchemy AutomationModel to a Pydantic AutomationRecord.
    """
    return AutomationRecord(
        id=db_automation.id,
        org_id=db_automation.org_id,
        name=db_automation.name,
        description=db_automation.description,
        is_active=db_automation.is_active,
        trigger=Trigger.model_validate(db_automation.trigger),
        nodes=[FlatNode.model_validate(node) for node in db_automation.nodes],
        created_by=db_automation.created_by,
        created_at=db_automation.created_at,
        updated_at=db_automation.updated_at,
        last_triggered_at=db_automation.last_triggered_at,
        trigger_count=db_automation.trigger_count or 0,
    )
