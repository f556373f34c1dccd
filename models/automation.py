from datetime import datetime
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

NodeType = Literal["condition", "action"]
ConditionOperator = Literal["equals", "not_equals", "contains", "exists"]


class ConditionConfig(BaseModel):
    field: str = Field(..., description="Record field to evaluate, e.g. priorityLevel")
    operator: ConditionOperator
    value: Any = None


class ActionConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    target_type: str = Field(..., alias="targetType", description="Identifier registered in target registry")
    action_type: Literal["update_status"] = Field("update_status", alias="actionType")
    new_status: str = Field(..., alias="newStatus")


class FlatNode(BaseModel):
    """
    Persisted form of a workflow node. Successors are referenced by id:
    for condition nodes nextNodeId is the true branch and elseNodeId the false
    branch, for action nodes nextNodeId is the sequential successor.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: NodeType
    condition: Optional[ConditionConfig] = None
    action: Optional[ActionConfig] = None
    next_node_id: Optional[str] = Field(None, alias="nextNodeId")
    else_node_id: Optional[str] = Field(None, alias="elseNodeId")

    @model_validator(mode="after")
    def check_payload_matches_type(self) -> "FlatNode":
        if self.condition is not None and self.action is not None:
            raise ValueError(f"Node {self.id} cannot have both condition and action defined")
        if self.type == "condition" and self.condition is None:
            raise ValueError(f"Condition node {self.id} must have a condition defined")
        if self.type == "action" and self.action is None:
            raise ValueError(f"Action node {self.id} must have an action defined")
        if self.type == "action" and self.else_node_id is not None:
            raise ValueError(f"Action node {self.id} cannot define elseNodeId")
        return self

    def references(self) -> List[str]:
        """Ids this node points at, true/sequential branch first."""
        return [ref for ref in (self.next_node_id, self.else_node_id) if ref]


class TreeNode(BaseModel):
    """
    In-memory form used for editing and rendering. Children are owned:
    `next` is the sequential successor of an action node, and for a condition
    node it is the same object as `true_branch`.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: NodeType
    config: Union[ConditionConfig, ActionConfig]
    next: Optional["TreeNode"] = None
    true_branch: Optional["TreeNode"] = Field(None, alias="trueBranch")
    false_branch: Optional["TreeNode"] = Field(None, alias="falseBranch")


TreeNode.model_rebuild()


class Trigger(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    object_type: str = Field(..., alias="objectType", description="Identifier registered in trigger registry")
    from_status: Optional[str] = Field(None, alias="fromStatus")
    to_status: str = Field(..., alias="toStatus")

    @field_validator("to_status")
    @classmethod
    def to_status_required(cls, value: str) -> str:
        if not value:
            raise ValueError("Trigger status is required")
        return value


class Automation(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(..., description="Human friendly name for the automation")
    description: Optional[str] = None
    is_active: bool = Field(False, alias="isActive")
    trigger: Trigger
    nodes: List[FlatNode] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def name_required(cls, value: str) -> str:
        if not value:
            raise ValueError("Automation name is required")
        return value

    @field_validator("nodes")
    @classmethod
    def nodes_required(cls, value: List[FlatNode]) -> List[FlatNode]:
        if not value:
            raise ValueError("At least one node is required")
        return value


class AutomationRecord(Automation):
    """An automation as returned by the store, with ownership and tracking fields."""

    id: str
    org_id: str = Field(..., alias="orgId")
    created_by: str = Field(..., alias="createdBy")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")
    last_triggered_at: Optional[datetime] = Field(None, alias="lastTriggeredAt")
    trigger_count: int = Field(0, alias="triggerCount")


class AutomationUpdate(BaseModel):
    """Partial update; only fields that are set are applied."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = Field(None, alias="isActive")
    trigger: Optional[Trigger] = None
    nodes: Optional[List[FlatNode]] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value:
            raise ValueError("Automation name cannot be empty")
        return value

    @field_validator("nodes")
    @classmethod
    def nodes_not_empty(cls, value: Optional[List[FlatNode]]) -> Optional[List[FlatNode]]:
        if value is not None and not value:
            raise ValueError("At least one node is required")
        return value
