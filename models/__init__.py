from .automation import (
    ActionConfig,
    Automation,
    AutomationRecord,
    AutomationUpdate,
    ConditionConfig,
    FlatNode,
    TreeNode,
    Trigger,
)

__all__ = [
    "ActionConfig",
    "Automation",
    "AutomationRecord",
    "AutomationUpdate",
    "ConditionConfig",
    "FlatNode",
    "TreeNode",
    "Trigger",
]
