from typing import Dict, Iterable

from graph import ValidationResult, validate_flat_array
from models import Automation, FlatNode, Trigger
from registry import Registry


class UnknownRegistryTypeError(ValueError):
    """Raised when an automation references an unknown trigger object type or action target."""


class AutomationStructureError(ValueError):
    """Raised when a node array fails the structural checks and must not be persisted."""

    def __init__(self, result: ValidationResult) -> None:
        super().__init__(result.error)
        self.result = result


def validate_trigger(trigger: Trigger, registries: Dict[str, Registry]) -> Trigger:
    trigger_registry = registries["trigger"]
    if trigger.object_type not in trigger_registry:
        raise UnknownRegistryTypeError(
            f"Unknown trigger object type: {trigger.object_type} "
            f"(expected one of {', '.join(trigger_registry.type_names())})"
        )
    return trigger


def validate_nodes(nodes: Iterable[FlatNode], registries: Dict[str, Registry] | None = None) -> list[FlatNode]:
    """
    Check a node array is safe to persist. Raises AutomationStructureError on a
    structural problem and UnknownRegistryTypeError on an unknown action target
    when registries are given.
    """
    nodes = list(nodes)
    if registries is not None:
        target_registry = registries["target"]
        for node in nodes:
            if node.action is not None and node.action.target_type not in target_registry:
                raise UnknownRegistryTypeError(
                    f"Unknown action target type on node {node.id}: {node.action.target_type}"
                )

    result = validate_flat_array(nodes)
    if not result.is_valid:
        raise AutomationStructureError(result)
    return nodes


def parse_and_validate_automation(payload: dict, registries: Dict[str, Registry]) -> Automation:
    """
    Convert parsed JSON (dict) into Automation, validate registry membership
    and node structure.
    Raises ValidationError, UnknownRegistryTypeError or AutomationStructureError on failure.
    """
    automation = Automation.model_validate(payload)
    validate_trigger(automation.trigger, registries)
    validate_nodes(automation.nodes, registries)
    return automation
