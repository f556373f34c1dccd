from .automation_validator import (
    AutomationStructureError,
    UnknownRegistryTypeError,
    parse_and_validate_automation,
    validate_nodes,
    validate_trigger,
)

__all__ = [
    "AutomationStructureError",
    "UnknownRegistryTypeError",
    "parse_and_validate_automation",
    "validate_nodes",
    "validate_trigger",
]
