from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class RegistryItem:
    type: str
    description: str


@dataclass
class Registry:
    """Named set of identifiers an automation may reference, e.g. trigger object types."""

    name: str
    items: Dict[str, RegistryItem] = field(default_factory=dict)

    def register(self, type_name: str, description: str) -> None:
        self.items[type_name] = RegistryItem(type=type_name, description=description)

    def __contains__(self, type_name: str) -> bool:
        return type_name in self.items

    def type_names(self) -> List[str]:
        return sorted(self.items)
