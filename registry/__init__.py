from .defaults import create_default_registries
from .registry import Registry, RegistryItem

__all__ = ["Registry", "RegistryItem", "create_default_registries"]
