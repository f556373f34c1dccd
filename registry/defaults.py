from .registry import Registry


def create_default_registries() -> dict[str, Registry]:
    """Create registries for trigger object types and action targets."""
    trigger_registry = Registry(name="trigger")
    trigger_registry.register("client", "Fires when a client changes status")
    trigger_registry.register("project", "Fires when a project changes status")
    trigger_registry.register("quote", "Fires when a quote changes status")
    trigger_registry.register("invoice", "Fires when an invoice changes status")
    trigger_registry.register("task", "Fires when a task changes status")

    target_registry = Registry(name="target")
    target_registry.register("self", "The record that fired the trigger")
    target_registry.register("project", "The project linked to the triggering record")
    target_registry.register("client", "The client linked to the triggering record")
    target_registry.register("quote", "The quote linked to the triggering record")
    target_registry.register("invoice", "The invoice linked to the triggering record")

    return {
        "trigger": trigger_registry,
        "target": target_registry,
    }
