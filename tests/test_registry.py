from registry import create_default_registries


def test_default_registries_cover_trigger_and_target_types() -> None:
    registries = create_default_registries()

    assert registries["trigger"].type_names() == ["client", "invoice", "project", "quote", "task"]
    assert registries["target"].type_names() == ["client", "invoice", "project", "quote", "self"]
    assert "self" in registries["target"]
    assert "self" not in registries["trigger"]
    assert registries["trigger"].items["quote"].description == "Fires when a quote changes status"
