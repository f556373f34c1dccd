import json

import pytest

from config import Settings
from db import InMemoryAutomationRepository
from models import Automation
from main import orchestrate_payload, render_automation
from validations import AutomationStructureError


def test_orchestrate_payload_saves(automation_payload) -> None:
    repo = InMemoryAutomationRepository()

    automation_id = orchestrate_payload(json.dumps(automation_payload), repo, "org-1", "user-1")

    assert repo.get(automation_id, "org-1").name == "Approve accepted quotes"


def test_orchestrate_payload_rejects_cycles(automation_payload) -> None:
    automation_payload["nodes"][2]["nextNodeId"] = "n1"

    with pytest.raises(AutomationStructureError):
        orchestrate_payload(json.dumps(automation_payload), InMemoryAutomationRepository(), "org-1", "user-1")


def test_orchestrate_payload_rejects_non_object() -> None:
    with pytest.raises(ValueError, match="JSON object"):
        orchestrate_payload("[]", InMemoryAutomationRepository(), "org-1", "user-1")


def test_render_automation(automation_payload) -> None:
    repo = InMemoryAutomationRepository()
    automation_id = orchestrate_payload(json.dumps(automation_payload), repo, "org-1", "user-1")

    text = render_automation(repo.get(automation_id, "org-1"))

    assert text.splitlines() == [
        "Approve accepted quotes",
        "When quote moves from sent to accepted:",
        "[n1] if total exists",
        "  then: [n2] set project status to active",
        "  else: [n3] set self status to draft",
    ]


def test_settings_from_env(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.delenv("AUTOMATION_ORG_ID", raising=False)

    settings = Settings.from_env()

    assert settings.database_url == "sqlite://"
    assert settings.log_level == "DEBUG"
    assert settings.org_id == "local-org"


def test_render_automation_lists_dropped_branches(automation_payload) -> None:
    # n3 is reached through n2 first, so n1's false branch is dropped
    automation_payload["nodes"][1]["nextNodeId"] = "n3"
    automation = Automation.model_validate(automation_payload)

    text = render_automation(automation)

    assert text.splitlines()[-1] == "warning: build_node_tree: Circular reference detected at node n3"
    assert "  else:" not in text
