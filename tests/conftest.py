from typing import Any, Dict

import pytest

from models import FlatNode


def _action(node_id: str, next_node_id: str | None = None, status: str = "done") -> FlatNode:
    return FlatNode(
        id=node_id,
        type="action",
        action={"targetType": "self", "actionType": "update_status", "newStatus": status},
        next_node_id=next_node_id,
    )


def _condition(
    node_id: str,
    next_node_id: str | None = None,
    else_node_id: str | None = None,
    field: str = "priorityLevel",
    value: Any = "high",
) -> FlatNode:
    return FlatNode(
        id=node_id,
        type="condition",
        condition={"field": field, "operator": "equals", "value": value},
        next_node_id=next_node_id,
        else_node_id=else_node_id,
    )


@pytest.fixture
def make_action():
    return _action


@pytest.fixture
def make_condition():
    return _condition


@pytest.fixture
def branching_nodes():
    """c1 -> (true: a1 -> a2, false: c2 -> (true: a3))"""
    return [
        _condition("c1", next_node_id="a1", else_node_id="c2"),
        _action("a1", next_node_id="a2"),
        _action("a2"),
        _condition("c2", next_node_id="a3", field="projectType", value="internal"),
        _action("a3", status="archived"),
    ]


@pytest.fixture
def automation_payload() -> Dict[str, Any]:
    return {
        "name": "  Approve accepted quotes ",
        "description": "Move the project along when a quote is accepted",
        "trigger": {"objectType": "quote", "fromStatus": "sent", "toStatus": "accepted"},
        "nodes": [
            {
                "id": "n1",
                "type": "condition",
                "condition": {"field": "total", "operator": "exists", "value": None},
                "nextNodeId": "n2",
                "elseNodeId": "n3",
            },
            {
                "id": "n2",
                "type": "action",
                "action": {"targetType": "project", "actionType": "update_status", "newStatus": "active"},
            },
            {
                "id": "n3",
                "type": "action",
                "action": {"targetType": "self", "actionType": "update_status", "newStatus": "draft"},
            },
        ],
    }
