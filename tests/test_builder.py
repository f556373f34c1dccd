import logging

from graph import DiagnosticKind, build_node_tree
from models import ActionConfig, ConditionConfig


def test_build_empty_returns_none() -> None:
    assert build_node_tree([]) is None


def test_build_single_action(make_action) -> None:
    root = build_node_tree([make_action("a1")])

    assert root is not None
    assert root.id == "a1"
    assert isinstance(root.config, ActionConfig)
    assert root.next is None
    assert root.true_branch is None
    assert root.false_branch is None


def test_build_root_is_unreferenced_node_regardless_of_order(make_action) -> None:
    nodes = [make_action("a3"), make_action("a2", "a3"), make_action("a1", "a2")]

    root = build_node_tree(nodes)

    assert root.id == "a1"
    assert root.next.id == "a2"
    assert root.next.next.id == "a3"
    assert root.next.next.next is None


def test_condition_builds_both_branches_and_aliases_next(make_condition, make_action) -> None:
    nodes = [make_condition("x", "y", "z"), make_action("y"), make_action("z")]

    root = build_node_tree(nodes)

    assert isinstance(root.config, ConditionConfig)
    assert root.true_branch.id == "y"
    assert root.false_branch.id == "z"
    assert root.next is root.true_branch


def test_condition_without_true_branch_has_no_next(make_condition, make_action) -> None:
    root = build_node_tree([make_condition("x", else_node_id="z"), make_action("z")])

    assert root.next is None
    assert root.true_branch is None
    assert root.false_branch.id == "z"


def test_build_branching_tree(branching_nodes) -> None:
    root = build_node_tree(branching_nodes)

    assert root.id == "c1"
    assert root.true_branch.id == "a1"
    assert root.true_branch.next.id == "a2"
    assert root.false_branch.id == "c2"
    assert root.false_branch.true_branch.id == "a3"
    assert root.false_branch.false_branch is None


def test_two_node_cycle_has_no_root(make_action, caplog) -> None:
    diagnostics = []
    with caplog.at_level(logging.WARNING, logger="graph.builder"):
        root = build_node_tree([make_action("a", "b"), make_action("b", "a")], diagnostics)

    assert root is None
    assert [d.kind for d in diagnostics] == [DiagnosticKind.NO_ROOT_FOUND]
    assert "No root node found" in caplog.text


def test_cycle_below_root_is_truncated(make_action) -> None:
    diagnostics = []
    nodes = [make_action("r", "a"), make_action("a", "b"), make_action("b", "a")]

    root = build_node_tree(nodes, diagnostics)

    assert root.id == "r"
    assert root.next.id == "a"
    assert root.next.next.id == "b"
    assert root.next.next.next is None
    assert diagnostics[0].kind == DiagnosticKind.CIRCULAR_REFERENCE
    assert diagnostics[0].node_id == "a"


def test_dangling_reference_leaves_branch_empty(make_condition, make_action) -> None:
    diagnostics = []
    nodes = [make_condition("c", "missing", "a"), make_action("a")]

    root = build_node_tree(nodes, diagnostics)

    assert root.true_branch is None
    assert root.next is None
    assert root.false_branch.id == "a"
    assert diagnostics[0].kind == DiagnosticKind.DANGLING_REFERENCE
    assert diagnostics[0].node_id == "missing"


def test_shared_successor_is_placed_once(make_condition, make_action) -> None:
    # both branches converge on "a": the false branch is dropped as a revisit
    diagnostics = []
    nodes = [make_condition("c", "a", "a"), make_action("a")]

    root = build_node_tree(nodes, diagnostics)

    assert root.true_branch.id == "a"
    assert root.false_branch is None
    assert [d.kind for d in diagnostics] == [DiagnosticKind.CIRCULAR_REFERENCE]


def test_true_branch_is_built_before_false_branch(make_condition, make_action) -> None:
    # "s" is reachable from both branches; the true branch claims it
    nodes = [
        make_condition("c", "t", "f"),
        make_action("t", "s"),
        make_action("f", "s"),
        make_action("s"),
    ]

    root = build_node_tree(nodes)

    assert root.true_branch.next.id == "s"
    assert root.false_branch.next is None


def test_multiple_roots_picks_first_in_input_order(make_action) -> None:
    root = build_node_tree([make_action("b"), make_action("a")])

    assert root.id == "b"
