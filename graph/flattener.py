import logging
from typing import List, Optional, Set

from models import FlatNode, TreeNode

from .diagnostics import DiagnosticKind, GraphDiagnostic, report

logger = logging.getLogger(__name__)


def _to_flat_node(node: TreeNode) -> FlatNode:
    next_node_id = None
    else_node_id = None

    if node.type == "condition":
        # next is an alias of true_branch; the explicit branch wins
        if node.true_branch is not None:
            next_node_id = node.true_branch.id
        elif node.next is not None:
            next_node_id = node.next.id
        if node.false_branch is not None:
            else_node_id = node.false_branch.id
        return FlatNode(
            id=node.id,
            type="condition",
            condition=node.config,
            next_node_id=next_node_id,
            else_node_id=else_node_id,
        )

    if node.next is not None:
        next_node_id = node.next.id
    return FlatNode(id=node.id, type="action", action=node.config, next_node_id=next_node_id)


def _children(node: TreeNode) -> List[TreeNode]:
    children = []
    if node.next is not None:
        children.append(node.next)
    if node.true_branch is not None and node.true_branch is not node.next:
        children.append(node.true_branch)
    if node.false_branch is not None:
        children.append(node.false_branch)
    return children


def flatten_node_tree(
    root: Optional[TreeNode],
    diagnostics: Optional[List[GraphDiagnostic]] = None,
) -> List[FlatNode]:
    """
    Flatten a tree into the persisted array form, in pre-order.

    A node id seen twice is emitted once; the repeated subtree is skipped and
    reported the same way build_node_tree reports a cycle.
    """
    if root is None:
        return []

    flat_nodes: List[FlatNode] = []
    visited: Set[str] = set()
    stack: List[TreeNode] = [root]

    while stack:
        node = stack.pop()
        if node.id in visited:
            report(
                logger,
                diagnostics,
                DiagnosticKind.CIRCULAR_REFERENCE,
                f"flatten_node_tree: Circular reference detected at node {node.id}",
                node.id,
            )
            continue

        visited.add(node.id)
        flat_nodes.append(_to_flat_node(node))
        stack.extend(reversed(_children(node)))

    return flat_nodes
