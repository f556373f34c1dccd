"""
Flat node array -> owned tree.

The walk uses an explicit stack instead of recursion but visits nodes in the
same depth-first order: a condition's whole true branch is built before its
false branch.
"""

import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple

from models import FlatNode, TreeNode

from .diagnostics import DiagnosticKind, GraphDiagnostic, report

logger = logging.getLogger(__name__)

# Which child slot of the parent a popped node is attached to.
_SLOT_NEXT = "next"
_SLOT_TRUE = "true"
_SLOT_FALSE = "false"


def referenced_ids(nodes: Iterable[FlatNode]) -> Set[str]:
    """Ids that appear as some node's nextNodeId or elseNodeId."""
    referenced: Set[str] = set()
    for node in nodes:
        referenced.update(node.references())
    return referenced


def find_root_candidates(nodes: List[FlatNode]) -> List[FlatNode]:
    referenced = referenced_ids(nodes)
    return [node for node in nodes if node.id not in referenced]


def _to_tree_node(node: FlatNode) -> TreeNode:
    config = node.condition if node.type == "condition" else node.action
    return TreeNode(id=node.id, type=node.type, config=config)


def _attach(parent: TreeNode, slot: str, child: TreeNode) -> None:
    if slot == _SLOT_TRUE:
        parent.true_branch = child
        parent.next = child
    elif slot == _SLOT_FALSE:
        parent.false_branch = child
    else:
        parent.next = child


def build_node_tree(
    nodes: Iterable[FlatNode],
    diagnostics: Optional[List[GraphDiagnostic]] = None,
) -> Optional[TreeNode]:
    """
    Build a tree from a flat array of nodes.

    Returns None for an empty input or when every node is referenced by another
    (no root). A reference to an unknown id, or to a node already placed in the
    tree, leaves that branch empty; the rest of the tree is still built. Each
    such problem is logged and, when `diagnostics` is given, appended to it.
    """
    nodes = list(nodes)
    if not nodes:
        return None

    node_map: Dict[str, FlatNode] = {node.id: node for node in nodes}

    roots = find_root_candidates(nodes)
    if not roots:
        report(logger, diagnostics, DiagnosticKind.NO_ROOT_FOUND, "build_node_tree: No root node found in workflow")
        return None
    root_id = roots[0].id

    visited: Set[str] = set()
    root: Optional[TreeNode] = None
    stack: List[Tuple[str, Optional[TreeNode], str]] = [(root_id, None, _SLOT_NEXT)]

    while stack:
        node_id, parent, slot = stack.pop()

        if node_id in visited:
            report(
                logger,
                diagnostics,
                DiagnosticKind.CIRCULAR_REFERENCE,
                f"build_node_tree: Circular reference detected at node {node_id}",
                node_id,
            )
            continue

        node = node_map.get(node_id)
        if node is None:
            report(
                logger,
                diagnostics,
                DiagnosticKind.DANGLING_REFERENCE,
                f"build_node_tree: Node {node_id} not found in map",
                node_id,
            )
            continue

        visited.add(node_id)
        tree_node = _to_tree_node(node)
        if parent is None:
            root = tree_node
        else:
            _attach(parent, slot, tree_node)

        # Pushed in reverse so the true/sequential branch is popped first.
        if node.type == "condition":
            if node.else_node_id:
                stack.append((node.else_node_id, tree_node, _SLOT_FALSE))
            if node.next_node_id:
                stack.append((node.next_node_id, tree_node, _SLOT_TRUE))
        elif node.next_node_id:
            stack.append((node.next_node_id, tree_node, _SLOT_NEXT))

    return root
