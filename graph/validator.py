"""
Structural checks for workflow graphs.

Both entry points return a ValidationResult instead of raising, so callers in
rendering code can surface the message directly. The persistence boundary in
`validations` turns a failed result into an exception.
"""

from collections import Counter
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple, Union

from pydantic import ValidationError

from models import FlatNode, TreeNode

from .builder import find_root_candidates
from .diagnostics import DiagnosticKind, ValidationResult


def _tree_children(node: TreeNode) -> List[TreeNode]:
    return [child for child in (node.next, node.true_branch, node.false_branch) if child is not None]


def validate_tree_structure(root: Optional[TreeNode]) -> ValidationResult:
    """
    Detect cycles in a tree. A node reached again after its subtree has been
    fully checked (a condition's next and true_branch are the same node) is
    fine; a node reached again while it is still on the current path is not.
    """
    if root is None:
        return ValidationResult.ok()

    visited: Set[str] = set()
    path: Set[str] = set()
    # (node, leaving): leaving=True pops the node off the current path
    stack: List[Tuple[TreeNode, bool]] = [(root, False)]

    while stack:
        node, leaving = stack.pop()
        if leaving:
            path.discard(node.id)
            continue

        if node.id in path:
            return ValidationResult.fail(
                DiagnosticKind.CIRCULAR_REFERENCE,
                f"Circular reference detected at node {node.id}",
            )
        if node.id in visited:
            continue

        visited.add(node.id)
        path.add(node.id)
        stack.append((node, True))
        stack.extend((child, False) for child in reversed(_tree_children(node)))

    return ValidationResult.ok()


def _describe_errors(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or 'node'}: {error['msg']}"
        for error in exc.errors(include_url=False)
    )


def _coerce(nodes: Iterable[Union[FlatNode, Dict[str, Any]]]) -> Tuple[List[FlatNode], Optional[ValidationResult]]:
    coerced: List[FlatNode] = []
    for node in nodes:
        if isinstance(node, FlatNode):
            coerced.append(node)
            continue
        try:
            coerced.append(FlatNode.model_validate(node))
        except ValidationError as exc:
            node_id = node.get("id") if isinstance(node, dict) else None
            return coerced, ValidationResult.fail(
                DiagnosticKind.INVALID_NODE,
                f"Node {node_id or '<unknown>'} is invalid: {_describe_errors(exc)}",
            )
    return coerced, None


def validate_flat_array(nodes: Iterable[Union[FlatNode, Dict[str, Any]]]) -> ValidationResult:
    """
    Check a flat node array before it is persisted: unique ids, no dangling
    references, exactly one root, and every node reachable from that root.
    Raw dicts in persisted form are accepted and parsed into FlatNode first;
    one that does not parse fails the check instead of raising.
    """
    nodes, invalid = _coerce(nodes)
    if invalid is not None:
        return invalid
    if not nodes:
        return ValidationResult.ok()

    counts = Counter(node.id for node in nodes)
    duplicates = [node_id for node_id, count in counts.items() if count > 1]
    if duplicates:
        return ValidationResult.fail(
            DiagnosticKind.DUPLICATE_ID,
            f"Duplicate node ids found: {', '.join(duplicates)}",
        )

    node_map: Dict[str, FlatNode] = {node.id: node for node in nodes}
    for node in nodes:
        if node.next_node_id and node.next_node_id not in node_map:
            return ValidationResult.fail(
                DiagnosticKind.DANGLING_REFERENCE,
                f"Node {node.id} references non-existent nextNodeId: {node.next_node_id}",
            )
        if node.else_node_id and node.else_node_id not in node_map:
            return ValidationResult.fail(
                DiagnosticKind.DANGLING_REFERENCE,
                f"Node {node.id} references non-existent elseNodeId: {node.else_node_id}",
            )

    roots = find_root_candidates(nodes)
    if not roots:
        return ValidationResult.fail(
            DiagnosticKind.NO_ROOT_FOUND,
            "No root node found (all nodes are referenced by other nodes - circular reference)",
        )
    if len(roots) > 1:
        return ValidationResult.fail(
            DiagnosticKind.MULTIPLE_ROOTS,
            f"Multiple root nodes found: {', '.join(node.id for node in roots)}",
        )

    reachable: Set[str] = set()
    stack = [roots[0].id]
    while stack:
        node_id = stack.pop()
        if node_id in reachable:
            continue
        reachable.add(node_id)
        stack.extend(reversed(node_map[node_id].references()))

    unreachable = [node.id for node in nodes if node.id not in reachable]
    if unreachable:
        return ValidationResult.fail(
            DiagnosticKind.ORPHANED_NODE,
            f"Orphaned nodes found (not reachable from root): {', '.join(unreachable)}",
        )

    return ValidationResult.ok()
