from typing import List, Optional

from models import ActionConfig, ConditionConfig, TreeNode


def describe_node(node: TreeNode) -> str:
    config = node.config
    if isinstance(config, ConditionConfig):
        if config.operator == "exists":
            return f"[{node.id}] if {config.field} exists"
        return f"[{node.id}] if {config.field} {config.operator} {config.value!r}"
    if isinstance(config, ActionConfig):
        return f"[{node.id}] set {config.target_type} status to {config.new_status}"
    return f"[{node.id}] {node.type}"


def format_tree(root: Optional[TreeNode], indent: str = "  ") -> str:
    """Render a node tree as indented text, one node per line."""
    if root is None:
        return "(empty)"

    lines: List[str] = []
    stack = [(root, 0, "")]
    while stack:
        node, depth, label = stack.pop()
        lines.append(f"{indent * depth}{label}{describe_node(node)}")
        if node.type == "condition":
            if node.false_branch is not None:
                stack.append((node.false_branch, depth + 1, "else: "))
            if node.true_branch is not None:
                stack.append((node.true_branch, depth + 1, "then: "))
        elif node.next is not None:
            stack.append((node.next, depth, ""))
    return "\n".join(lines)
