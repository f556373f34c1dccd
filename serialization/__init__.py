from .parser import AutomationPayloadParser
from .tree_text import describe_node, format_tree

__all__ = ["AutomationPayloadParser", "describe_node", "format_tree"]
