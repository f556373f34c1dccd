from .builder import build_node_tree, find_root_candidates, referenced_ids
from .diagnostics import DiagnosticKind, GraphDiagnostic, ValidationResult
from .flattener import flatten_node_tree
from .validator import validate_flat_array, validate_tree_structure

__all__ = [
    "DiagnosticKind",
    "GraphDiagnostic",
    "ValidationResult",
    "build_node_tree",
    "find_root_candidates",
    "flatten_node_tree",
    "referenced_ids",
    "validate_flat_array",
    "validate_tree_structure",
]
