import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class DiagnosticKind(str, Enum):
    NO_ROOT_FOUND = "no_root_found"
    MULTIPLE_ROOTS = "multiple_roots"
    DANGLING_REFERENCE = "dangling_reference"
    ORPHANED_NODE = "orphaned_node"
    CIRCULAR_REFERENCE = "circular_reference"
    DUPLICATE_ID = "duplicate_id"
    INVALID_NODE = "invalid_node"


@dataclass(frozen=True)
class GraphDiagnostic:
    """A non-fatal problem found while building or flattening a node graph."""

    kind: DiagnosticKind
    message: str
    node_id: Optional[str] = None


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    error: Optional[str] = None
    kind: Optional[DiagnosticKind] = None

    def __bool__(self) -> bool:
        return self.is_valid

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def fail(cls, kind: DiagnosticKind, error: str) -> "ValidationResult":
        return cls(is_valid=False, error=error, kind=kind)


def report(
    logger: logging.Logger,
    diagnostics: Optional[List[GraphDiagnostic]],
    kind: DiagnosticKind,
    message: str,
    node_id: Optional[str] = None,
) -> None:
    """Log a diagnostic and hand it to the caller's collector, if one was passed."""
    logger.warning(message)
    if diagnostics is not None:
        diagnostics.append(GraphDiagnostic(kind=kind, message=message, node_id=node_id))
