"""
Exceptions raised by noisegraph.

Exception Hierarchy:
    NoiseGraphError (base)
    ├── ConfigurationError
    │   └── SlotOutOfRangeError
    ├── MissingSourceError
    ├── GraphError
    │   ├── CycleError
    │   ├── UnknownKindError
    │   ├── DanglingEdgeError
    │   └── DocumentFormatError
    ├── GraphIOError
    └── BuildCancelledError

Configuration errors are raised by the call that introduced the bad value.
Missing sources only surface when a node is evaluated, since graphs may be
wired in any order.
"""

from typing import Optional


class NoiseGraphError(Exception):
    """Base exception for all noisegraph errors."""
    pass


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(NoiseGraphError, ValueError):
    """Raised when a node, builder or registry is given invalid settings."""
    pass


class SlotOutOfRangeError(ConfigurationError, IndexError):
    """
    Raised when a source slot index is outside ``[0, arity)``.

    Attributes:
        kind: Name of the node kind
        index: The offending slot index
        arity: Number of slots the node has
    """

    def __init__(self, kind: str, index: int, arity: int):
        super().__init__(
            f"{kind} has {arity} source slot(s); index {index} is out of range"
        )
        self.kind = kind
        self.index = index
        self.arity = arity


# =============================================================================
# Evaluation Errors
# =============================================================================

class MissingSourceError(NoiseGraphError):
    """
    Raised when a node is evaluated with an unbound source slot.

    Attributes:
        kind: Name of the node kind
        index: The unbound slot index
    """

    def __init__(self, kind: str, index: int):
        super().__init__(f"{kind} has no source bound to slot {index}")
        self.kind = kind
        self.index = index


# =============================================================================
# Graph (serializer) Errors
# =============================================================================

class GraphError(NoiseGraphError):
    """Base exception for save/restore failures. No partial output is produced."""
    pass


class CycleError(GraphError):
    """Raised when a node is reachable from itself."""

    def __init__(self, message: str, kind: Optional[str] = None):
        super().__init__(message)
        self.kind = kind


class UnknownKindError(GraphError):
    """Raised when a node kind is not present in the registry."""

    def __init__(self, kind: str):
        super().__init__(f"Unknown node kind: {kind!r}")
        self.kind = kind


class DanglingEdgeError(GraphError):
    """Raised when an edge or the root id refers to a node id that does not exist."""

    def __init__(self, message: str, node_id: Optional[str] = None):
        super().__init__(message)
        self.node_id = node_id


class DocumentFormatError(GraphError):
    """Raised when a graph document is malformed or a parameter cannot be parsed."""
    pass


# =============================================================================
# I/O and Build Errors
# =============================================================================

class GraphIOError(NoiseGraphError):
    """
    Wraps a failure of the underlying file or stream.

    Attributes:
        operation: What was being done ("read" or "write")
        path: The file path involved, if any
    """

    def __init__(self, operation: str, path: Optional[str], reason: str):
        super().__init__(f"Failed to {operation} graph document at {path!r}: {reason}")
        self.operation = operation
        self.path = path


class BuildCancelledError(NoiseGraphError):
    """
    Raised when a builder observes its cancellation event.

    Rows written before cancellation remain in the destination grid.

    Attributes:
        completed: Number of rows (or depth slices) fully written
        total: Number of rows (or depth slices) requested
    """

    def __init__(self, completed: int, total: int):
        super().__init__(f"Build cancelled after {completed} of {total} rows")
        self.completed = completed
        self.total = total
