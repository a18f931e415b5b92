"""
Exceptions raised during schema synthesis.

None of these are transient: synthesis is a pure function of the node tree and
the registry, so every error is surfaced to the caller.
"""
from typing import Any, Optional, Sequence


def format_path(path: Sequence[str]) -> str:
    return " > ".join(path) if path else "<root>"


class SchemaSynthError(Exception):
    """Base class for all schema-synth errors."""
    pass

class UnrecognizedSchemaKind(SchemaSynthError):
    """Raised when a node has no generator and no manual schema attached."""
    def __init__(self, node: Any, path: Sequence[str], hint: Optional[str] = None):
        message = hint or "Please assign it a manual schema"
        super().__init__(f"Unknown schema {node} at {format_path(path)}. {message}")
        self.node = node
        self.path = tuple(path)

class DuplicateRef(SchemaSynthError):
    """Raised when a component name is requested by two distinct nodes."""
    def __init__(self, ref: str, existing: Any, incoming: Any, path: Sequence[str] = ()):
        super().__init__(
            f"schemaRef {ref!r} is already registered to {existing}; "
            f"cannot bind it to {incoming} at {format_path(path)}"
        )
        self.ref = ref
        self.existing = existing
        self.incoming = incoming
        self.path = tuple(path)

class UnexpectedReferenceFragment(SchemaSynthError):
    """Raised when a component definition comes back as a bare reference."""
    def __init__(self, node: Any, ref: str, path: Sequence[str]):
        super().__init__(
            f"Unexpected Error: received a reference object while creating component {ref!r} "
            f"from {node} at {format_path(path)}"
        )
        self.node = node
        self.ref = ref
        self.path = tuple(path)

class ComponentModeConflict(SchemaSynthError):
    """Raised when a fragment depends on both input- and output-shaped effects,
    or on the opposite shape of the one being generated."""
    def __init__(self, message: str, path: Sequence[str] = ()):
        super().__init__(f"{message} (at {format_path(path)})")
        self.path = tuple(path)

class OrphanedComponentError(SchemaSynthError):
    """Raised when components are still in progress once a run is finalized."""
    def __init__(self, refs: Sequence[str]):
        super().__init__(f"Components never completed: {', '.join(refs)}")
        self.refs = list(refs)
