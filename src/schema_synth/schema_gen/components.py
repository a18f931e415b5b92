"""
Identity-keyed component registry.

Entries are keyed by ``SchemaNode.node_id`` and move through
absent -> in-progress -> complete, never backwards. The in-progress state is
what stops recursion on cyclic schemas: a node met again while its own
definition is being built is answered with a forward reference.
"""
from typing import Any, Iterable, Optional, Sequence

import structlog
from pydantic import ConfigDict, Field

from ..exceptions import DuplicateRef
from ..models.common import BasePydanticModel, ComponentState
from ..models.fragments import Effect
from ..models.nodes import SchemaNode

logger = structlog.get_logger(__name__)

DEFAULT_COMPONENT_REF_PATH = "#/components/schemas/"


def create_component_schema_ref(ref: str, component_ref_path: Optional[str] = None) -> str:
    return f"{component_ref_path or DEFAULT_COMPONENT_REF_PATH}{ref}"


class ComponentEntry(BasePydanticModel):
    model_config = ConfigDict(frozen=True)

    ref: str
    node: SchemaNode = Field(..., exclude=True)
    state: ComponentState
    schema_object: Optional[dict[str, Any]] = None
    effects: list[Effect] = Field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return self.state == ComponentState.COMPLETE


class ComponentRegistry:
    """Component store for one document synthesis run. Not thread-safe."""

    def __init__(self, component_ref_path: Optional[str] = None):
        self.component_ref_path = component_ref_path or DEFAULT_COMPONENT_REF_PATH
        self._entries: dict[int, ComponentEntry] = {}
        self._names: dict[str, SchemaNode] = {} # Binding order is the output order of schemas()
        self._declared: dict[int, str] = {}
        self.logger = logger.bind(component="ComponentRegistry")

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, node: SchemaNode) -> bool:
        return node.node_id in self._entries

    def get(self, node: SchemaNode) -> Optional[ComponentEntry]:
        return self._entries.get(node.node_id)

    def reference(self, ref: str) -> str:
        return create_component_schema_ref(ref, self.component_ref_path)

    def _bind(self, ref: str, node: SchemaNode, path: Sequence[str] = ()) -> None:
        bound = self._names.get(ref)
        if bound is not None and bound.node_id != node.node_id:
            raise DuplicateRef(ref, bound, node, path)
        self._names[ref] = node

    def declare(self, node: SchemaNode, ref: str) -> None:
        """Reserve ``ref`` for ``node`` before it is met during synthesis."""
        self._bind(ref, node)
        self._declared[node.node_id] = ref
        self.logger.debug("Component declared", ref=ref, node=str(node))

    def declared_ref(self, node: SchemaNode) -> Optional[str]:
        return self._declared.get(node.node_id)

    def pending_declarations(self) -> list[tuple[SchemaNode, str]]:
        """Declared components that have not been completed yet."""
        pending = []
        for ref, node in self._names.items():
            if self._declared.get(node.node_id) != ref:
                continue
            entry = self.get(node)
            if entry is None or not entry.is_complete:
                pending.append((node, ref))
        return pending

    def start(self, node: SchemaNode, ref: str, path: Sequence[str] = ()) -> ComponentEntry:
        """Mark ``node`` in progress. An existing entry is returned unchanged."""
        existing = self.get(node)
        if existing is not None:
            return existing
        self._bind(ref, node, path)
        entry = ComponentEntry(ref=ref, node=node, state=ComponentState.IN_PROGRESS)
        self._entries[node.node_id] = entry
        self.logger.debug("Component in progress", ref=ref, node=str(node))
        return entry

    def register_complete(
        self,
        node: SchemaNode,
        ref: str,
        schema_object: dict[str, Any],
        effects: Iterable[Effect] = (),
        path: Sequence[str] = (),
    ) -> ComponentEntry:
        existing = self.get(node)
        if existing is not None and existing.is_complete:
            if existing.ref != ref:
                self.logger.warning("Component already complete under another name; keeping it.", ref=existing.ref, requested_ref=ref)
            return existing
        self._bind(ref, node, path)
        entry = ComponentEntry(
            ref=ref,
            node=node,
            state=ComponentState.COMPLETE,
            schema_object=schema_object,
            effects=list(effects),
        )
        self._entries[node.node_id] = entry
        self.logger.debug("Component complete", ref=ref, node=str(node), effects=len(entry.effects))
        return entry

    def discard(self, node: SchemaNode) -> None:
        """Drop an in-progress entry after its synthesis failed. Complete entries stay."""
        entry = self.get(node)
        if entry is None or entry.is_complete:
            return
        del self._entries[node.node_id]
        if node.node_id not in self._declared and self._names.get(entry.ref) is node:
            del self._names[entry.ref]
        self.logger.debug("In-progress component discarded", ref=entry.ref, node=str(node))

    def in_progress(self) -> list[ComponentEntry]:
        return [entry for entry in self._entries.values() if not entry.is_complete]

    def schemas(self) -> dict[str, dict[str, Any]]:
        """The ``components.schemas`` map of every complete entry."""
        schemas: dict[str, dict[str, Any]] = {}
        for ref, node in self._names.items():
            entry = self.get(node)
            if entry is not None and entry.is_complete and entry.ref == ref:
                schemas[ref] = entry.schema_object
        return schemas
