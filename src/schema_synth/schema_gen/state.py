"""Recursion state carried down one synthesis call tree."""
from contextlib import contextmanager
from typing import Iterator, Optional

from ..config import DocumentConfig
from ..models.common import CreationType
from .components import ComponentRegistry


class SchemaState:
    """
    Traversal path, active creation type and document options for one synthesis.

    The path is only ever extended through ``visit()``, which restores it when
    the nested call returns or raises.
    """

    def __init__(
        self,
        components: ComponentRegistry,
        creation_type: CreationType = CreationType.OUTPUT,
        document_options: Optional[DocumentConfig] = None,
        path: tuple[str, ...] = (),
    ):
        self.components = components
        self.creation_type = CreationType(creation_type)
        self.document_options = document_options or DocumentConfig()
        self._path: list[str] = list(path)

    @property
    def path(self) -> tuple[str, ...]:
        return tuple(self._path)

    @contextmanager
    def visit(self, *segments: str) -> Iterator["SchemaState"]:
        self._path.extend(segments)
        try:
            yield self
        finally:
            if segments:
                del self._path[-len(segments):]


def create_state(
    creation_type: CreationType = CreationType.OUTPUT,
    components: Optional[ComponentRegistry] = None,
    document_options: Optional[DocumentConfig] = None,
) -> SchemaState:
    document_options = document_options or DocumentConfig()
    if components is None:
        components = ComponentRegistry(component_ref_path=document_options.component_ref_path)
    return SchemaState(components=components, creation_type=creation_type, document_options=document_options)
