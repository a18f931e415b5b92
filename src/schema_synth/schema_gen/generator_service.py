"""
Service responsible for turning schema nodes into OpenAPI schema fragments
and the shared ``components.schemas`` map of one document.
"""
from typing import Any, Iterable, Optional

import structlog
from pydantic import Field

from ..config import Config
from ..exceptions import ComponentModeConflict, OrphanedComponentError
from ..models.common import BasePydanticModel, CreationType
from ..models.fragments import Effect, ResolvedEffect
from ..models.nodes import SchemaNode
from . import dispatcher
from .components import ComponentRegistry
from .effects import resolve_effect
from .state import SchemaState

logger = structlog.get_logger(__name__)


class GenerationResult(BasePydanticModel):
    schema_object: dict[str, Any]
    effects: list[Effect] = Field(default_factory=list)
    creation_type: CreationType
    resolved_effect: Optional[ResolvedEffect] = None

    @property
    def has_effects(self) -> bool:
        """True when the input and output shapes of this schema differ."""
        return self.resolved_effect is not None


class SchemaGeneratorService:
    """
    Generates schema fragments for one document. All calls on one service share
    a single component registry, so named nodes are emitted once and referenced
    everywhere else.
    """

    def __init__(self, app_config: Config, registry: Optional[ComponentRegistry] = None):
        self.app_config = app_config
        self.document_options = app_config.document
        self.registry = registry or ComponentRegistry(component_ref_path=self.document_options.component_ref_path)
        self.logger = logger.bind(service="SchemaGeneratorService")

    def register_component(self, node: SchemaNode, ref: str) -> None:
        """Declare ``node`` as the component ``ref``; every use of it becomes a reference."""
        self.registry.declare(node, ref)

    def generate(
        self,
        node: SchemaNode,
        creation_type: Optional[CreationType] = None,
        path: Iterable[str] = (),
    ) -> GenerationResult:
        creation_type = CreationType(creation_type or self.document_options.default_creation_type)
        log = self.logger.bind(node=str(node), creation_type=creation_type.value)
        log.debug("Generating schema.")

        state = SchemaState(
            components=self.registry,
            creation_type=creation_type,
            document_options=self.document_options,
            path=tuple(path),
        )
        result = dispatcher.create_schema(node, state)

        resolved = resolve_effect(result.effects, self.registry)
        if resolved is not None and resolved.creation_type != creation_type:
            raise ComponentModeConflict(
                f"{node} is generated as {creation_type.value} but depends on {resolved.node}, "
                f"which was materialized as {resolved.creation_type}",
                path=resolved.path,
            )

        log.info("Schema generated.", effects=len(result.effects), components=len(self.registry))
        return GenerationResult(
            schema_object=result.schema_object,
            effects=result.effects,
            creation_type=creation_type,
            resolved_effect=resolved,
        )

    def create_components(self) -> dict[str, Any]:
        """Finish declared components and return the ``components`` section."""
        for node, ref in self.registry.pending_declarations():
            self.logger.debug("Creating unused declared component.", ref=ref)
            self.generate(node)

        orphaned = [entry.ref for entry in self.registry.in_progress()]
        if orphaned:
            if self.app_config.components.fail_on_orphaned:
                raise OrphanedComponentError(orphaned)
            self.logger.warning("Components left in progress.", refs=orphaned)

        schemas = self.registry.schemas()
        self.logger.info("Components created.", count=len(schemas))
        return {"schemas": schemas} if schemas else {}
