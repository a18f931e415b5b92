"""Result fragments and the effects threaded through synthesis."""
from typing import Any, Optional

from pydantic import Field

from .common import BasePydanticModel, CreationType, EffectType
from .nodes import SchemaNode


class Effect(BasePydanticModel):
    """One point where the input and output shapes of a schema diverge."""
    type: EffectType
    creation_type: Optional[CreationType] = None # None for component effects; resolved through the registry
    node: SchemaNode = Field(..., exclude=True)
    path: tuple[str, ...] = ()

    def describe(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "creation_type": self.creation_type,
            "node": str(self.node),
            "path": list(self.path),
        }

class SchemaResult(BasePydanticModel):
    """A synthesized fragment plus the effects collected while building it."""
    schema_object: dict[str, Any]
    effects: list[Effect] = Field(default_factory=list)

    @property
    def is_reference(self) -> bool:
        return "$ref" in self.schema_object and len(self.schema_object) == 1

class ResolvedEffect(BasePydanticModel):
    """The single creation type a fragment depends on, and where it first appeared."""
    creation_type: CreationType
    node: SchemaNode = Field(..., exclude=True)
    path: tuple[str, ...] = ()
