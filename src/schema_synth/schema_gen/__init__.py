"""
Schema synthesis for schema-synth.

Turns schema node trees into OpenAPI schema fragments, deduplicating named
nodes through a component registry and tracking input/output divergence as
effects.
"""

from .components import ComponentEntry, ComponentRegistry, create_component_schema_ref
from .dispatcher import create_schema, dispatch
from .effects import flatten_effects, resolve_effect
from .generator_service import GenerationResult, SchemaGeneratorService
from .state import SchemaState, create_state

__all__ = [
    "ComponentEntry",
    "ComponentRegistry",
    "GenerationResult",
    "SchemaGeneratorService",
    "SchemaState",
    "create_component_schema_ref",
    "create_schema",
    "create_state",
    "dispatch",
    "flatten_effects",
    "resolve_effect",
]
