"""
Type dispatcher and the single recursion entry point of the synthesis engine.

Every generator that needs a child fragment calls ``create_schema``, which
scopes the path segment, lets the component registry intercept named or
already registered nodes, dispatches on the node kind and merges the node's
OpenAPI metadata into the result.
"""
from functools import cache
from typing import Callable, Iterable

import structlog

from ..exceptions import UnexpectedReferenceFragment, UnrecognizedSchemaKind
from ..models.common import EffectType, SchemaKind
from ..models.fragments import Effect, SchemaResult
from ..models.nodes import SchemaNode
from . import composites, leaves, objects
from .components import ComponentEntry
from .state import SchemaState

logger = structlog.get_logger(__name__)

Generator = Callable[[SchemaNode, SchemaState], SchemaResult]


@cache
def generator_table() -> dict[SchemaKind, Generator]:
    """Generators by node kind. ``SchemaKind.CUSTOM`` has no generator."""
    return {
        SchemaKind.STRING: leaves.create_string_schema,
        SchemaKind.NUMBER: leaves.create_number_schema,
        SchemaKind.BOOLEAN: leaves.create_boolean_schema,
        SchemaKind.NULL: leaves.create_null_schema,
        SchemaKind.LITERAL: leaves.create_literal_schema,
        SchemaKind.ENUM: leaves.create_enum_schema,
        SchemaKind.NATIVE_ENUM: leaves.create_native_enum_schema,
        SchemaKind.DATE: leaves.create_date_schema,
        SchemaKind.NEVER: leaves.create_never_schema,
        SchemaKind.UNDEFINED: leaves.create_never_schema,
        SchemaKind.ARRAY: composites.create_array_schema,
        SchemaKind.OBJECT: objects.create_object_schema,
        SchemaKind.UNION: composites.create_union_schema,
        SchemaKind.DISCRIMINATED_UNION: composites.create_discriminated_union_schema,
        SchemaKind.RECORD: composites.create_record_schema,
        SchemaKind.TUPLE: composites.create_tuple_schema,
        SchemaKind.OPTIONAL: composites.create_optional_schema,
        SchemaKind.NULLABLE: composites.create_nullable_schema,
        SchemaKind.DEFAULT: composites.create_default_schema,
        SchemaKind.EFFECTS: composites.create_effects_schema,
        SchemaKind.LAZY: composites.create_lazy_schema,
    }


def dispatch(node: SchemaNode, state: SchemaState) -> SchemaResult:
    generator = generator_table().get(node.kind)
    if generator is not None:
        return generator(node, state)

    manual_schema = node.openapi_metadata.manual_schema if node.openapi_metadata else None
    if manual_schema is not None:
        return SchemaResult(schema_object=dict(manual_schema))

    raise UnrecognizedSchemaKind(node, state.path)


def create_schema_with_metadata(node: SchemaNode, state: SchemaState) -> SchemaResult:
    result = dispatch(node, state)
    keywords = node.openapi_metadata.schema_keywords() if node.openapi_metadata else {}
    if not keywords:
        return result
    return SchemaResult(schema_object={**result.schema_object, **keywords}, effects=result.effects)


def create_reference(entry: ComponentEntry, node: SchemaNode, state: SchemaState) -> SchemaResult:
    schema_object = {"$ref": state.components.reference(entry.ref)}
    if entry.is_complete:
        return SchemaResult(schema_object=schema_object, effects=entry.effects)

    logger.debug("Forward reference to in-progress component", ref=entry.ref, path=state.path)
    return SchemaResult(
        schema_object=schema_object,
        effects=[Effect(type=EffectType.COMPONENT, node=node, path=state.path)],
    )


def create_registered_schema(node: SchemaNode, ref: str, state: SchemaState) -> SchemaResult:
    state.components.start(node, ref, state.path)
    try:
        result = create_schema_with_metadata(node, state)
        if result.is_reference:
            raise UnexpectedReferenceFragment(node, ref, state.path)
    except Exception:
        state.components.discard(node)
        raise

    entry = state.components.register_complete(node, ref, result.schema_object, result.effects, state.path)
    return create_reference(entry, node, state)


def create_schema(node: SchemaNode, state: SchemaState, subpath: Iterable[str] = ()) -> SchemaResult:
    with state.visit(*subpath):
        entry = state.components.get(node)
        if entry is not None:
            return create_reference(entry, node, state)

        ref = node.ref or state.components.declared_ref(node)
        if ref:
            return create_registered_schema(node, ref, state)

        return create_schema_with_metadata(node, state)
