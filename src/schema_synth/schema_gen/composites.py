"""
Generators for composite and wrapper nodes.

Wrappers (optional, nullable, default, effects, lazy) recurse without adding a
path segment; composites name the child they descend into.
"""
from typing import Any, Optional

from ..exceptions import UnrecognizedSchemaKind
from ..models.common import CreationType, EffectKind
from ..models.fragments import SchemaResult
from ..models.nodes import (
    ArrayNode,
    DefaultNode,
    DiscriminatedUnionNode,
    EffectsNode,
    EnumNode,
    LazyNode,
    LiteralNode,
    NullableNode,
    OptionalNode,
    RecordNode,
    TupleNode,
    UnionNode,
)
from . import dispatcher
from .effects import create_schema_effect, flatten_effects
from .state import SchemaState

_COMPOSITION_KEYWORDS = {"allOf", "anyOf", "oneOf", "not"}


def create_array_schema(node: ArrayNode, state: SchemaState) -> SchemaResult:
    items = dispatcher.create_schema(node.element, state, ["array items"])
    schema_object: dict[str, Any] = {"type": "array", "items": items.schema_object}
    if node.min_items is not None:
        schema_object["minItems"] = node.min_items
    if node.max_items is not None:
        schema_object["maxItems"] = node.max_items
    return SchemaResult(schema_object=schema_object, effects=items.effects)


def create_tuple_schema(node: TupleNode, state: SchemaState) -> SchemaResult:
    items = [
        dispatcher.create_schema(item, state, [f"tuple item {index}"])
        for index, item in enumerate(node.items)
    ]
    schema_object: dict[str, Any] = {"type": "array"}
    if items:
        schema_object["prefixItems"] = [item.schema_object for item in items]

    rest: Optional[SchemaResult] = None
    if node.rest is not None:
        rest = dispatcher.create_schema(node.rest, state, ["tuple rest"])
        schema_object["items"] = rest.schema_object
        schema_object["minItems"] = len(items)
    else:
        schema_object["minItems"] = len(items)
        schema_object["maxItems"] = len(items)

    return SchemaResult(
        schema_object=schema_object,
        effects=flatten_effects(*(item.effects for item in items), rest.effects if rest else None),
    )


def create_union_schema(node: UnionNode, state: SchemaState) -> SchemaResult:
    options = [
        dispatcher.create_schema(option, state, [f"union option {index}"])
        for index, option in enumerate(node.options)
    ]
    keyword = "oneOf" if state.document_options.union_one_of else "anyOf"
    return SchemaResult(
        schema_object={keyword: [option.schema_object for option in options]},
        effects=flatten_effects(*(option.effects for option in options)),
    )


def _discriminator_values(node: DiscriminatedUnionNode, index: int) -> Optional[list[Any]]:
    discriminant = node.options[index].shape.get(node.discriminator)
    if isinstance(discriminant, LiteralNode):
        return [discriminant.value]
    if isinstance(discriminant, EnumNode):
        return list(discriminant.values)
    return None


def create_discriminated_union_schema(node: DiscriminatedUnionNode, state: SchemaState) -> SchemaResult:
    options = [
        dispatcher.create_schema(option, state, [f"discriminated union option {index}"])
        for index, option in enumerate(node.options)
    ]
    discriminator: dict[str, Any] = {"propertyName": node.discriminator}

    mapping: dict[str, str] = {}
    for index, option in enumerate(options):
        values = _discriminator_values(node, index)
        if not option.is_reference or values is None:
            mapping = {}
            break
        for value in values:
            mapping[str(value)] = option.schema_object["$ref"]
    if mapping:
        discriminator["mapping"] = mapping

    return SchemaResult(
        schema_object={
            "oneOf": [option.schema_object for option in options],
            "discriminator": discriminator,
        },
        effects=flatten_effects(*(option.effects for option in options)),
    )


def create_record_schema(node: RecordNode, state: SchemaState) -> SchemaResult:
    value = dispatcher.create_schema(node.value, state, ["record value"])
    if isinstance(node.key, EnumNode):
        return SchemaResult(
            schema_object={
                "type": "object",
                "properties": {key: value.schema_object for key in node.key.values},
                "additionalProperties": False,
            },
            effects=value.effects,
        )
    return SchemaResult(
        schema_object={"type": "object", "additionalProperties": value.schema_object},
        effects=value.effects,
    )


def create_optional_schema(node: OptionalNode, state: SchemaState) -> SchemaResult:
    return dispatcher.create_schema(node.inner, state)


def create_nullable_schema(node: NullableNode, state: SchemaState) -> SchemaResult:
    inner = dispatcher.create_schema(node.inner, state)
    schema_object = inner.schema_object

    if state.document_options.is_openapi_30:
        if inner.is_reference:
            return SchemaResult(schema_object={"allOf": [schema_object], "nullable": True}, effects=inner.effects)
        return SchemaResult(schema_object={**schema_object, "nullable": True}, effects=inner.effects)

    schema_type = schema_object.get("type")
    # Subschemas under a composition keyword still reject null
    if inner.is_reference or schema_type is None or _COMPOSITION_KEYWORDS & schema_object.keys():
        return SchemaResult(schema_object={"anyOf": [schema_object, {"type": "null"}]}, effects=inner.effects)

    types = list(schema_type) if isinstance(schema_type, list) else [schema_type]
    if "null" not in types:
        types.append("null")
    nullable = {**schema_object, "type": types}
    if "const" in nullable:
        nullable["enum"] = [nullable.pop("const"), None]
    elif "enum" in schema_object and None not in schema_object["enum"]:
        nullable["enum"] = [*schema_object["enum"], None]
    return SchemaResult(schema_object=nullable, effects=inner.effects)


def create_default_schema(node: DefaultNode, state: SchemaState) -> SchemaResult:
    inner = dispatcher.create_schema(node.inner, state)
    return SchemaResult(schema_object={**inner.schema_object, "default": node.default_value}, effects=inner.effects)


def create_effects_schema(node: EffectsNode, state: SchemaState) -> SchemaResult:
    if node.effect == EffectKind.REFINEMENT:
        return dispatcher.create_schema(node.inner, state)

    if node.effect == EffectKind.TRANSFORM and state.creation_type == CreationType.OUTPUT:
        return create_transform_output_schema(node, state)

    inner = dispatcher.create_schema(node.inner, state)
    return SchemaResult(
        schema_object=inner.schema_object,
        effects=flatten_effects(inner.effects, [create_schema_effect(node, state)]),
    )


def create_transform_output_schema(node: EffectsNode, state: SchemaState) -> SchemaResult:
    if node.output is not None:
        output = dispatcher.create_schema(node.output, state, ["transform output"])
        return SchemaResult(
            schema_object=output.schema_object,
            effects=flatten_effects(output.effects, [create_schema_effect(node, state)]),
        )

    manual_schema = node.openapi_metadata.manual_schema if node.openapi_metadata else None
    if manual_schema is not None:
        return SchemaResult(schema_object=dict(manual_schema), effects=[create_schema_effect(node, state)])

    raise UnrecognizedSchemaKind(
        node,
        state.path,
        hint="Cannot determine the output of a transform; pass output= or assign it a manual schema",
    )


def create_lazy_schema(node: LazyNode, state: SchemaState) -> SchemaResult:
    return dispatcher.create_schema(node.resolve(), state)
