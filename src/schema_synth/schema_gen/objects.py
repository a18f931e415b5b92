"""
Object composer.

Builds ``type: object`` fragments from a field shape and, when an object was
derived from a registered base with ``extend()``, expresses it as
``allOf: [<base ref>]`` plus the added fields instead of a flattened copy.
"""
from typing import Optional

import structlog

from ..models.common import BasePydanticModel, UnknownKeys
from ..models.fragments import Effect, SchemaResult
from ..models.nodes import NeverNode, ObjectNode, SchemaNode, UndefinedNode
from . import dispatcher
from .effects import create_component_effect, flatten_effects, is_optional_schema
from .state import SchemaState

logger = structlog.get_logger(__name__)


class AdditionalPropertyOptions(BasePydanticModel):
    unknown_keys: UnknownKeys = UnknownKeys.STRIP
    catchall: Optional[SchemaNode] = None

    @classmethod
    def from_object(cls, node: ObjectNode) -> "AdditionalPropertyOptions":
        return cls(unknown_keys=node.unknown_keys, catchall=node.catchall)


def is_never(node: Optional[SchemaNode]) -> bool:
    return node is None or isinstance(node, NeverNode)


def is_omitted_field(node: SchemaNode) -> bool:
    return isinstance(node, (NeverNode, UndefinedNode))


def create_object_schema(node: ObjectNode, state: SchemaState) -> SchemaResult:
    extended = create_extended_schema(node, node.extends, state)
    if extended is not None:
        return extended

    return create_object_schema_from_shape(node.shape, AdditionalPropertyOptions.from_object(node), state)


def create_extended_schema(
    node: ObjectNode,
    base: Optional[ObjectNode],
    state: SchemaState,
) -> Optional[SchemaResult]:
    if base is None:
        return None

    if base in state.components or base.ref or state.components.declared_ref(base):
        dispatcher.create_schema(base, state, ["extended schema"])

    component = state.components.get(base)
    if component is None:
        return None

    diff_options = create_diff_options(AdditionalPropertyOptions.from_object(base), AdditionalPropertyOptions.from_object(node))
    if diff_options is None:
        logger.debug("Base object is not extensible, flattening.", base=str(base), path=state.path)
        return None

    diff_shape = create_shape_diff(base.shape, node.shape)
    if diff_shape is None:
        logger.debug("Extension overrides a base field, flattening.", base=str(base), path=state.path)
        return None

    extended = create_object_schema_from_shape(diff_shape, diff_options, state)
    base_effects = component.effects if component.is_complete else [create_component_effect(base, state)]

    return SchemaResult(
        schema_object={
            "allOf": [{"$ref": state.components.reference(component.ref)}],
            **extended.schema_object,
        },
        effects=flatten_effects(base_effects, extended.effects),
    )


def create_diff_options(
    base_options: AdditionalPropertyOptions,
    extended_options: AdditionalPropertyOptions,
) -> Optional[AdditionalPropertyOptions]:
    if base_options.unknown_keys == UnknownKeys.STRICT or not is_never(base_options.catchall):
        return None
    return extended_options


def create_shape_diff(
    base_shape: dict[str, SchemaNode],
    extended_shape: dict[str, SchemaNode],
) -> Optional[dict[str, SchemaNode]]:
    """Fields added by the extension, or ``None`` if it overrides a base field."""
    diff: dict[str, SchemaNode] = {}
    for key, node in extended_shape.items():
        base_node = base_shape.get(key)
        if base_node is node:
            continue
        if base_node is None:
            diff[key] = node
            continue
        return None
    return diff


def create_object_schema_from_shape(
    shape: dict[str, SchemaNode],
    options: AdditionalPropertyOptions,
    state: SchemaState,
) -> SchemaResult:
    properties, property_effects = map_properties(shape, state)
    required, required_effects = map_required(shape, state)

    additional_properties: Optional[SchemaResult] = None
    if options.unknown_keys != UnknownKeys.STRICT and not is_never(options.catchall):
        additional_properties = dispatcher.create_schema(options.catchall, state, ["additional properties"])

    schema_object: dict = {"type": "object"}
    if properties:
        schema_object["properties"] = properties
    if required:
        schema_object["required"] = required
    if options.unknown_keys == UnknownKeys.STRICT:
        schema_object["additionalProperties"] = False
    elif additional_properties is not None:
        schema_object["additionalProperties"] = additional_properties.schema_object

    return SchemaResult(
        schema_object=schema_object,
        effects=flatten_effects(
            property_effects,
            additional_properties.effects if additional_properties else None,
            required_effects,
        ),
    )


def map_properties(shape: dict[str, SchemaNode], state: SchemaState) -> tuple[dict, list[Effect]]:
    properties: dict = {}
    effects: list[Effect] = []
    for key, node in shape.items():
        if is_omitted_field(node):
            continue
        result = dispatcher.create_schema(node, state, [f"property: {key}"])
        properties[key] = result.schema_object
        effects.extend(result.effects)
    return properties, effects


def map_required(shape: dict[str, SchemaNode], state: SchemaState) -> tuple[list[str], list[Effect]]:
    required: list[str] = []
    effects: list[Effect] = []
    for key, node in shape.items():
        if is_omitted_field(node):
            continue
        with state.visit(f"property: {key}"):
            optional, optional_effects = is_optional_schema(node, state)
        if not optional:
            required.append(key)
        effects.extend(optional_effects)
    return required, effects
