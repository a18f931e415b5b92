"""Leaf generators: one node in, one fragment out, no recursion and no effects."""
from typing import Any

from ..models.fragments import SchemaResult
from ..models.nodes import (
    BooleanNode,
    DateNode,
    EnumNode,
    LiteralNode,
    NativeEnumNode,
    NullNode,
    NumberNode,
    SchemaNode,
    StringNode,
)
from .state import SchemaState


def json_type_of(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    return "object"


def create_string_schema(node: StringNode, state: SchemaState) -> SchemaResult:
    schema_object: dict[str, Any] = {"type": "string"}
    if node.min_length is not None:
        schema_object["minLength"] = node.min_length
    if node.max_length is not None:
        schema_object["maxLength"] = node.max_length
    if node.pattern is not None:
        schema_object["pattern"] = node.pattern
    if node.format is not None:
        schema_object["format"] = node.format
    return SchemaResult(schema_object=schema_object)


def create_number_schema(node: NumberNode, state: SchemaState) -> SchemaResult:
    schema_object: dict[str, Any] = {"type": "integer" if node.integer else "number"}
    if node.minimum is not None:
        schema_object["minimum"] = node.minimum
    if node.maximum is not None:
        schema_object["maximum"] = node.maximum
    if state.document_options.is_openapi_30:
        # 3.0 exclusive bounds are booleans next to minimum/maximum, so only the stricter bound survives
        if node.exclusive_minimum is not None and (node.minimum is None or node.exclusive_minimum >= node.minimum):
            schema_object["minimum"] = node.exclusive_minimum
            schema_object["exclusiveMinimum"] = True
        if node.exclusive_maximum is not None and (node.maximum is None or node.exclusive_maximum <= node.maximum):
            schema_object["maximum"] = node.exclusive_maximum
            schema_object["exclusiveMaximum"] = True
    else:
        if node.exclusive_minimum is not None:
            schema_object["exclusiveMinimum"] = node.exclusive_minimum
        if node.exclusive_maximum is not None:
            schema_object["exclusiveMaximum"] = node.exclusive_maximum
    if node.multiple_of is not None:
        schema_object["multipleOf"] = node.multiple_of
    return SchemaResult(schema_object=schema_object)


def create_boolean_schema(node: BooleanNode, state: SchemaState) -> SchemaResult:
    return SchemaResult(schema_object={"type": "boolean"})


def create_null_schema(node: NullNode, state: SchemaState) -> SchemaResult:
    if state.document_options.is_openapi_30:
        return SchemaResult(schema_object={"nullable": True})
    return SchemaResult(schema_object={"type": "null"})


def create_literal_schema(node: LiteralNode, state: SchemaState) -> SchemaResult:
    if state.document_options.is_openapi_30:
        return SchemaResult(schema_object={"type": json_type_of(node.value), "enum": [node.value]})
    return SchemaResult(schema_object={"type": json_type_of(node.value), "const": node.value})


def create_enum_schema(node: EnumNode, state: SchemaState) -> SchemaResult:
    return SchemaResult(schema_object={"type": "string", "enum": list(node.values)})


def create_native_enum_schema(node: NativeEnumNode, state: SchemaState) -> SchemaResult:
    values = [member.value for member in node.enum]
    types = sorted({json_type_of(value) for value in values})
    return SchemaResult(schema_object={
        "type": types[0] if len(types) == 1 else types,
        "enum": values,
    })


def create_date_schema(node: DateNode, state: SchemaState) -> SchemaResult:
    return SchemaResult(schema_object={"type": "string", "format": "date-time"})


def create_never_schema(node: SchemaNode, state: SchemaState) -> SchemaResult:
    """``never`` and ``undefined`` accept no JSON value."""
    return SchemaResult(schema_object={"not": {}})
