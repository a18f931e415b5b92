"""
Pydantic models for schema-synth.
"""
from .common import (
    BasePydanticModel,
    ComponentState,
    CreationType,
    EffectKind,
    EffectType,
    SchemaKind,
    UnknownKeys,
)
from .fragments import Effect, ResolvedEffect, SchemaResult
from .nodes import (
    ArrayNode,
    BooleanNode,
    CustomNode,
    DateNode,
    DefaultNode,
    DiscriminatedUnionNode,
    EffectsNode,
    EnumNode,
    LazyNode,
    LiteralNode,
    NativeEnumNode,
    NeverNode,
    NullableNode,
    NullNode,
    NumberNode,
    ObjectNode,
    OpenApiMetadata,
    OptionalNode,
    RecordNode,
    SchemaNode,
    StringNode,
    TupleNode,
    UndefinedNode,
    UnionNode,
    lazy,
    preprocess,
)

__all__ = [
    "ArrayNode",
    "BasePydanticModel",
    "BooleanNode",
    "ComponentState",
    "CreationType",
    "CustomNode",
    "DateNode",
    "DefaultNode",
    "DiscriminatedUnionNode",
    "Effect",
    "EffectKind",
    "EffectType",
    "EffectsNode",
    "EnumNode",
    "LazyNode",
    "LiteralNode",
    "NativeEnumNode",
    "NeverNode",
    "NullNode",
    "NullableNode",
    "NumberNode",
    "ObjectNode",
    "OpenApiMetadata",
    "OptionalNode",
    "RecordNode",
    "ResolvedEffect",
    "SchemaKind",
    "SchemaNode",
    "SchemaResult",
    "StringNode",
    "TupleNode",
    "UndefinedNode",
    "UnionNode",
    "UnknownKeys",
    "lazy",
    "preprocess",
]
