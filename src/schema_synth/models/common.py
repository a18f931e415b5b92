from enum import Enum

from pydantic import BaseModel


class BasePydanticModel(BaseModel):
    model_config = {
        "extra": "forbid",
        "populate_by_name": True,
        "use_enum_values": True,
    }

class SchemaKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    LITERAL = "literal"
    ENUM = "enum"
    NATIVE_ENUM = "native_enum"
    DATE = "date"
    NEVER = "never"
    UNDEFINED = "undefined"
    ARRAY = "array"
    OBJECT = "object"
    UNION = "union"
    DISCRIMINATED_UNION = "discriminated_union"
    RECORD = "record"
    TUPLE = "tuple"
    OPTIONAL = "optional"
    NULLABLE = "nullable"
    DEFAULT = "default"
    EFFECTS = "effects"
    LAZY = "lazy"
    CUSTOM = "custom" # No generator; needs a manual schema

class UnknownKeys(str, Enum):
    STRIP = "strip"
    PASSTHROUGH = "passthrough"
    STRICT = "strict"

class CreationType(str, Enum):
    INPUT = "input"
    OUTPUT = "output"

class EffectType(str, Enum):
    SCHEMA = "schema"
    COMPONENT = "component"

class EffectKind(str, Enum):
    REFINEMENT = "refinement"
    PREPROCESS = "preprocess"
    TRANSFORM = "transform"

class ComponentState(str, Enum):
    IN_PROGRESS = "in-progress"
    COMPLETE = "complete"
