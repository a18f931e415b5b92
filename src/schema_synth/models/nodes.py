"""
Schema node variants consumed by the synthesis engine.

Nodes are immutable. Each node receives a process-unique ``node_id`` when it is
constructed and the component registry keys on that id, so two structurally
identical nodes remain two distinct registry entries. Builder methods never
mutate a node; they return a new node with a new identity.
"""
import itertools
from enum import Enum
from typing import Any, Callable, ClassVar, Optional, Self

from pydantic import BaseModel, ConfigDict, Field

from .common import BasePydanticModel, EffectKind, SchemaKind, UnknownKeys

_node_ids = itertools.count(1)


def _next_node_id() -> int:
    return next(_node_ids)


class OpenApiMetadata(BasePydanticModel):
    """OpenAPI metadata attached to a node with ``SchemaNode.openapi()``."""
    ref: Optional[str] = Field(None, description="Component name; registers the node under components.schemas.")
    title: Optional[str] = None
    description: Optional[str] = None
    example: Any = None
    deprecated: Optional[bool] = None
    manual_schema: Optional[dict[str, Any]] = Field(None, description="Fragment used verbatim when no generator matches the node.")

    def schema_keywords(self) -> dict[str, Any]:
        """Keywords merged into the generated fragment."""
        return self.model_dump(exclude_none=True, exclude={"ref", "manual_schema"})


class SchemaNode(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    kind: ClassVar[SchemaKind]

    node_id: int = Field(default_factory=_next_node_id, repr=False)
    openapi_metadata: Optional[OpenApiMetadata] = Field(None, repr=False)

    def __str__(self) -> str:
        if self.ref:
            return f"{type(self).__name__}#{self.node_id}(ref={self.ref!r})"
        return f"{type(self).__name__}#{self.node_id}"

    @property
    def ref(self) -> Optional[str]:
        return self.openapi_metadata.ref if self.openapi_metadata else None

    def _derive(self, **update: Any) -> Self:
        """Copy of this node with a fresh identity."""
        return self.model_copy(update={**update, "node_id": _next_node_id()})

    def openapi(self, **metadata: Any) -> Self:
        current = self.openapi_metadata.model_dump(exclude_unset=True) if self.openapi_metadata else {}
        return self._derive(openapi_metadata=OpenApiMetadata(**{**current, **metadata}))

    def optional(self) -> "OptionalNode":
        return OptionalNode(inner=self)

    def nullable(self) -> "NullableNode":
        return NullableNode(inner=self)

    def default(self, value: Any) -> "DefaultNode":
        return DefaultNode(inner=self, default_value=value)

    def array(self) -> "ArrayNode":
        return ArrayNode(element=self)

    def refine(self, check: Callable[[Any], bool]) -> "EffectsNode":
        return EffectsNode(inner=self, effect=EffectKind.REFINEMENT, function=check)

    def transform(self, function: Callable[[Any], Any], output: Optional["SchemaNode"] = None) -> "EffectsNode":
        """Wrap in a transform. ``output`` describes the transformed value for output-mode schemas."""
        return EffectsNode(inner=self, effect=EffectKind.TRANSFORM, function=function, output=output)


# --- Primitives ---

class StringNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.STRING
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    format: Optional[str] = None # e.g. "email", "uuid", "uri"

class NumberNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.NUMBER
    integer: bool = False
    minimum: Optional[int | float] = None
    maximum: Optional[int | float] = None
    exclusive_minimum: Optional[int | float] = None
    exclusive_maximum: Optional[int | float] = None
    multiple_of: Optional[int | float] = None

class BooleanNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.BOOLEAN

class NullNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.NULL

class LiteralNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.LITERAL
    value: Any

class EnumNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.ENUM
    values: tuple[str, ...]

class NativeEnumNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.NATIVE_ENUM
    enum: type[Enum]

class DateNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.DATE

class NeverNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.NEVER

class UndefinedNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.UNDEFINED

class CustomNode(SchemaNode):
    """A node with no generator. It only synthesizes with a ``manual_schema``."""
    kind: ClassVar[SchemaKind] = SchemaKind.CUSTOM
    type_name: Optional[str] = None


# --- Composites ---

class ArrayNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.ARRAY
    element: SchemaNode
    min_items: Optional[int] = None
    max_items: Optional[int] = None

class ObjectNode(SchemaNode):
    """
    An object with an ordered field shape.

    ``catchall`` of ``None`` and a ``NeverNode`` catch-all mean the same thing.
    ``extends`` is set by ``extend()`` and names the object this one was derived
    from; the object composer uses it to emit ``allOf`` compositions.
    """
    kind: ClassVar[SchemaKind] = SchemaKind.OBJECT
    shape: dict[str, SchemaNode] = Field(default_factory=dict)
    unknown_keys: UnknownKeys = UnknownKeys.STRIP
    catchall: Optional[SchemaNode] = None
    extends: Optional["ObjectNode"] = Field(None, repr=False)

    def extend(self, shape: Optional[dict[str, SchemaNode]] = None, **fields: SchemaNode) -> "ObjectNode":
        # Metadata is not inherited, an extension never shares its base's ref.
        return ObjectNode(
            shape={**self.shape, **(shape or {}), **fields},
            unknown_keys=self.unknown_keys,
            catchall=self.catchall,
            extends=self,
        )

    def strict(self) -> "ObjectNode":
        return self._derive(unknown_keys=UnknownKeys.STRICT)

    def passthrough(self) -> "ObjectNode":
        return self._derive(unknown_keys=UnknownKeys.PASSTHROUGH)

    def strip(self) -> "ObjectNode":
        return self._derive(unknown_keys=UnknownKeys.STRIP)

    def with_catchall(self, node: SchemaNode) -> "ObjectNode":
        return self._derive(catchall=node)

    def pick(self, *keys: str) -> "ObjectNode":
        return ObjectNode(
            shape={key: node for key, node in self.shape.items() if key in keys},
            unknown_keys=self.unknown_keys,
            catchall=self.catchall,
        )

    def omit(self, *keys: str) -> "ObjectNode":
        return ObjectNode(
            shape={key: node for key, node in self.shape.items() if key not in keys},
            unknown_keys=self.unknown_keys,
            catchall=self.catchall,
        )

class UnionNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.UNION
    options: tuple[SchemaNode, ...]

class DiscriminatedUnionNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.DISCRIMINATED_UNION
    discriminator: str
    options: tuple[ObjectNode, ...]

class RecordNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.RECORD
    value: SchemaNode
    key: Optional[SchemaNode] = None

class TupleNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.TUPLE
    items: tuple[SchemaNode, ...]
    rest: Optional[SchemaNode] = None


# --- Wrappers ---

class OptionalNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.OPTIONAL
    inner: SchemaNode

class NullableNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.NULLABLE
    inner: SchemaNode

class DefaultNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.DEFAULT
    inner: SchemaNode
    default_value: Any

class EffectsNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.EFFECTS
    inner: SchemaNode
    effect: EffectKind
    function: Callable[..., Any]
    output: Optional[SchemaNode] = None # Shape after a transform, used in output mode

class LazyNode(SchemaNode):
    """Defers building its child; used for self-referential schemas."""
    kind: ClassVar[SchemaKind] = SchemaKind.LAZY
    getter: Callable[[], SchemaNode]

    def resolve(self) -> SchemaNode:
        return self.getter()


def preprocess(function: Callable[[Any], Any], node: SchemaNode) -> EffectsNode:
    return EffectsNode(inner=node, effect=EffectKind.PREPROCESS, function=function)


def lazy(getter: Callable[[], SchemaNode]) -> LazyNode:
    return LazyNode(getter=getter)
