"""
Unit tests for the identity-keyed component registry.
"""
import pytest  # type: ignore[import-not-found]

from schema_synth.exceptions import DuplicateRef
from schema_synth.models.common import ComponentState, EffectType
from schema_synth.models.fragments import Effect
from schema_synth.models.nodes import NumberNode, ObjectNode, StringNode
from schema_synth.schema_gen.components import ComponentRegistry, create_component_schema_ref


@pytest.fixture
def registry() -> ComponentRegistry:
    return ComponentRegistry()


def test_create_component_schema_ref() -> None:
    assert create_component_schema_ref("User") == "#/components/schemas/User"
    assert create_component_schema_ref("User", "#/definitions/") == "#/definitions/User"


def test_registry_uses_configured_ref_path() -> None:
    registry = ComponentRegistry(component_ref_path="#/$defs/")
    assert registry.reference("Pet") == "#/$defs/Pet"


def test_entry_moves_from_in_progress_to_complete(registry: ComponentRegistry) -> None:
    node = StringNode()
    assert registry.get(node) is None
    assert node not in registry

    in_progress = registry.start(node, "Name")
    assert in_progress.state == ComponentState.IN_PROGRESS
    assert not in_progress.is_complete
    assert registry.in_progress() == [in_progress]

    complete = registry.register_complete(node, "Name", {"type": "string"})
    assert complete.is_complete
    assert complete.schema_object == {"type": "string"}
    assert registry.get(node) is complete
    assert registry.in_progress() == []
    assert len(registry) == 1


def test_complete_entry_never_regresses(registry: ComponentRegistry) -> None:
    node = StringNode()
    complete = registry.register_complete(node, "Name", {"type": "string"})

    assert registry.start(node, "Name") is complete
    registry.discard(node)
    assert registry.get(node) is complete


def test_register_complete_is_idempotent(registry: ComponentRegistry) -> None:
    node = StringNode()
    first = registry.register_complete(node, "Name", {"type": "string"})
    second = registry.register_complete(node, "Name", {"type": "string", "changed": True})

    assert second is first
    assert registry.schemas() == {"Name": {"type": "string"}}


def test_same_name_for_different_identity_raises(registry: ComponentRegistry) -> None:
    first = ObjectNode(shape={"a": StringNode()})
    lookalike = ObjectNode(shape={"a": StringNode()})
    registry.register_complete(first, "Thing", {"type": "object"})

    with pytest.raises(DuplicateRef, match="'Thing' is already registered"):
        registry.start(lookalike, "Thing")

    with pytest.raises(DuplicateRef):
        registry.register_complete(lookalike, "Thing", {"type": "object"})


def test_structurally_equal_nodes_are_distinct_entries(registry: ComponentRegistry) -> None:
    first = NumberNode()
    second = NumberNode()
    registry.register_complete(first, "First", {"type": "number"})

    assert registry.get(second) is None
    registry.register_complete(second, "Second", {"type": "number"})
    assert len(registry) == 2


def test_discard_rolls_back_in_progress_entry(registry: ComponentRegistry) -> None:
    node = StringNode()
    registry.start(node, "Name")

    registry.discard(node)

    assert registry.get(node) is None
    # The name is free again.
    other = StringNode()
    registry.start(other, "Name")
    assert registry.get(other).ref == "Name"


def test_declared_name_is_reserved(registry: ComponentRegistry) -> None:
    node = StringNode()
    registry.declare(node, "Declared")

    assert registry.declared_ref(node) == "Declared"
    assert registry.pending_declarations() == [(node, "Declared")]
    with pytest.raises(DuplicateRef):
        registry.declare(StringNode(), "Declared")

    registry.register_complete(node, "Declared", {"type": "string"})
    assert registry.pending_declarations() == []


def test_schemas_follow_binding_order_and_skip_in_progress(registry: ComponentRegistry) -> None:
    outer, inner, pending = ObjectNode(), StringNode(), NumberNode()
    registry.start(outer, "Outer")
    registry.register_complete(inner, "Inner", {"type": "string"})
    registry.register_complete(outer, "Outer", {"type": "object"})
    registry.start(pending, "Pending")

    schemas = registry.schemas()

    assert list(schemas) == ["Outer", "Inner"]


def test_complete_entry_keeps_effects(registry: ComponentRegistry) -> None:
    node = StringNode().default("x")
    effect = Effect(type=EffectType.SCHEMA, creation_type="output", node=node, path=("property: a",))

    entry = registry.register_complete(node, "Defaulted", {"type": "string", "default": "x"}, [effect])

    assert entry.effects == [effect]
    assert entry.effects[0].node is node
