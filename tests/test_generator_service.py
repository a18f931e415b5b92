"""
Unit tests for SchemaGeneratorService.
"""
import pytest  # type: ignore[import-not-found]

from schema_synth.config import Config
from schema_synth.exceptions import ComponentModeConflict, DuplicateRef, OrphanedComponentError
from schema_synth.models.common import CreationType
from schema_synth.models.nodes import NumberNode, ObjectNode, StringNode
from schema_synth.schema_gen.generator_service import GenerationResult, SchemaGeneratorService


@pytest.fixture
def generator_service(app_config: Config) -> SchemaGeneratorService:
    return SchemaGeneratorService(app_config=app_config)

@pytest.fixture
def user_schema() -> ObjectNode:
    address = ObjectNode(shape={"street": StringNode(), "zip": StringNode().optional()}).openapi(ref="Address")
    return ObjectNode(shape={
        "name": StringNode(),
        "home": address,
        "work": address.optional(),
    }).openapi(ref="User", description="A registered user")


def test_generate_uses_configured_default_mode(generator_service: SchemaGeneratorService, user_schema: ObjectNode) -> None:
    result: GenerationResult = generator_service.generate(user_schema)

    assert result.creation_type == CreationType.OUTPUT
    assert result.schema_object == {"$ref": "#/components/schemas/User"}
    assert result.effects == []
    assert not result.has_effects


def test_shared_components_are_emitted_once(generator_service: SchemaGeneratorService, user_schema: ObjectNode) -> None:
    generator_service.generate(user_schema)

    components = generator_service.create_components()

    assert components == {
        "schemas": {
            "User": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "home": {"$ref": "#/components/schemas/Address"},
                    "work": {"$ref": "#/components/schemas/Address"},
                },
                "required": ["name", "home"],
                "description": "A registered user",
            },
            "Address": {
                "type": "object",
                "properties": {"street": {"type": "string"}, "zip": {"type": "string"}},
                "required": ["street"],
            },
        },
    }


def test_generate_reports_resolved_effect(generator_service: SchemaGeneratorService) -> None:
    node = ObjectNode(shape={"page": NumberNode().default(1)})

    result = generator_service.generate(node, CreationType.INPUT, path=("request body",))

    assert result.schema_object == {
        "type": "object",
        "properties": {"page": {"type": "number", "default": 1}},
    }
    assert result.has_effects
    assert result.resolved_effect.creation_type == CreationType.INPUT
    assert result.resolved_effect.path == ("request body", "property: page")


def test_component_materialized_as_output_cannot_be_used_as_input(generator_service: SchemaGeneratorService) -> None:
    paged = ObjectNode(shape={"page": NumberNode().default(1)}).openapi(ref="Paged")
    generator_service.generate(paged, CreationType.OUTPUT)

    with pytest.raises(ComponentModeConflict, match="materialized as output"):
        generator_service.generate(ObjectNode(shape={"query": paged}), CreationType.INPUT)


def test_component_without_effects_is_shared_across_modes(generator_service: SchemaGeneratorService) -> None:
    plain = ObjectNode(shape={"id": StringNode()}).openapi(ref="Plain")

    generator_service.generate(plain, CreationType.OUTPUT)
    result = generator_service.generate(plain, CreationType.INPUT)

    assert result.schema_object == {"$ref": "#/components/schemas/Plain"}


def test_registered_components_are_created_even_if_unused(generator_service: SchemaGeneratorService) -> None:
    generator_service.register_component(StringNode(), "Unused")

    assert generator_service.create_components() == {"schemas": {"Unused": {"type": "string"}}}


def test_register_component_rejects_duplicate_name(generator_service: SchemaGeneratorService) -> None:
    generator_service.register_component(StringNode(), "Name")

    with pytest.raises(DuplicateRef):
        generator_service.register_component(StringNode(), "Name")


def test_no_components(generator_service: SchemaGeneratorService) -> None:
    generator_service.generate(StringNode())

    assert generator_service.create_components() == {}


def test_orphaned_components_are_tolerated_by_default(generator_service: SchemaGeneratorService) -> None:
    generator_service.registry.start(ObjectNode(), "Orphan")

    assert generator_service.create_components() == {}


def test_orphaned_components_can_be_fatal() -> None:
    config = Config()
    config.components.fail_on_orphaned = True
    service = SchemaGeneratorService(app_config=config)
    service.registry.start(ObjectNode(), "Orphan")

    with pytest.raises(OrphanedComponentError, match="Orphan"):
        service.create_components()


def test_ref_path_from_config() -> None:
    config = Config()
    config.document.component_ref_path = "#/$defs/"
    service = SchemaGeneratorService(app_config=config)

    result = service.generate(StringNode().openapi(ref="Name"))

    assert result.schema_object == {"$ref": "#/$defs/Name"}
