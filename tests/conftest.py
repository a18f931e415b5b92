"""Shared fixtures for schema-synth tests."""
import pytest  # type: ignore[import-not-found]

from schema_synth.config import Config, DocumentConfig
from schema_synth.models.common import CreationType
from schema_synth.schema_gen.state import SchemaState, create_state


@pytest.fixture
def output_state() -> SchemaState:
    return create_state(CreationType.OUTPUT)

@pytest.fixture
def input_state() -> SchemaState:
    return create_state(CreationType.INPUT)

@pytest.fixture
def openapi_30_state() -> SchemaState:
    return create_state(CreationType.OUTPUT, document_options=DocumentConfig(openapi_version="3.0.3"))

@pytest.fixture
def app_config() -> Config:
    return Config(app_version="test-v0.1")
