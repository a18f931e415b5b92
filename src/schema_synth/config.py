"""Configuration management for schema-synth."""

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.common import CreationType


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="json", description="Log format ('json' or 'console')")
    file: Optional[Path] = Field(default=None, description="Log file path")

class DocumentConfig(BaseModel):
    """Options that shape every fragment of one document."""

    openapi_version: str = Field(default="3.1.0", pattern=r"^3\.[01]\.\d+$", description="Target OpenAPI version. 3.0.x switches null handling to 'nullable'.")
    component_ref_path: str = Field(default="#/components/schemas/", description="Prefix for component references.")
    union_one_of: bool = Field(default=False, description="Render unions as 'oneOf' instead of 'anyOf'.")
    default_creation_type: CreationType = Field(default=CreationType.OUTPUT, description="Mode used when a caller does not ask for one.")

    @property
    def is_openapi_30(self) -> bool:
        return self.openapi_version.startswith("3.0")

class ComponentsConfig(BaseModel):
    """Configuration for the component registry."""

    fail_on_orphaned: bool = Field(default=False, description="Raise when components are still in progress once components are created.")


class Config(BaseSettings):
    """Main configuration for schema-synth. Loads from environment variables prefixed with SCHEMA_SYNTH_."""

    model_config = SettingsConfigDict(
        env_prefix='SCHEMA_SYNTH_',
        env_nested_delimiter='__', # e.g., SCHEMA_SYNTH_DOCUMENT__UNION_ONE_OF
        extra='ignore',
        env_file='.env',
        env_file_encoding='utf-8'
    )

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    document: DocumentConfig = Field(default_factory=DocumentConfig)
    components: ComponentsConfig = Field(default_factory=ComponentsConfig)
    app_name: str = Field(default="schema-synth", description="Name reported by the CLI and in logs.")
    app_version: str = Field(default="0.1.0", description="Version of the schema-synth software.")

    @classmethod
    def from_file(cls, file_path: Path) -> "Config":
        """Create configuration strictly from a JSON file.
        This does not layer with environment variables.
        """
        with open(file_path) as f:
            config_data = json.load(f)
        return cls.model_validate(config_data)
