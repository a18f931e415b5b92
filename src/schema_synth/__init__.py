"""schema-synth - OpenAPI schema synthesis from composable schema node trees.

Converts validation-schema node trees into OpenAPI 3.x / JSON Schema fragments,
registering named sub-schemas as shared components.
"""

__version__ = "0.1.0"

from .config import Config
from .schema_gen import SchemaGeneratorService

__all__ = ["Config", "SchemaGeneratorService"]
