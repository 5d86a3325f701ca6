"""
Core snippet generation components.

Provides the schema model, key allocation, output building and the
assembler that turns field groups into one template document.
"""

from .generator import (
    SnippetAssembler,
    GeneratorError,
    GenerationResult,
    generate_snippets,
    rewrite_keys,
)
from .schema import (
    FieldGroup,
    Field,
    Layout,
    FieldType,
    SchemaValidationError,
    load_field_groups,
    validate_field_groups,
)
from .keys import KeyAllocator
from .builder import CodeBuilder
from .provider import SchemaProvider, InMemorySchemaProvider
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Assembly
    "SnippetAssembler",
    "GeneratorError",
    "GenerationResult",
    "generate_snippets",
    "rewrite_keys",
    # Schema system - core data structures
    "FieldGroup",
    "Field",
    "Layout",
    "FieldType",
    "SchemaValidationError",
    "load_field_groups",
    "validate_field_groups",
    # Keys and output
    "KeyAllocator",
    "CodeBuilder",
    # Providers
    "SchemaProvider",
    "InMemorySchemaProvider",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
