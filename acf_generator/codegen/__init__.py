"""
ACF Generator Code Generation Module

Generates PHP template snippets from ACF field group schemas.
"""

from .registry import (
    RendererRegistry,
    RegistryError,
    get_registry,
    register_renderer,
    list_supported_types,
    is_type_supported,
)
from .core.generator import (
    SnippetAssembler,
    GenerationResult,
    GeneratorError,
    generate_snippets,
)
from .core.schema import (
    FieldGroup,
    Field,
    Layout,
    FieldType,
    SchemaValidationError,
    load_field_groups,
    validate_field_groups,
)
from .core.keys import KeyAllocator
from .core.provider import SchemaProvider, InMemorySchemaProvider
from .core.config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .php.renderers import FieldRenderer
from .php.walker import TreeWalker


# Convenience functions
def generate_from_json(json_data, group_keys=None, config=None):
    """
    Generate template snippets from decoded ACF JSON.

    Args:
        json_data: A field group object or a list of them (dict/list/str)
        group_keys: Groups to render, in order; every group if None
        config: GeneratorConfig, or a dict of overrides

    Returns:
        GenerationResult with generated code
    """
    if isinstance(json_data, str):
        import json

        json_data = json.loads(json_data)

    if isinstance(config, dict):
        config = load_config(custom_config=config)

    provider = InMemorySchemaProvider.from_json_data(json_data)
    return generate_snippets(provider, group_keys, config)


def quick_generate(json_data, group_keys=None, **options):
    """
    Quick snippet generation from ACF JSON.

    Returns:
        Generated code string
    """
    result = generate_from_json(json_data, group_keys, options or None)

    if result.success:
        return result.code
    else:
        raise GeneratorError(f"Snippet generation failed: {result.error_message}")


# Export main interfaces
__all__ = [
    "RendererRegistry",
    "RegistryError",
    "SnippetAssembler",
    "GenerationResult",
    "GeneratorError",
    "FieldGroup",
    "Field",
    "Layout",
    "FieldType",
    "SchemaValidationError",
    "KeyAllocator",
    "SchemaProvider",
    "InMemorySchemaProvider",
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "FieldRenderer",
    "TreeWalker",
    "generate_snippets",
    "generate_from_json",
    "quick_generate",
    "load_config",
    "load_field_groups",
    "validate_field_groups",
    "get_registry",
    "register_renderer",
    "list_supported_types",
    "is_type_supported",
]
