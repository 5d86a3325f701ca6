"""
Renderer registry for ACF field types.

Maps field type names to the functions that emit their template code, with
a fallback renderer for types nothing is registered for.
"""

from typing import Callable, Dict, List, Optional, Any

RendererFunc = Callable[..., None]


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class RendererRegistry:
    """Registry for managing per field type renderers."""

    def __init__(self, fallback: Optional[RendererFunc] = None):
        """Initialize empty registry."""
        self._renderers: Dict[str, RendererFunc] = {}
        self._aliases: Dict[str, str] = {}
        self._fallback = fallback

    def register(
        self,
        field_type: str,
        renderer: RendererFunc,
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a renderer for a field type.

        Args:
            field_type: ACF type name (e.g., 'text', 'repeater')
            renderer: Callable emitting the field's template code
            aliases: Alternative type names rendered the same way
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If renderer is not callable or an alias conflicts
        """
        if not callable(renderer):
            raise RegistryError(f"Renderer for '{field_type}' must be callable")

        type_key = field_type.lower()

        if type_key in self._renderers and not replace:
            return

        self._renderers[type_key] = renderer

        for alias in aliases or []:
            alias_key = alias.lower()
            if alias_key == type_key:
                continue

            if not replace:
                if alias_key in self._renderers:
                    raise RegistryError(
                        f"Alias '{alias}' conflicts with existing field type"
                    )
                if alias_key in self._aliases and self._aliases[alias_key] != type_key:
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                    )

            self._aliases[alias_key] = type_key

    def set_fallback(self, renderer: RendererFunc):
        self._fallback = renderer

    def get(self, field_type: str) -> Optional[RendererFunc]:
        """Get the renderer registered for a type or alias, or None."""
        type_key = (field_type or "").lower()
        if type_key in self._renderers:
            return self._renderers[type_key]
        if type_key in self._aliases:
            return self._renderers.get(self._aliases[type_key])
        return None

    def resolve(self, field_type: str) -> RendererFunc:
        """
        Get the renderer for a type, falling back to the default renderer.

        Raises:
            RegistryError: If the type is unknown and no fallback is set
        """
        renderer = self.get(field_type)
        if renderer is not None:
            return renderer
        if self._fallback is None:
            raise RegistryError(
                f"No renderer registered for field type: {field_type}. "
                f"Available: {', '.join(self.list_types())}"
            )
        return self._fallback

    def is_supported(self, field_type: str) -> bool:
        return self.get(field_type) is not None

    def list_types(self) -> List[str]:
        """Get sorted list of registered field type names."""
        return sorted(self._renderers.keys())

    def get_aliases_for_type(self, field_type: str) -> List[str]:
        type_key = field_type.lower()
        return sorted(a for a, target in self._aliases.items() if target == type_key)

    def get_type_info(self, field_type: str) -> Dict[str, Any]:
        """
        Get information about a registered field type.

        Raises:
            RegistryError: If type not found
        """
        renderer = self.get(field_type)
        if renderer is None:
            raise RegistryError(f"No renderer registered for field type: {field_type}")

        type_key = self._aliases.get(field_type.lower(), field_type.lower())
        return {
            "name": type_key,
            "renderer": getattr(renderer, "__name__", type(renderer).__name__),
            "aliases": self.get_aliases_for_type(type_key),
            "description": (renderer.__doc__ or "").strip().splitlines()[0]
            if renderer.__doc__
            else "",
        }


# Global registry instance - created once
_global_registry: Optional[RendererRegistry] = None


def get_registry() -> RendererRegistry:
    """Get the global renderer registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = RendererRegistry()
        _auto_register_renderers(_global_registry)
    return _global_registry


def _auto_register_renderers(registry: RendererRegistry):
    """Register the built-in PHP renderers."""
    from .php.renderers import register_php_renderers

    register_php_renderers(registry)


def create_registry() -> RendererRegistry:
    """Create a fresh registry with the built-in renderers, for customisation."""
    registry = RendererRegistry()
    _auto_register_renderers(registry)
    return registry


# Public API functions using the global registry


def register_renderer(
    field_type: str,
    renderer: RendererFunc,
    aliases: Optional[List[str]] = None,
    replace: bool = False,
):
    """Register a renderer in the global registry."""
    get_registry().register(field_type, renderer, aliases, replace=replace)


def list_supported_types() -> List[str]:
    """List all field types with a dedicated renderer."""
    return get_registry().list_types()


def is_type_supported(field_type: str) -> bool:
    """Check if a field type has a dedicated renderer."""
    return get_registry().is_supported(field_type)
