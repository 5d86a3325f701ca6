"""
PHP template renderers.

Renders ACF field definitions as front-end PHP using the ACF accessor API.
"""

from .context import AccessorContext
from .renderers import FieldRenderer, PHP_RENDERERS, register_php_renderers
from .walker import TreeWalker

__all__ = [
    "AccessorContext",
    "FieldRenderer",
    "TreeWalker",
    "PHP_RENDERERS",
    "register_php_renderers",
]
