"""
Recursive walk over a field tree.

Composes the field renderer over an ordered list of fields, threading the
indentation depth and the sub-field accessor context.
"""

from typing import List, TYPE_CHECKING

from ..core.builder import CodeBuilder
from ..core.schema import Field
from .context import AccessorContext

if TYPE_CHECKING:
    from .renderers import FieldRenderer


class TreeWalker:
    """Renders sibling fields in order; holds no state of its own."""

    def __init__(self, renderer: "FieldRenderer"):
        self.renderer = renderer

    def render_all(
        self,
        fields: List[Field],
        group_key: str = "",
        depth: int = 0,
        parent_field_name: str = "",
    ) -> str:
        """
        Render every field of a level.

        Args:
            fields: Fields in schema order (None is treated as empty)
            group_key: Key of the field group being rendered
            depth: Indentation level of each field's fragment
            parent_field_name: Name of the enclosing row field; empty at top level

        Returns:
            Concatenated fragments
        """
        context = AccessorContext(group_key=group_key).nested(parent_field_name)
        out = CodeBuilder(self.renderer.config.indent_unit, depth)
        for field in fields or []:
            out.raw(self.renderer.render(field, context, depth))
        return out.build()
