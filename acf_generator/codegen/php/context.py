"""Accessor context threaded through the tree walk."""

from dataclasses import dataclass

from ..core.php import php_string


@dataclass(frozen=True)
class AccessorContext:
    """
    How field values are read at the current nesting level.

    Top-level fields use ``get_field()``; fields inside a repeater, group or
    flexible content row use ``get_sub_field()`` on the current row.
    """

    is_sub_field: bool = False
    field_name: str = ""
    group_key: str = ""

    def value(self, name: str) -> str:
        """PHP expression reading field ``name`` in this context."""
        func = "get_sub_field" if self.is_sub_field else "get_field"
        return f"{func}('{php_string(name)}')"

    def nested(self, parent_field_name: str) -> "AccessorContext":
        """Context for the rows of composite field ``parent_field_name``."""
        return AccessorContext(
            is_sub_field=bool(parent_field_name),
            field_name=parent_field_name,
            group_key=self.group_key,
        )
