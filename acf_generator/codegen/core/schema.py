"""
Core schema representation for ACF field groups.

Converts ACF JSON exports (and AI generated documents) into a normalized
internal format that the template generator can walk consistently.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any
from enum import Enum


class SchemaValidationError(Exception):
    """Raised when a field group document fails structural validation."""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__("Invalid schema: " + "; ".join(self.problems))


class FieldType(Enum):
    """ACF field types with dedicated template rendering."""

    # Basic
    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    EMAIL = "email"
    URL = "url"
    PASSWORD = "password"

    # Content
    IMAGE = "image"
    FILE = "file"
    WYSIWYG = "wysiwyg"
    OEMBED = "oembed"
    GALLERY = "gallery"

    # Choice
    SELECT = "select"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    BUTTON_GROUP = "button_group"
    TRUE_FALSE = "true_false"

    # Relational
    LINK = "link"
    POST_OBJECT = "post_object"
    PAGE_LINK = "page_link"
    RELATIONSHIP = "relationship"
    TAXONOMY = "taxonomy"
    USER = "user"

    # jQuery
    GOOGLE_MAP = "google_map"
    DATE_PICKER = "date_picker"
    DATE_TIME_PICKER = "date_time_picker"
    TIME_PICKER = "time_picker"
    COLOR_PICKER = "color_picker"

    # Layout
    GROUP = "group"
    REPEATER = "repeater"
    FLEXIBLE_CONTENT = "flexible_content"
    CLONE = "clone"
    ACCORDION = "accordion"
    TAB = "tab"

    @classmethod
    def from_value(cls, value: str) -> Optional["FieldType"]:
        """Map a raw ACF type string to a FieldType, or None if unknown."""
        try:
            return cls(value)
        except ValueError:
            return None


# Categories as ACF groups them in the field type picker
FIELD_TYPE_CATEGORIES: Dict[str, List[FieldType]] = {
    "basic": [
        FieldType.TEXT,
        FieldType.TEXTAREA,
        FieldType.NUMBER,
        FieldType.EMAIL,
        FieldType.URL,
        FieldType.PASSWORD,
    ],
    "content": [
        FieldType.IMAGE,
        FieldType.FILE,
        FieldType.WYSIWYG,
        FieldType.OEMBED,
        FieldType.GALLERY,
    ],
    "choice": [
        FieldType.SELECT,
        FieldType.CHECKBOX,
        FieldType.RADIO,
        FieldType.BUTTON_GROUP,
        FieldType.TRUE_FALSE,
    ],
    "relational": [
        FieldType.LINK,
        FieldType.POST_OBJECT,
        FieldType.PAGE_LINK,
        FieldType.RELATIONSHIP,
        FieldType.TAXONOMY,
        FieldType.USER,
    ],
    "jquery": [
        FieldType.GOOGLE_MAP,
        FieldType.DATE_PICKER,
        FieldType.DATE_TIME_PICKER,
        FieldType.TIME_PICKER,
        FieldType.COLOR_PICKER,
    ],
    "layout": [
        FieldType.GROUP,
        FieldType.REPEATER,
        FieldType.FLEXIBLE_CONTENT,
        FieldType.CLONE,
        FieldType.ACCORDION,
        FieldType.TAB,
    ],
}

# Types whose children live in ``sub_fields``
SUB_FIELD_TYPES = {FieldType.REPEATER, FieldType.GROUP, FieldType.CLONE}


def category_of(field_type: FieldType) -> str:
    """Return the ACF category name for a field type."""
    for category, members in FIELD_TYPE_CATEGORIES.items():
        if field_type in members:
            return category
    return "other"


@dataclass
class Layout:
    """One named alternative shape of sub-fields in a flexible content field."""

    key: str
    name: str
    label: str = ""
    sub_fields: List["Field"] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], fallback_key: str = "") -> "Layout":
        name = _as_str(data.get("name"))
        return cls(
            key=_as_str(data.get("key")) or fallback_key,
            name=name,
            label=_as_str(data.get("label")) or name,
            sub_fields=_parse_fields(data.get("sub_fields")),
            extra=_extra(data, {"key", "name", "label", "sub_fields"}),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        data.update(
            {
                "key": self.key,
                "name": self.name,
                "label": self.label,
                "sub_fields": [f.to_dict() for f in self.sub_fields],
            }
        )
        return data


@dataclass
class Field:
    """A single typed content slot in a field group or composite field."""

    key: str
    name: str
    label: str
    type: str
    sub_fields: List["Field"] = field(default_factory=list)
    layouts: List[Layout] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def field_type(self) -> Optional[FieldType]:
        """The known FieldType, or None for types without a renderer."""
        return FieldType.from_value(self.type)

    @property
    def is_composite(self) -> bool:
        ft = self.field_type
        return ft in SUB_FIELD_TYPES or ft == FieldType.FLEXIBLE_CONTENT

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Field":
        """Build a Field from ACF JSON, tolerating missing or malformed keys."""
        name = _as_str(data.get("name"))
        return cls(
            key=_as_str(data.get("key")),
            name=name,
            label=_as_str(data.get("label")) or name,
            type=_as_str(data.get("type")),
            sub_fields=_parse_fields(data.get("sub_fields")),
            layouts=_parse_layouts(data.get("layouts")),
            extra=_extra(data, {"key", "name", "label", "type", "sub_fields", "layouts"}),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        data.update(
            {"key": self.key, "label": self.label, "name": self.name, "type": self.type}
        )
        if self.sub_fields:
            data["sub_fields"] = [f.to_dict() for f in self.sub_fields]
        if self.layouts:
            data["layouts"] = [layout.to_dict() for layout in self.layouts]
        return data

    def iter_fields(self):
        """Yield this field and every nested field, pre-order."""
        yield self
        for sub_field in self.sub_fields:
            yield from sub_field.iter_fields()
        for layout in self.layouts:
            for sub_field in layout.sub_fields:
                yield from sub_field.iter_fields()


@dataclass
class FieldGroup:
    """A named, keyed collection of field definitions."""

    key: str
    title: str
    fields: List[Field] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldGroup":
        return cls(
            key=_as_str(data.get("key")),
            title=_as_str(data.get("title")),
            fields=_parse_fields(data.get("fields")),
            extra=_extra(data, {"key", "title", "fields"}),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {"key": self.key, "title": self.title}
        data["fields"] = [f.to_dict() for f in self.fields]
        data.update(self.extra)
        return data

    def iter_fields(self):
        """Yield every field in the group, pre-order."""
        for top_field in self.fields:
            yield from top_field.iter_fields()

    def get_field(self, name: str) -> Optional[Field]:
        """Get top-level field by name."""
        for f in self.fields:
            if f.name == name:
                return f
        return None


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _extra(data: Dict[str, Any], known: set) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k not in known}


def _parse_fields(raw: Any) -> List[Field]:
    """Parse a field list; anything that is not a list of objects yields nothing."""
    if not isinstance(raw, list):
        return []
    return [Field.from_dict(item) for item in raw if isinstance(item, dict)]


def _parse_layouts(raw: Any) -> List[Layout]:
    """Parse layouts given as a list or as an ACF export mapping keyed by layout key."""
    if isinstance(raw, dict):
        return [
            Layout.from_dict(item, fallback_key=str(layout_key))
            for layout_key, item in raw.items()
            if isinstance(item, dict)
        ]
    if isinstance(raw, list):
        return [Layout.from_dict(item) for item in raw if isinstance(item, dict)]
    return []


def normalize_field_groups(data: Any) -> List[Any]:
    """
    Normalize a decoded document into a list of candidate field groups.

    A single group object (one carrying ``key``) is wrapped in a list; any
    other mapping or list is returned as a list of its values/items.
    """
    if isinstance(data, dict):
        if "key" in data:
            return [data]
        return list(data.values())
    if isinstance(data, list):
        return list(data)
    return [data]


def validate_field_groups(data: Any) -> List[str]:
    """
    Validate a decoded document for basic structural issues.

    Returns:
        List of problems (empty if the document is valid)
    """
    if not isinstance(data, (dict, list)):
        return ["JSON must be an array or object representing ACF field groups"]

    groups = normalize_field_groups(data)
    if not groups:
        return ["JSON is empty"]

    problems = []
    for index, group in enumerate(groups):
        if not isinstance(group, dict):
            problems.append(f"Field group #{index} is not an object")
            continue
        missing = [k for k in ("key", "title") if not group.get(k)]
        if missing:
            problems.append(
                f"Field group #{index}: missing {' and '.join(missing)}"
            )
            continue
        if "fields" in group and not isinstance(group["fields"], list):
            problems.append(f"Field group '{group['key']}': 'fields' must be a list")

    return problems


def load_field_groups(data: Any) -> List[FieldGroup]:
    """
    Validate and convert a decoded ACF JSON document into FieldGroups.

    Raises:
        SchemaValidationError: If any group is missing its key or title
    """
    problems = validate_field_groups(data)
    if problems:
        raise SchemaValidationError(problems)
    return [FieldGroup.from_dict(group) for group in normalize_field_groups(data)]
