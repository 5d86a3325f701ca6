"""
Schema providers supply field groups to the snippet generator.

The generator only relies on two lookups: a group by key, and the group's
top-level fields. Providers hand out copies, so key rewriting during
generation never touches the provider's own data.
"""

import copy
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .schema import Field, FieldGroup, SchemaValidationError, load_field_groups
from ...logging_config import get_logger
from ...utils import iter_acf_json, read_json_file

logger = get_logger(__name__)


class SchemaProvider(ABC):
    """Source of ACF field groups."""

    @abstractmethod
    def get_field_group(self, key: str) -> Optional[FieldGroup]:
        """Return the group with ``key``, or None if there is none."""

    @abstractmethod
    def get_fields(self, group_key: str) -> List[Field]:
        """Return the group's top-level fields (empty if unknown)."""

    @abstractmethod
    def list_field_groups(self) -> List[FieldGroup]:
        """Return every known group in source order."""


class InMemorySchemaProvider(SchemaProvider):
    """Provider over already loaded field groups."""

    def __init__(self, groups: Optional[List[FieldGroup]] = None):
        self._groups: Dict[str, FieldGroup] = {}
        for group in groups or []:
            self.add_field_group(group)

    def add_field_group(self, group: FieldGroup):
        if group.key in self._groups:
            logger.warning("Duplicate field group key %s; keeping the first", group.key)
            return
        self._groups[group.key] = group

    def get_field_group(self, key: str) -> Optional[FieldGroup]:
        group = self._groups.get(key)
        if group is None:
            return None
        return FieldGroup(
            key=group.key, title=group.title, fields=[], extra=dict(group.extra)
        )

    def get_fields(self, group_key: str) -> List[Field]:
        group = self._groups.get(group_key)
        if group is None:
            return []
        return copy.deepcopy(group.fields)

    def list_field_groups(self) -> List[FieldGroup]:
        return [copy.deepcopy(g) for g in self._groups.values()]

    def __len__(self) -> int:
        return len(self._groups)

    def __contains__(self, key: str) -> bool:
        return key in self._groups

    @classmethod
    def from_json_data(cls, data: Any) -> "InMemorySchemaProvider":
        """
        Build a provider from a decoded ACF JSON export.

        Raises:
            SchemaValidationError: If the document is not a valid field group export
        """
        return cls(load_field_groups(data))

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "InMemorySchemaProvider":
        """
        Build a provider from an export file or an ``acf-json`` directory.

        In a directory every ``*.json`` file is loaded in name order; files
        that cannot be decoded or are not valid field groups are skipped
        with a warning.
        """
        path = Path(path)
        if not path.is_dir():
            return cls.from_json_data(read_json_file(path).data)

        provider = cls()
        for document in iter_acf_json(path):
            if not document.ok:
                continue
            try:
                groups = load_field_groups(document.data)
            except SchemaValidationError as e:
                logger.warning("Skipping %s: %s", Path(document.source).name, e)
                continue
            for group in groups:
                provider.add_field_group(group)

        logger.info("Loaded %d field group(s) from %s", len(provider), path)
        return provider
