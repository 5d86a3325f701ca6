"""Tests for InMemorySchemaProvider."""

import json
from pathlib import Path

import pytest

from acf_generator.codegen import InMemorySchemaProvider, SchemaValidationError
from acf_generator.utils import JSONLoaderError

from .helpers import make_field, make_group


class TestInMemoryProvider:
    """Lookups and copy semantics."""

    def test_lookup(self, provider) -> None:
        group = provider.get_field_group("group_hero")
        assert group.title == "Hero"
        assert group.fields == []
        assert [f.name for f in provider.get_fields("group_hero")] == ["headline"]

    def test_unknown_group(self, provider) -> None:
        assert provider.get_field_group("nope") is None
        assert provider.get_fields("nope") == []
        assert "nope" not in provider

    def test_returns_copies(self, provider) -> None:
        provider.get_fields("group_hero")[0].key = "changed"
        assert provider.get_fields("group_hero")[0].key == "field_headline"

    def test_duplicate_group_keeps_first(self) -> None:
        provider = InMemorySchemaProvider.from_json_data(
            [make_group("group_a", "First", []), make_group("group_a", "Second", [])]
        )
        assert len(provider) == 1
        assert provider.get_field_group("group_a").title == "First"

    def test_invalid_document(self) -> None:
        with pytest.raises(SchemaValidationError):
            InMemorySchemaProvider.from_json_data({"title": "no key"})


class TestFromPath:
    """Loading export files and acf-json directories."""

    def test_file(self, export_file: Path) -> None:
        provider = InMemorySchemaProvider.from_path(export_file)
        assert [g.key for g in provider.list_field_groups()] == [
            "group_hero",
            "group_testimonials",
        ]

    def test_directory_in_name_order_skipping_invalid(self, tmp_path: Path) -> None:
        (tmp_path / "b.json").write_text(
            json.dumps(make_group("group_b", "B", [make_field("x")])), encoding="utf-8"
        )
        (tmp_path / "a.json").write_text(
            json.dumps(make_group("group_a", "A", [])), encoding="utf-8"
        )
        (tmp_path / "c.json").write_text(json.dumps({"title": "broken"}), encoding="utf-8")
        (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

        provider = InMemorySchemaProvider.from_path(tmp_path)
        assert [g.key for g in provider.list_field_groups()] == ["group_a", "group_b"]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            InMemorySchemaProvider.from_path(tmp_path / "missing.json")

    def test_bad_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(JSONLoaderError):
            InMemorySchemaProvider.from_path(path)

    def test_directory_skips_undecodable_files(self, tmp_path: Path) -> None:
        (tmp_path / "group_a.json").write_text(
            json.dumps(make_group("group_a", "A", [make_field("x")])), encoding="utf-8"
        )
        (tmp_path / "group_b.json").write_text("{not json", encoding="utf-8")
        (tmp_path / "group_c.json").write_text(
            json.dumps(make_group("group_c", "C", [])), encoding="utf-8"
        )

        provider = InMemorySchemaProvider.from_path(tmp_path)

        assert [g.key for g in provider.list_field_groups()] == ["group_a", "group_c"]
