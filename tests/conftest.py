"""Shared pytest fixtures for ACF Generator tests."""

import json
from pathlib import Path

import pytest

from acf_generator.codegen import (
    GeneratorConfig,
    InMemorySchemaProvider,
    KeyAllocator,
)
from acf_generator.codegen.php.renderers import FieldRenderer

from .helpers import make_field, make_group


@pytest.fixture
def config() -> GeneratorConfig:
    return GeneratorConfig()


@pytest.fixture
def renderer(config: GeneratorConfig) -> FieldRenderer:
    return FieldRenderer(config)


@pytest.fixture
def allocator() -> KeyAllocator:
    return KeyAllocator()


@pytest.fixture
def headline_group() -> dict:
    return make_group("group_hero", "Hero", [make_field("headline")])


@pytest.fixture
def testimonials_group() -> dict:
    return make_group(
        "group_testimonials",
        "Testimonials",
        [
            make_field(
                "testimonials",
                "repeater",
                sub_fields=[
                    make_field("name"),
                    make_field("quote", "textarea"),
                ],
            )
        ],
    )


@pytest.fixture
def sections_group() -> dict:
    return make_group(
        "group_sections",
        "Sections",
        [
            make_field(
                "sections",
                "flexible_content",
                layouts={
                    "layout_hero": {
                        "key": "layout_hero",
                        "name": "hero",
                        "label": "Hero",
                        "sub_fields": [make_field("hero_title")],
                    },
                    "layout_cta": {
                        "key": "layout_cta",
                        "name": "cta",
                        "label": "Call to action",
                        "sub_fields": [make_field("cta_link", "link")],
                    },
                },
            )
        ],
    )


@pytest.fixture
def details_group() -> dict:
    return make_group(
        "group_details",
        "Details",
        [
            make_field(
                "details",
                "group",
                sub_fields=[
                    make_field("summary"),
                    make_field("extra", "clone", sub_fields=[make_field("note")]),
                ],
            )
        ],
    )


@pytest.fixture
def provider(headline_group, testimonials_group, sections_group, details_group):
    return InMemorySchemaProvider.from_json_data(
        [headline_group, testimonials_group, sections_group, details_group]
    )


@pytest.fixture
def export_file(tmp_path: Path, headline_group, testimonials_group) -> Path:
    path = tmp_path / "acf-export.json"
    path.write_text(json.dumps([headline_group, testimonials_group]), encoding="utf-8")
    return path
