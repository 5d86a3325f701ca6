"""Tests for the per-type PHP renderers."""

import pytest

from acf_generator.codegen import Field, FieldType, GeneratorConfig
from acf_generator.codegen.php.context import AccessorContext
from acf_generator.codegen.php.renderers import (
    PHP_RENDERER_ALIASES,
    PHP_RENDERERS,
    FieldRenderer,
)

from .helpers import make_field


def render(renderer, data, context=None, depth=0):
    return renderer.render(Field.from_dict(data), context, depth)


ROW = AccessorContext(is_sub_field=True, field_name="rows", group_key="group_x")


class TestFieldComment:
    """Every fragment opens with the field comment and ends with a blank line."""

    @pytest.mark.parametrize("field_type", [t.value for t in FieldType])
    def test_opening_comment(self, renderer: FieldRenderer, field_type: str) -> None:
        code = render(renderer, make_field("thing", field_type, label="Thing"))
        assert code.startswith(f"/* Field: Thing ({field_type}) */\n")
        assert code.endswith("\n\n")

    def test_comment_cannot_be_closed_by_label(self, renderer: FieldRenderer) -> None:
        code = render(renderer, make_field("x", label="Evil */ echo 1; /*"))
        assert code.splitlines()[0] == "/* Field: Evil * / echo 1; /* (text) */"


class TestBasicTypes:
    """Tests for text-like, url and password fields."""

    @pytest.mark.parametrize("field_type", ["text", "textarea", "number", "email"])
    def test_guarded_paragraph(self, renderer: FieldRenderer, field_type: str) -> None:
        code = render(renderer, make_field("headline", field_type, label="Headline"))
        assert code == (
            f"/* Field: Headline ({field_type}) */\n"
            "if ( get_field('headline') ) {\n"
            "    echo '<p>' . esc_html( get_field('headline') ) . '</p>';\n"
            "}\n"
            "\n"
        )

    def test_sub_field_context(self, renderer: FieldRenderer) -> None:
        code = render(renderer, make_field("name"), ROW)
        assert "get_sub_field('name')" in code
        assert "get_field(" not in code

    def test_url(self, renderer: FieldRenderer) -> None:
        code = render(renderer, make_field("website", "url"))
        assert "$url = get_field('website');" in code
        assert "esc_url( $url )" in code
        assert "esc_html( $url )" in code

    def test_password_never_reads_value(self, renderer: FieldRenderer) -> None:
        for context in (None, ROW):
            code = render(renderer, make_field("secret", "password"), context)
            assert "/* Password field: secret (not displayed for security) */" in code
            assert "get_field" not in code
            assert "get_sub_field" not in code
            assert "the_field" not in code
            assert "echo" not in code

    def test_name_is_escaped_in_literal(self, renderer: FieldRenderer) -> None:
        code = render(renderer, make_field("it's"))
        assert "get_field('it\\'s')" in code


class TestContentTypes:
    """Tests for image, gallery, file, wysiwyg and oembed."""

    def test_wysiwyg(self, renderer: FieldRenderer) -> None:
        code = render(renderer, make_field("body", "wysiwyg"))
        assert "<div class=\"wysiwyg-content\">' . get_field('body') . '</div>'" in code

    def test_oembed(self, renderer: FieldRenderer) -> None:
        code = render(renderer, make_field("video", "oembed"))
        assert 'oembed-content' in code

    def test_image_uses_configured_size(self) -> None:
        renderer = FieldRenderer(GeneratorConfig(image_size="large"))
        code = render(renderer, make_field("photo", "image"))
        assert "$image = get_field('photo');" in code
        assert "wp_get_attachment_image( $image['ID'], 'large' )" in code
        assert "<figcaption>" in code

    def test_gallery_uses_thumbnail_size(self, renderer: FieldRenderer) -> None:
        code = render(renderer, make_field("photos", "gallery"))
        assert "foreach ( $images as $image ) {" in code
        assert "wp_get_attachment_image( $image['ID'], 'thumbnail' )" in code
        assert '<div class="gallery">' in code

    def test_file(self, renderer: FieldRenderer) -> None:
        code = render(renderer, make_field("brochure", "file"))
        assert "download>" in code
        assert "esc_html( $file['title'] )" in code


class TestChoiceTypes:
    """Tests for select, radio, checkbox, button_group and true_false."""

    @pytest.mark.parametrize("field_type", ["select", "radio"])
    def test_list_or_paragraph(self, renderer: FieldRenderer, field_type: str) -> None:
        code = render(renderer, make_field("color", field_type))
        assert "if ( is_array( $selected ) ) {" in code
        assert "<li>' . esc_html( $value ) . '</li>" in code
        assert "<p>' . esc_html( $selected ) . '</p>" in code

    def test_checkbox(self, renderer: FieldRenderer) -> None:
        code = render(renderer, make_field("features", "checkbox"))
        assert '<ul class="checkbox-features">' in code

    def test_button_group(self, renderer: FieldRenderer) -> None:
        code = render(renderer, make_field("align", "button_group"))
        assert '<span class="button-group-align">' in code

    def test_true_false_has_both_branches(self) -> None:
        renderer = FieldRenderer(GeneratorConfig(text_domain="my-theme"))
        code = render(renderer, make_field("featured", "true_false"))
        assert "if ( get_field('featured') ) {" in code
        assert "esc_html__( 'Enabled', 'my-theme' )" in code
        assert "} else {" in code
        assert "esc_html__( 'Disabled', 'my-theme' )" in code


class TestRelationalTypes:
    """Tests for link, post_object, page_link, relationship, taxonomy and user."""

    def test_link(self, renderer: FieldRenderer) -> None:
        code = render(renderer, make_field("cta", "link"))
        assert "$link['target']" in code
        assert "esc_url( $link['url'] )" in code

    def test_post_object_does_not_clobber_global_post(self, renderer: FieldRenderer) -> None:
        code = render(renderer, make_field("featured_post", "post_object"))
        assert "$post_object = get_field('featured_post');" in code
        assert "$post =" not in code
        assert "get_permalink( $post_object->ID )" in code

    def test_page_link(self, renderer: FieldRenderer) -> None:
        code = render(renderer, make_field("target_page", "page_link"))
        assert "url_to_postid( $link )" in code
        assert "url_to_postid( $page_link )" in code

    def test_relationship(self, renderer: FieldRenderer) -> None:
        code = render(renderer, make_field("related", "relationship"))
        assert '<ul class="relationship-related">' in code
        assert "foreach ( $related_posts as $related ) {" in code

    def test_taxonomy(self, renderer: FieldRenderer) -> None:
        code = render(renderer, make_field("topics", "taxonomy"))
        assert '<ul class="taxonomy-topics">' in code
        assert "get_term_link( $term )" in code
        assert "get_term_link( $terms )" in code

    def test_user(self, renderer: FieldRenderer) -> None:
        code = render(renderer, make_field("author", "user"))
        assert "if ( isset( $user[0] ) ) {" in code
        assert "$u['display_name']" in code
        assert "$user['display_name']" in code


class TestJQueryTypes:
    """Tests for map, date/time and colour pickers."""

    def test_google_map(self, renderer: FieldRenderer) -> None:
        code = render(renderer, make_field("location", "google_map"))
        assert 'class="acf-map"' in code
        assert "esc_attr( $map['lat'] )" in code
        assert "/* Note: Add ACF Google Map JS" in code

    @pytest.mark.parametrize(
        "field_type,fragment",
        [
            ("date_picker", "date_i18n( get_option( 'date_format' ), strtotime( $date ) )"),
            (
                "date_time_picker",
                "date_i18n( get_option( 'date_format' ) . ' ' . get_option( 'time_format' ), strtotime( $datetime ) )",
            ),
            ("time_picker", "date_i18n( get_option( 'time_format' ), strtotime( $time ) )"),
        ],
    )
    def test_date_formats(self, renderer: FieldRenderer, field_type: str, fragment: str) -> None:
        assert fragment in render(renderer, make_field("when", field_type))

    def test_color_picker(self, renderer: FieldRenderer) -> None:
        code = render(renderer, make_field("accent", "color_picker"))
        assert "background-color: ' . esc_attr( $color ) . '; width: 100px; height: 100px;" in code


class TestLayoutTypes:
    """Tests for the composite and UI-only types."""

    def test_repeater_structure_and_depth(self, renderer: FieldRenderer) -> None:
        code = render(
            renderer,
            make_field("testimonials", "repeater", sub_fields=[make_field("name")]),
        )
        lines = code.splitlines()
        assert lines[1] == "if ( have_rows('testimonials') ) {"
        assert lines[2] == "    echo '<div class=\"repeater-testimonials\">';"
        assert lines[3] == "    while ( have_rows('testimonials') ) : the_row();"
        assert lines[4] == "        echo '<div class=\"repeater-item\">';"
        assert lines[5] == "            /* Field: Name (text) */"
        assert lines[6] == "            if ( get_sub_field('name') ) {"
        assert "    endwhile;" in lines
        assert code.rstrip("\n").splitlines()[-1] == "}"

    def test_flexible_content_branches_are_exclusive(self, renderer: FieldRenderer) -> None:
        code = render(
            renderer,
            make_field(
                "sections",
                "flexible_content",
                layouts=[
                    {"key": "l1", "name": "hero", "sub_fields": [make_field("hero_title")]},
                    {"key": "l2", "name": "cta", "sub_fields": [make_field("cta_text")]},
                ],
            ),
        )
        assert "        if ( get_row_layout() == 'hero' ) {\n" in code
        assert "        } elseif ( get_row_layout() == 'cta' ) {\n" in code
        assert "                if ( get_sub_field('hero_title') ) {\n" in code
        assert code.index("hero_title") < code.index("elseif") < code.index("cta_text")

    def test_flexible_content_without_layouts(self, renderer: FieldRenderer) -> None:
        code = render(renderer, make_field("sections", "flexible_content"))
        assert "get_row_layout" not in code
        assert "endwhile;" in code

    def test_group(self, renderer: FieldRenderer) -> None:
        code = render(
            renderer, make_field("details", "group", sub_fields=[make_field("summary")])
        )
        assert "echo '<div class=\"group-details\">';" in code
        assert "            if ( get_sub_field('summary') ) {\n" in code

    def test_clone_keeps_depth_and_context(self, renderer: FieldRenderer) -> None:
        code = render(
            renderer,
            make_field("extra", "clone", sub_fields=[make_field("note")]),
            ROW,
            depth=3,
        )
        assert "            /* Clone field: extra */\n" in code
        assert "            /* Field: Note (text) */\n" in code
        assert "            if ( get_sub_field('note') ) {\n" in code

    def test_top_level_clone_uses_get_field(self, renderer: FieldRenderer) -> None:
        code = render(renderer, make_field("extra", "clone", sub_fields=[make_field("note")]))
        assert "if ( get_field('note') ) {" in code

    @pytest.mark.parametrize("field_type", ["accordion", "tab"])
    def test_ui_only(self, renderer: FieldRenderer, field_type: str) -> None:
        code = render(renderer, make_field("section", field_type))
        assert f"/* {field_type} field: section (admin UI element, no front-end output) */" in code
        assert "get_field" not in code

    def test_missing_sub_fields_render_empty_loop(self, renderer: FieldRenderer) -> None:
        code = render(renderer, make_field("rows", "repeater", sub_fields="broken"))
        assert "while ( have_rows('rows') ) : the_row();" in code
        assert "Field: " in code.splitlines()[0]
        assert code.count("/* Field:") == 1


class TestFallback:
    """Unknown types always render."""

    @pytest.mark.parametrize("field_type", ["range", "icon_picker", ""])
    def test_unknown_type(self, renderer: FieldRenderer, field_type: str) -> None:
        code = render(renderer, make_field("mystery", field_type))
        assert f"/* Unsupported field type: {field_type} */" in code
        assert "esc_html( get_field('mystery') )" in code

    def test_every_known_type_has_a_renderer(self) -> None:
        aliased = {t for types in PHP_RENDERER_ALIASES.values() for t in types}
        assert set(PHP_RENDERERS) | aliased == set(FieldType)
        assert not set(PHP_RENDERERS) & aliased
