"""
PHP template renderers for ACF field types.

Each renderer receives the field, the accessor context of its level, a
builder positioned at the field's depth and the owning FieldRenderer (for
settings and for recursing into sub-fields). Renderers only append text.
"""

from typing import List, Optional

from ..core.builder import CodeBuilder
from ..core.config import GeneratorConfig
from ..core.php import html_class, php_comment, php_string
from ..core.schema import Field, FieldType
from ..registry import RendererRegistry, get_registry
from .context import AccessorContext
from .walker import TreeWalker
from ...logging_config import get_logger

logger = get_logger(__name__)

# Depth of sub-fields relative to their composite parent
REPEATER_CHILD_OFFSET = 3
FLEXIBLE_CHILD_OFFSET = 4
GROUP_CHILD_OFFSET = 3


class FieldRenderer:
    """Maps one field definition to its template code fragment."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        registry: Optional[RendererRegistry] = None,
    ):
        self.config = config or GeneratorConfig()
        self.registry = registry or get_registry()
        self.walker = TreeWalker(self)

    def render(
        self,
        field: Field,
        context: Optional[AccessorContext] = None,
        depth: int = 0,
    ) -> str:
        """
        Render one field, terminated by a blank line.

        Unknown types go through the registry's fallback renderer, so this
        always returns text.
        """
        context = context or AccessorContext()
        out = CodeBuilder(self.config.indent_unit, depth)
        out.line(f"/* Field: {php_comment(field.label)} ({php_comment(field.type)}) */")

        renderer = self.registry.resolve(field.type)
        logger.debug(
            "Rendering %s (%s) with %s",
            field.name,
            field.type,
            getattr(renderer, "__name__", type(renderer).__name__),
        )
        renderer(field, context, out, self)

        out.blank()
        return out.build()

    def walk(
        self,
        fields: List[Field],
        context: AccessorContext,
        depth: int,
        parent_field_name: str,
    ) -> str:
        """Render nested fields through the tree walker."""
        return self.walker.render_all(fields, context.group_key, depth, parent_field_name)


# Basic


def render_text(field, ctx, out, renderer):
    """Escaped value in a paragraph."""
    value = ctx.value(field.name)
    out.block(
        f"""
        if ( {value} ) {{
            echo '<p>' . esc_html( {value} ) . '</p>';
        }}
        """
    )


def render_url(field, ctx, out, renderer):
    """Anchor whose visible text is the URL."""
    out.block(
        f"""
        $url = {ctx.value(field.name)};
        if ( $url ) {{
            echo '<a href="' . esc_url( $url ) . '">' . esc_html( $url ) . '</a>';
        }}
        """
    )


def render_password(field, ctx, out, renderer):
    """Comment only; the stored value is never read."""
    out.line(f"/* Password field: {php_comment(field.name)} (not displayed for security) */")


# Content


def _render_rich_content(css_class, field, ctx, out):
    value = ctx.value(field.name)
    out.block(
        f"""
        if ( {value} ) {{
            echo '<div class="{css_class}">' . {value} . '</div>';
        }}
        """
    )


def render_wysiwyg(field, ctx, out, renderer):
    """Raw editor HTML in a wrapper div."""
    _render_rich_content("wysiwyg-content", field, ctx, out)


def render_oembed(field, ctx, out, renderer):
    """Raw embed HTML in a wrapper div."""
    _render_rich_content("oembed-content", field, ctx, out)


def render_image(field, ctx, out, renderer):
    """Full size image in a figure with optional caption."""
    size = php_string(renderer.config.image_size)
    out.block(
        f"""
        $image = {ctx.value(field.name)};
        if ( $image ) {{
            echo '<figure>';
            echo wp_get_attachment_image( $image['ID'], '{size}' );
            if ( $image['caption'] ) {{
                echo '<figcaption>' . esc_html( $image['caption'] ) . '</figcaption>';
            }}
            echo '</figure>';
        }}
        """
    )


def render_gallery(field, ctx, out, renderer):
    """Thumbnails with optional captions in a gallery container."""
    size = php_string(renderer.config.gallery_image_size)
    out.block(
        f"""
        $images = {ctx.value(field.name)};
        if ( $images ) {{
            echo '<div class="gallery">';
            foreach ( $images as $image ) {{
                echo '<figure>';
                echo wp_get_attachment_image( $image['ID'], '{size}' );
                if ( $image['caption'] ) {{
                    echo '<figcaption>' . esc_html( $image['caption'] ) . '</figcaption>';
                }}
                echo '</figure>';
            }}
            echo '</div>';
        }}
        """
    )


def render_file(field, ctx, out, renderer):
    """Download link labelled with the file title."""
    out.block(
        f"""
        $file = {ctx.value(field.name)};
        if ( $file ) {{
            echo '<a href="' . esc_url( $file['url'] ) . '" download>' . esc_html( $file['title'] ) . '</a>';
        }}
        """
    )


# Choice


def render_select(field, ctx, out, renderer):
    """List for multi-value selections, paragraph otherwise."""
    out.block(
        f"""
        $selected = {ctx.value(field.name)};
        if ( $selected ) {{
            if ( is_array( $selected ) ) {{
                echo '<ul>';
                foreach ( $selected as $value ) {{
                    echo '<li>' . esc_html( $value ) . '</li>';
                }}
                echo '</ul>';
            }} else {{
                echo '<p>' . esc_html( $selected ) . '</p>';
            }}
        }}
        """
    )


def render_checkbox(field, ctx, out, renderer):
    """Checked choices as a list."""
    out.block(
        f"""
        $choices = {ctx.value(field.name)};
        if ( $choices ) {{
            echo '<ul class="checkbox-{html_class(field.name)}">';
            foreach ( $choices as $choice ) {{
                echo '<li>' . esc_html( $choice ) . '</li>';
            }}
            echo '</ul>';
        }}
        """
    )


def render_button_group(field, ctx, out, renderer):
    """Selected button as an inline span."""
    out.block(
        f"""
        $button = {ctx.value(field.name)};
        if ( $button ) {{
            echo '<span class="button-group-{html_class(field.name)}">' . esc_html( $button ) . '</span>';
        }}
        """
    )


def render_true_false(field, ctx, out, renderer):
    """Enabled/Disabled text; both branches always present."""
    domain = php_string(renderer.config.text_domain)
    out.block(
        f"""
        if ( {ctx.value(field.name)} ) {{
            echo '<p>' . esc_html__( 'Enabled', '{domain}' ) . '</p>';
        }} else {{
            echo '<p>' . esc_html__( 'Disabled', '{domain}' ) . '</p>';
        }}
        """
    )


# Relational


def render_link(field, ctx, out, renderer):
    """Anchor from the link array, with target when set."""
    out.block(
        f"""
        $link = {ctx.value(field.name)};
        if ( $link ) {{
            $target = $link['target'] ? 'target="' . esc_attr( $link['target'] ) . '"' : '';
            echo '<a href="' . esc_url( $link['url'] ) . '" ' . $target . '>' . esc_html( $link['title'] ) . '</a>';
        }}
        """
    )


def render_post_object(field, ctx, out, renderer):
    """Permalink and title of one or many posts."""
    out.block(
        f"""
        $post_object = {ctx.value(field.name)};
        if ( $post_object ) {{
            if ( is_array( $post_object ) ) {{
                echo '<ul>';
                foreach ( $post_object as $p ) {{
                    echo '<li><a href="' . esc_url( get_permalink( $p->ID ) ) . '">' . esc_html( get_the_title( $p->ID ) ) . '</a></li>';
                }}
                echo '</ul>';
            }} else {{
                echo '<a href="' . esc_url( get_permalink( $post_object->ID ) ) . '">' . esc_html( get_the_title( $post_object->ID ) ) . '</a>';
            }}
        }}
        """
    )


def render_page_link(field, ctx, out, renderer):
    """Page URLs resolved back to titles via url_to_postid."""
    out.block(
        f"""
        $page_link = {ctx.value(field.name)};
        if ( $page_link ) {{
            if ( is_array( $page_link ) ) {{
                echo '<ul>';
                foreach ( $page_link as $link ) {{
                    echo '<li><a href="' . esc_url( $link ) . '">' . esc_html( get_the_title( url_to_postid( $link ) ) ) . '</a></li>';
                }}
                echo '</ul>';
            }} else {{
                echo '<a href="' . esc_url( $page_link ) . '">' . esc_html( get_the_title( url_to_postid( $page_link ) ) ) . '</a>';
            }}
        }}
        """
    )


def render_relationship(field, ctx, out, renderer):
    """List of related posts."""
    out.block(
        f"""
        $related_posts = {ctx.value(field.name)};
        if ( $related_posts ) {{
            echo '<ul class="relationship-{html_class(field.name)}">';
            foreach ( $related_posts as $related ) {{
                echo '<li><a href="' . esc_url( get_permalink( $related->ID ) ) . '">' . esc_html( get_the_title( $related->ID ) ) . '</a></li>';
            }}
            echo '</ul>';
        }}
        """
    )


def render_taxonomy(field, ctx, out, renderer):
    """Term links, one or many."""
    out.block(
        f"""
        $terms = {ctx.value(field.name)};
        if ( $terms ) {{
            echo '<ul class="taxonomy-{html_class(field.name)}">';
            if ( is_array( $terms ) ) {{
                foreach ( $terms as $term ) {{
                    echo '<li><a href="' . esc_url( get_term_link( $term ) ) . '">' . esc_html( $term->name ) . '</a></li>';
                }}
            }} else {{
                echo '<li><a href="' . esc_url( get_term_link( $terms ) ) . '">' . esc_html( $terms->name ) . '</a></li>';
            }}
            echo '</ul>';
        }}
        """
    )


def render_user(field, ctx, out, renderer):
    """Display names, one or many."""
    out.block(
        f"""
        $user = {ctx.value(field.name)};
        if ( $user ) {{
            if ( isset( $user[0] ) ) {{
                echo '<ul>';
                foreach ( $user as $u ) {{
                    echo '<li>' . esc_html( $u['display_name'] ) . '</li>';
                }}
                echo '</ul>';
            }} else {{
                echo '<p>' . esc_html( $user['display_name'] ) . '</p>';
            }}
        }}
        """
    )


# jQuery


def render_google_map(field, ctx, out, renderer):
    """Map container with coordinates; full map needs ACF map JS."""
    out.block(
        f"""
        $map = {ctx.value(field.name)};
        if ( $map ) {{
            echo '<div class="acf-map" data-lat="' . esc_attr( $map['lat'] ) . '" data-lng="' . esc_attr( $map['lng'] ) . '">';
            echo '<p>' . esc_html( $map['address'] ) . '</p>';
            echo '</div>';
            /* Note: Add ACF Google Map JS or a static map API for full rendering */
        }}
        """
    )


def _render_datetime(var, format_expr, field, ctx, out):
    out.block(
        f"""
        ${var} = {ctx.value(field.name)};
        if ( ${var} ) {{
            echo '<p>' . esc_html( date_i18n( {format_expr}, strtotime( ${var} ) ) ) . '</p>';
        }}
        """
    )


def render_date_picker(field, ctx, out, renderer):
    """Date in the site date format."""
    _render_datetime("date", "get_option( 'date_format' )", field, ctx, out)


def render_date_time_picker(field, ctx, out, renderer):
    """Date and time in the site formats."""
    _render_datetime(
        "datetime",
        "get_option( 'date_format' ) . ' ' . get_option( 'time_format' )",
        field,
        ctx,
        out,
    )


def render_time_picker(field, ctx, out, renderer):
    """Time in the site time format."""
    _render_datetime("time", "get_option( 'time_format' )", field, ctx, out)


def render_color_picker(field, ctx, out, renderer):
    """Fixed size colour swatch."""
    out.block(
        f"""
        $color = {ctx.value(field.name)};
        if ( $color ) {{
            echo '<div style="background-color: ' . esc_attr( $color ) . '; width: 100px; height: 100px;"></div>';
        }}
        """
    )


# Layout


def render_repeater(field, ctx, out, renderer):
    """Loop over rows, each row wrapped in a repeater-item div."""
    name = php_string(field.name)
    css = html_class(field.name)
    out.line(f"if ( have_rows('{name}') ) {{")
    out.line(f"echo '<div class=\"repeater-{css}\">';", 1)
    out.line(f"while ( have_rows('{name}') ) : the_row();", 1)
    out.line("echo '<div class=\"repeater-item\">';", 2)
    out.raw(
        renderer.walk(field.sub_fields, ctx, out.depth + REPEATER_CHILD_OFFSET, field.name)
    )
    out.line("echo '</div>';", 2)
    out.line("endwhile;", 1)
    out.line("echo '</div>';", 1)
    out.line("}")


def render_flexible_content(field, ctx, out, renderer):
    """Loop over rows with one branch per layout."""
    name = php_string(field.name)
    out.line(f"if ( have_rows('{name}') ) {{")
    out.line(f"echo '<div class=\"flexible-content-{html_class(field.name)}\">';", 1)
    out.line(f"while ( have_rows('{name}') ) : the_row();", 1)
    for index, layout in enumerate(field.layouts):
        condition = f"get_row_layout() == '{php_string(layout.name)}'"
        if index == 0:
            out.line(f"if ( {condition} ) {{", 2)
        else:
            out.line(f"}} elseif ( {condition} ) {{", 2)
        out.line(f"echo '<div class=\"layout-{html_class(layout.name)}\">';", 3)
        out.raw(
            renderer.walk(
                layout.sub_fields, ctx, out.depth + FLEXIBLE_CHILD_OFFSET, field.name
            )
        )
        out.line("echo '</div>';", 3)
    if field.layouts:
        out.line("}", 2)
    out.line("endwhile;", 1)
    out.line("echo '</div>';", 1)
    out.line("}")


def render_group(field, ctx, out, renderer):
    """Single-row loop over the group's sub-fields."""
    name = php_string(field.name)
    out.line(f"if ( have_rows('{name}') ) {{")
    out.line(f"echo '<div class=\"group-{html_class(field.name)}\">';", 1)
    out.line(f"while ( have_rows('{name}') ) : the_row();", 1)
    out.raw(renderer.walk(field.sub_fields, ctx, out.depth + GROUP_CHILD_OFFSET, field.name))
    out.line("endwhile;", 1)
    out.line("echo '</div>';", 1)
    out.line("}")


def render_clone(field, ctx, out, renderer):
    """Cloned fields spliced in at the clone's own depth and context."""
    out.line(f"/* Clone field: {php_comment(field.name)} */")
    parent = ctx.field_name if ctx.is_sub_field else ""
    out.raw(renderer.walk(field.sub_fields, ctx, out.depth, parent))


def render_ui_only(field, ctx, out, renderer):
    """Admin UI element with no front-end output."""
    out.line(
        f"/* {php_comment(field.type)} field: {php_comment(field.name)} "
        f"(admin UI element, no front-end output) */"
    )


def render_unsupported(field, ctx, out, renderer):
    """Best-effort escaped echo for types without a dedicated renderer."""
    out.line(f"/* Unsupported field type: {php_comment(field.type)} */")
    render_text(field, ctx, out, renderer)


PHP_RENDERERS = {
    FieldType.TEXT: render_text,
    FieldType.URL: render_url,
    FieldType.PASSWORD: render_password,
    FieldType.IMAGE: render_image,
    FieldType.FILE: render_file,
    FieldType.WYSIWYG: render_wysiwyg,
    FieldType.OEMBED: render_oembed,
    FieldType.GALLERY: render_gallery,
    FieldType.SELECT: render_select,
    FieldType.CHECKBOX: render_checkbox,
    FieldType.BUTTON_GROUP: render_button_group,
    FieldType.TRUE_FALSE: render_true_false,
    FieldType.LINK: render_link,
    FieldType.POST_OBJECT: render_post_object,
    FieldType.PAGE_LINK: render_page_link,
    FieldType.RELATIONSHIP: render_relationship,
    FieldType.TAXONOMY: render_taxonomy,
    FieldType.USER: render_user,
    FieldType.GOOGLE_MAP: render_google_map,
    FieldType.DATE_PICKER: render_date_picker,
    FieldType.DATE_TIME_PICKER: render_date_time_picker,
    FieldType.TIME_PICKER: render_time_picker,
    FieldType.COLOR_PICKER: render_color_picker,
    FieldType.REPEATER: render_repeater,
    FieldType.FLEXIBLE_CONTENT: render_flexible_content,
    FieldType.GROUP: render_group,
    FieldType.CLONE: render_clone,
    FieldType.ACCORDION: render_ui_only,
}

# Types sharing another type's renderer
PHP_RENDERER_ALIASES = {
    FieldType.TEXT: [FieldType.TEXTAREA, FieldType.NUMBER, FieldType.EMAIL],
    FieldType.SELECT: [FieldType.RADIO],
    FieldType.ACCORDION: [FieldType.TAB],
}


def register_php_renderers(registry: RendererRegistry, replace: bool = False):
    """Register every built-in renderer and the unsupported-type fallback."""
    for field_type, renderer in PHP_RENDERERS.items():
        aliases = [alias.value for alias in PHP_RENDERER_ALIASES.get(field_type, [])]
        registry.register(field_type.value, renderer, aliases, replace=replace)
    registry.set_fallback(render_unsupported)
