"""
Template engine wrapper for code generation.

Renders the Jinja2 templates that frame the generated PHP (document
header and per-group banner).
"""

from typing import Dict, Any
from pathlib import Path

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError as JinjaTemplateError,
    select_autoescape,
)

from .php import php_comment


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Path):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files

        Raises:
            TemplateError: If the directory does not exist
        """
        self.template_dir = Path(template_dir)
        if not self.template_dir.is_dir():
            raise TemplateError(f"Template directory not found: {self.template_dir}")

        self._env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml"], default_for_string=False),
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self._env.filters["php_comment"] = php_comment

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(
                f"Failed to render template {template_name}: {e}"
            ) from e

    def template_exists(self, template_name: str) -> bool:
        return template_name in self._env.list_templates()


def create_template_engine(template_dir: Path) -> TemplateEngine:
    """Create a template engine backed by a template directory."""
    return TemplateEngine(template_dir)
