"""
Snippet assembly: turns selected field groups into one PHP template document.

For every requested group the assembler resolves the group from the schema
provider, rewrites all keys through a KeyAllocator, walks the field tree and
appends the result under a fixed document header.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .builder import CodeBuilder
from .config import GeneratorConfig
from .keys import KeyAllocator
from .provider import SchemaProvider
from .schema import Field
from .templates import TemplateEngine, create_template_engine
from ..php.renderers import FieldRenderer
from ..registry import RendererRegistry
from ...logging_config import get_logger

logger = get_logger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "php" / "templates"


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


def rewrite_keys(fields: List[Field], allocator: KeyAllocator) -> int:
    """
    Rewrite every key in a field tree in one pre-order pass.

    A field's key is allocated before its sub_fields, then its layouts (each
    layout key before that layout's sub_fields).

    Returns:
        Number of keys that had to be re-minted
    """
    rewritten = 0
    for field in fields:
        original = field.key
        field.key = allocator.allocate(field.key, "field")
        rewritten += field.key != original

        rewritten += rewrite_keys(field.sub_fields, allocator)

        for layout in field.layouts:
            original = layout.key
            layout.key = allocator.allocate(layout.key, "layout")
            rewritten += layout.key != original
            rewritten += rewrite_keys(layout.sub_fields, allocator)
    return rewritten


class SnippetAssembler:
    """Builds the template document for a list of field group keys."""

    def __init__(
        self,
        provider: SchemaProvider,
        config: Optional[GeneratorConfig] = None,
        allocator: Optional[KeyAllocator] = None,
        registry: Optional[RendererRegistry] = None,
    ):
        """
        Initialize assembler.

        Args:
            provider: Source of field groups
            config: Generator settings
            allocator: Shared allocator; a fresh one is used per run if omitted
            registry: Renderer registry; the global one if omitted
        """
        self.provider = provider
        self.config = config or GeneratorConfig()
        self.allocator = allocator
        self.renderer = FieldRenderer(self.config, registry)
        self._template_engine: Optional[TemplateEngine] = None

        # Per-run bookkeeping
        self.warnings: List[str] = []
        self.stats: Dict[str, Any] = {}
        self.last_allocator: Optional[KeyAllocator] = None

    @property
    def template_engine(self) -> TemplateEngine:
        if self._template_engine is None:
            self._template_engine = create_template_engine(TEMPLATE_DIR)
        return self._template_engine

    def generate(self, group_keys: Iterable[str]) -> str:
        """
        Generate template code for the given groups, in request order.

        Unknown group keys are skipped. With no resolvable group the result
        is the header alone.
        """
        allocator = self.allocator or KeyAllocator()
        self.last_allocator = allocator
        self.warnings = []
        self.stats = {
            "groups_requested": 0,
            "groups_rendered": 0,
            "fields_rendered": 0,
            "keys_rewritten": 0,
            "unsupported_types": [],
        }

        out = CodeBuilder(self.config.indent_unit)
        out.raw(self._render_header())

        for group_key in group_keys:
            self.stats["groups_requested"] += 1
            block = self._render_group(group_key, allocator)
            if block is not None:
                out.raw(block)

        logger.info(
            "Generated snippets for %d of %d field group(s)",
            self.stats["groups_rendered"],
            self.stats["groups_requested"],
        )
        return self.format_code(out.build())

    def generate_all(self) -> str:
        """Generate template code for every group the provider knows."""
        return self.generate([g.key for g in self.provider.list_field_groups()])

    def _render_header(self) -> str:
        return self.template_engine.render_template(
            "header.php.j2",
            {
                "title": self.config.header_title,
                "generated_at": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            },
        )

    def _render_group(self, group_key: str, allocator: KeyAllocator) -> Optional[str]:
        group = self.provider.get_field_group(group_key)
        if group is None:
            logger.warning("Field group not found, skipping: %s", group_key)
            self.warnings.append(f"Field group '{group_key}' not found; skipped")
            return None

        fields = self.provider.get_fields(group_key) or []

        original_key = group.key
        group.key = allocator.allocate(group.key, "group")
        rewritten = (group.key != original_key) + rewrite_keys(fields, allocator)
        if rewritten:
            logger.debug("Re-minted %d key(s) in group %s", rewritten, original_key)

        group.fields = fields
        self._collect_warnings(group.title, group.iter_fields())

        body = self.renderer.walker.render_all(fields, group.key, 0)

        self.stats["groups_rendered"] += 1
        self.stats["fields_rendered"] += sum(1 for _ in group.iter_fields())
        self.stats["keys_rewritten"] += rewritten

        return self.template_engine.render_template(
            "group.php.j2", {"title": group.title, "key": group.key, "body": body}
        )

    def _collect_warnings(self, group_title: str, fields: Iterable[Field]):
        registry = self.renderer.registry
        for field in fields:
            if not registry.is_supported(field.type):
                logger.warning(
                    "Unsupported field type %r for field %s in %s",
                    field.type,
                    field.name,
                    group_title,
                )
                self.warnings.append(
                    f"Unsupported field type '{field.type}' for field "
                    f"'{field.name}' in '{group_title}'; generic output used"
                )
                if field.type not in self.stats["unsupported_types"]:
                    self.stats["unsupported_types"].append(field.type)

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Strips trailing whitespace and allows at most 2 consecutive blank lines.
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        code: str,
        warnings: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_snippets(
    provider: SchemaProvider,
    group_keys: Optional[Iterable[str]] = None,
    config: Optional[GeneratorConfig] = None,
    allocator: Optional[KeyAllocator] = None,
) -> GenerationResult:
    """
    Generate template code with error handling.

    Args:
        provider: Source of field groups
        group_keys: Groups to render; every known group if None
        config: Generator settings
        allocator: Shared key allocator (fresh per run if omitted)

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        assembler = SnippetAssembler(provider, config, allocator)
        if group_keys is None:
            code = assembler.generate_all()
        else:
            code = assembler.generate(list(group_keys))

        metadata = dict(assembler.stats)
        metadata["language"] = "php"
        metadata["file_extension"] = ".php"

        return GenerationResult(code, assembler.warnings, metadata)

    except Exception as e:
        logger.exception("Snippet generation failed")
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)
