"""
Command-line handlers for snippet generation, schema inspection and AI
field group generation.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.syntax import Syntax
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from .ai import ACFAIClient
from .codegen import (
    GeneratorConfig,
    InMemorySchemaProvider,
    SchemaValidationError,
    ConfigError,
    generate_snippets,
    get_registry,
    load_config,
    validate_field_groups,
)
from .codegen.core.schema import FieldType, category_of
from .config import AISettings
from .logging_config import get_logger
from .utils import JSONDocument, JSONLoaderError, fetch_json, load_documents

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Documents go to stdout; status, warnings and errors to stderr
console = Console()
err_console = Console(stderr=True)


def _add_input_args(parser: argparse.ArgumentParser, source_help: str):
    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("source", nargs="?", help=source_help)
    input_group.add_argument("--url", help="URL to fetch ACF JSON from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read ACF JSON from standard input"
    )


def create_snippets_subparser(subparsers, parents) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "snippets",
        parents=parents,
        help="Generate PHP template snippets from field groups",
        description="Render front-end PHP for ACF field groups",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  acf-generator snippets group_hero.json
  acf-generator snippets acf-json/ --group group_hero --group group_team -o snippets.php
  acf-generator snippets --stdin --indent-size 2 < export.json
        """.strip(),
    )

    _add_input_args(parser, "ACF JSON export file or acf-json directory")

    parser.add_argument(
        "--group",
        "-g",
        action="append",
        dest="groups",
        metavar="KEY",
        help="Field group key to render (repeatable, in order; default: all)",
    )
    parser.add_argument("--output", "-o", help="Output file (default: stdout)")
    parser.add_argument("--config", help="Configuration file path (JSON)")

    style_group = parser.add_argument_group("output style")
    style_group.add_argument("--indent-size", type=int, help="Spaces per indent level")
    style_group.add_argument(
        "--use-tabs", action="store_true", help="Indent with tabs instead of spaces"
    )
    style_group.add_argument("--text-domain", help="Text domain for translated strings")
    style_group.add_argument("--image-size", help="Image size for image fields")

    parser.set_defaults(func=handle_snippets_command)
    return parser


def create_groups_subparser(subparsers, parents) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "groups", parents=parents, help="List field groups in an export"
    )
    _add_input_args(parser, "ACF JSON export file or acf-json directory")
    parser.set_defaults(func=handle_groups_command)
    return parser


def create_validate_subparser(subparsers, parents) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "validate", parents=parents, help="Check field group JSON structure"
    )
    _add_input_args(parser, "ACF JSON export file or acf-json directory")
    parser.set_defaults(func=handle_validate_command)
    return parser


def create_ai_subparser(subparsers, parents) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "ai",
        parents=parents,
        help="Generate field group JSON from a prompt",
        description="Ask an AI chat-completion API for ACF field group JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  acf-generator ai "Team page with a repeater of members" --save team.json
  acf-generator ai "Landing page hero" --snippets
        """.strip(),
    )
    parser.add_argument("prompt", help="Description of the field groups to create")
    parser.add_argument("--save", metavar="FILE", help="Write the JSON export to FILE")
    parser.add_argument("--model", help="Model name (default: ACF_AI_MODEL or gpt-3.5-turbo)")
    parser.add_argument("--api-key", help="API key (default: ACF_AI_API_KEY)")
    parser.add_argument("--endpoint", help="Chat-completion endpoint URL")
    parser.add_argument(
        "--snippets",
        action="store_true",
        help="Print template snippets for the generated groups instead of the JSON",
    )
    parser.set_defaults(func=handle_ai_command)
    return parser


def create_types_subparser(subparsers, parents) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "types", parents=parents, help="List supported field types"
    )
    parser.set_defaults(func=handle_types_command)
    return parser


# Command handlers


def handle_snippets_command(args: argparse.Namespace) -> int:
    """Generate snippets for the selected groups."""
    try:
        provider = _load_provider(args)
        config = _build_config(args)
        return _generate_and_output(provider, args.groups, config, args)
    except CLIError as e:
        err_console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def handle_groups_command(args: argparse.Namespace) -> int:
    """Show the field groups of a source as a table."""
    try:
        provider = _load_provider(args)
    except CLIError as e:
        err_console.print(f"[red]✗ Error:[/red] {e}")
        return 1

    groups = provider.list_field_groups()
    if not groups:
        console.print("[yellow]⚠️ No field groups found[/yellow]")
        return 0

    table = Table(title="📋 Field Groups", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Key", style="bold green", no_wrap=True)
    table.add_column("Title", style="cyan")
    table.add_column("Fields", justify="right")
    table.add_column("Nested", justify="right", style="dim")

    for group in groups:
        total = sum(1 for _ in group.iter_fields())
        table.add_row(group.key, group.title, str(len(group.fields)), str(total))

    console.print()
    console.print(table)
    return 0


def handle_validate_command(args: argparse.Namespace) -> int:
    """Validate field group JSON; exit 1 when any document has problems."""
    try:
        documents = _load_documents(args)
    except CLIError as e:
        err_console.print(f"[red]✗ Error:[/red] {e}")
        return 1

    failed = 0
    for document in documents:
        if not document.ok:
            failed += 1
            console.print(f"[red]✗[/red] {document.source}")
            console.print(f"  [red]•[/red] {document.error}")
            continue

        problems = validate_field_groups(document.data)
        if problems:
            failed += 1
            console.print(f"[red]✗[/red] {document.source}")
            for problem in problems:
                console.print(f"  [red]•[/red] {problem}")
        else:
            count = len(InMemorySchemaProvider.from_json_data(document.data))
            console.print(f"[green]✓[/green] {document.source} ({count} field group(s))")

    return 1 if failed else 0


def handle_ai_command(args: argparse.Namespace) -> int:
    """Generate field groups with the AI client."""
    try:
        settings = AISettings.from_env().with_overrides(
            api_key=args.api_key, model=args.model, endpoint=args.endpoint
        )
    except ValueError as e:
        err_console.print(f"[red]✗ Error:[/red] Invalid AI settings: {e}")
        return 1

    client = ACFAIClient(settings)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=err_console,
        transient=True,
    ) as progress:
        task = progress.add_task("[cyan]Generating field groups...", total=None)
        result = client.generate(args.prompt)
        progress.remove_task(task)

    if not result.success:
        err_console.print(f"[red]✗ Generation failed:[/red] {result.message}")
        for problem in result.problems:
            err_console.print(f"  [red]•[/red] {problem}")
        if result.raw_response:
            err_console.print(
                Panel(result.raw_response, title="Raw response", border_style="red")
            )
        return 1

    pretty = json.dumps(result.data, indent=2, ensure_ascii=False)

    if args.save:
        try:
            Path(args.save).write_text(pretty + "\n", encoding="utf-8")
        except OSError as e:
            err_console.print(f"[red]✗ Failed to write to {args.save}:[/red] {e}")
            return 1
        err_console.print(f"[green]✓[/green] Field groups saved to [cyan]{args.save}[/cyan]")

    if args.snippets:
        provider = InMemorySchemaProvider.from_json_data(result.data)
        return _generate_and_output(provider, None, GeneratorConfig(), args)

    _emit(pretty, "json")
    return 0


def handle_types_command(args: argparse.Namespace) -> int:
    """List field types with a dedicated renderer."""
    registry = get_registry()

    table = Table(
        title="📋 Supported Field Types", box=box.ROUNDED, title_style="bold cyan"
    )
    table.add_column("Type", style="bold green", no_wrap=True)
    table.add_column("Category", style="cyan")
    table.add_column("Output", style="dim")
    table.add_column("Same as", style="dim")

    for field_type in FieldType:
        info = registry.get_type_info(field_type.value)
        shared = info["name"] if info["name"] != field_type.value else ""
        table.add_row(
            field_type.value, category_of(field_type), info["description"], shared
        )

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "Other types are rendered as an escaped paragraph with an\n"
            "[bold]Unsupported field type[/bold] comment.",
            title="💡 Unknown types",
            border_style="blue",
        )
    )
    return 0


# Helpers


def _emit(text: str, lexer: str):
    """Write a generated document to stdout, highlighted only on a terminal."""
    if sys.stdout.isatty():
        console.print(Syntax(text, lexer, theme="monokai"))
    else:
        sys.stdout.write(text if text.endswith("\n") else text + "\n")


def _read_stdin() -> Any:
    try:
        return json.load(sys.stdin)
    except json.JSONDecodeError as e:
        raise CLIError(f"Invalid JSON input: {e}") from e


def _load_provider(args: argparse.Namespace) -> InMemorySchemaProvider:
    """Build a schema provider from the source, --url or --stdin."""
    try:
        if args.source:
            return InMemorySchemaProvider.from_path(args.source)
        elif args.url:
            return InMemorySchemaProvider.from_json_data(fetch_json(args.url).data)
        elif args.stdin:
            return InMemorySchemaProvider.from_json_data(_read_stdin())
        else:
            raise CLIError("Input source required (file, directory, --url, or --stdin)")
    except (JSONLoaderError, FileNotFoundError) as e:
        raise CLIError(f"Failed to load input: {e}") from e
    except SchemaValidationError as e:
        raise CLIError(str(e)) from e


def _load_documents(args: argparse.Namespace) -> List[JSONDocument]:
    """Decoded documents, one per file for a directory."""
    try:
        if args.source:
            return load_documents(args.source)
        elif args.url:
            return [fetch_json(args.url)]
        elif args.stdin:
            return [JSONDocument("<stdin>", _read_stdin())]
        else:
            raise CLIError("Input source required (file, directory, --url, or --stdin)")
    except (JSONLoaderError, FileNotFoundError) as e:
        raise CLIError(f"Failed to load input: {e}") from e


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from CLI arguments."""
    config_dict = {
        "indent_size": args.indent_size,
        "text_domain": args.text_domain,
        "image_size": args.image_size,
        "output_file": args.output,
    }
    if args.use_tabs:
        config_dict["use_tabs"] = True

    try:
        return load_config(custom_config=config_dict, config_file=args.config)
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e


def _generate_and_output(
    provider: InMemorySchemaProvider,
    group_keys: Optional[list],
    config: GeneratorConfig,
    args: argparse.Namespace,
) -> int:
    """Generate snippets and handle output with rich formatting."""
    result = generate_snippets(provider, group_keys, config)

    if not result.success:
        err_console.print(f"[red]✗ Snippet generation failed:[/red] {result.error_message}")
        if result.exception:
            err_console.print(f"[dim]Details: {result.exception}[/dim]")
        return 1

    output_file = config.output_file
    if output_file:
        output_path = Path(output_file)
        try:
            output_path.write_text(result.code, encoding="utf-8")
        except OSError as e:
            err_console.print(f"[red]✗ Failed to write to {output_path}:[/red] {e}")
            return 1
        err_console.print(
            f"[green]✓[/green] Template snippets saved to [cyan]{output_path}[/cyan]"
        )
    else:
        _emit(result.code, "php")

    if getattr(args, "verbose", False) and result.metadata:
        metadata_table = Table(
            title="📊 Generation Metadata",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )
        metadata_table.add_column("Property", style="bold")
        metadata_table.add_column("Value", style="green")

        for key, value in result.metadata.items():
            metadata_table.add_row(key.replace("_", " ").title(), str(value))

        err_console.print()
        err_console.print(metadata_table)

    if result.warnings:
        err_console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            err_console.print(f"  [yellow]•[/yellow] {warning}")
        err_console.print()

    return 0
