"""
Command-line interface for model generation.

Loads a component document, compiles one component and prints or writes
the generated code.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from .core.config import ConfigError, load_config
from .core.definition import DefinitionError
from .core.descriptors import ClassDescriptor, ResolvedField
from .core.errors import CompilerError
from .core.generator import generate_code
from .core.provided_types import ProvidedTypeError
from .loader import JSONLoaderError, load_component_document
from .logging_config import get_logger, setup_logging
from .registry import (
    RegistryError,
    get_generator,
    get_language_info,
    is_language_supported,
    list_supported_languages,
)

logger = get_logger(__name__)

console = Console()


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="model-generator",
        description="Compile schema components into class models and generate code",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  model-generator components.json --component Payment
  model-generator components.json -c Payment -l python -o payment.py
  model-generator --url https://example.com/components.json -c Payment --tree
  model-generator --list-languages
        """.strip(),
    )

    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="Component document (JSON)")
    input_group.add_argument("--url", help="URL to fetch the component document from")

    parser.add_argument("--component", "-c", help="Name of the component to generate")
    parser.add_argument(
        "--language", "-l", default="kotlin", help="Target language (default: kotlin)"
    )
    parser.add_argument("--output", "-o", help="Output file (default: stdout)")
    parser.add_argument("--config", help="Configuration file path (JSON)")
    parser.add_argument(
        "--provided-types", metavar="FILE", help="JSON file mapping schema types to provided types"
    )
    parser.add_argument("--package-name", "--package", help="Package/namespace name")
    parser.add_argument(
        "--no-inheritance",
        action="store_true",
        help="Keep common fields in every oneOf variant instead of the parent class",
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--tree", action="store_true", help="Show the compiled class tree"
    )
    info_group.add_argument(
        "--list-languages", action="store_true", help="List supported languages and exit"
    )
    info_group.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging and generation metadata"
    )
    info_group.add_argument("--log-file", help="Also write logs to this file")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point of the ``model-generator`` command."""
    args = create_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "WARNING", args.log_file)

    try:
        if args.list_languages:
            return _list_languages()
        return _generate(args)
    except (CLIError, RegistryError, ConfigError, ProvidedTypeError) as e:
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        return 1
    except (JSONLoaderError, FileNotFoundError) as e:
        console.print(f"[red]✗ Failed to load input:[/red] {escape(str(e))}")
        return 1
    except DefinitionError as e:
        console.print(f"[red]✗ Invalid component document:[/red] {escape(str(e))}")
        return 1
    except CompilerError as e:
        console.print(f"[red]✗ Compilation failed:[/red] {escape(str(e))}")
        return 1


def _generate(args: argparse.Namespace) -> int:
    if not (args.file or args.url):
        raise CLIError("Input source required (file or --url)")
    if not args.component:
        raise CLIError("--component is required for code generation")
    if not is_language_supported(args.language):
        raise CLIError(
            f"Unsupported language '{args.language}'. "
            f"Supported languages: {', '.join(list_supported_languages())}"
        )

    source, components = load_component_document(file_path=args.file, url=args.url)
    logger.debug("Using components of %s", source)

    component = components.get(args.component)
    if component is None:
        raise CLIError(
            f"Unknown component '{args.component}'. Available: {', '.join(components)}"
        )

    generator = get_generator(args.language, _build_config(args))

    if args.tree:
        console.print(_descriptor_tree(generator.compile(component)))

    result = generate_code(generator, component)
    if not result.success:
        console.print(f"[red]✗ {escape(result.error_message)}[/red]")
        return 1

    for warning in result.warnings:
        console.print(f"[yellow]⚠️  {escape(warning)}[/yellow]")

    if args.output:
        Path(args.output).write_text(result.code, encoding="utf-8")
        console.print(f"[green]✓[/green] Generated {escape(args.output)}")
    else:
        console.print(Syntax(result.code, generator.language_name, line_numbers=False))

    if args.verbose:
        _print_metadata(result.metadata)

    return 0


def _build_config(args: argparse.Namespace):
    """Merge language defaults, the config file and command-line overrides."""
    language = get_language_info(args.language)["name"]
    overrides: dict[str, Any] = {}
    if args.package_name:
        overrides["package_name"] = args.package_name
    if args.provided_types:
        overrides["provided_types_file"] = args.provided_types
    if args.no_inheritance:
        overrides["with_inheritance"] = False
    return load_config(language, overrides, args.config)


def _list_languages() -> int:
    """List supported languages with details."""
    table = Table(title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Naming Strategy", style="dim")
    table.add_column("Aliases", style="blue")

    for language in list_supported_languages():
        info = get_language_info(language)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(language, info["file_extension"], info["naming_strategy"], aliases)

    console.print(table)
    console.print(
        Panel(
            "[bold]Usage:[/bold] model-generator [dim]components.json[/dim] "
            "--component [cyan]NAME[/cyan] --language [cyan]LANGUAGE[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def _field_label(field: ResolvedField) -> str:
    markers = []
    if field.abstract:
        markers.append("abstract")
    if field.overridden:
        markers.append("override")
    if not field.is_required:
        markers.append("optional")
    suffix = f" [dim]({', '.join(markers)})[/dim]" if markers else ""
    return f"{escape(field.name)}: [cyan]{escape(field.resolved_type)}[/cyan]{suffix}"


def _descriptor_tree(descriptor: ClassDescriptor, tree: Tree | None = None) -> Tree:
    """Build a rich tree of a compiled descriptor."""
    if descriptor.is_union:
        label = (
            f"[bold magenta]{escape(descriptor.name)}[/bold magenta] "
            f"[dim](oneOf by '{escape(descriptor.discriminator_field_name)}')[/dim]"
        )
    else:
        label = f"[bold green]{escape(descriptor.name)}[/bold green]"

    node = tree.add(label) if tree is not None else Tree(label)

    if descriptor.is_union:
        for field in descriptor.common_fields:
            node.add(_field_label(field))
        for subclass in descriptor.subclasses:
            child = _descriptor_tree(subclass, node)
            tag = descriptor.variant_mapping.get(subclass.name)
            if tag is not None:
                child.label = f"{child.label} [yellow]= \"{escape(tag)}\"[/yellow]"
    else:
        for field in descriptor.fields:
            node.add(_field_label(field))

    return node


def _print_metadata(metadata: dict[str, Any]) -> None:
    table = Table(title="⚙️  Generation", box=box.SIMPLE, show_header=False)
    table.add_column("Key", style="bold")
    table.add_column("Value", style="green")
    for key, value in metadata.items():
        table.add_row(key, str(value))
    console.print(table)


if __name__ == "__main__":
    sys.exit(main())
