"""
Command-line interface for bean generation.

``beanerator generate`` runs the generation driver over Python modules and
JSON description documents; ``beanerator languages`` lists the targets.
"""

import argparse
import sys
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .codegen import (
    CollectingDiagnostics,
    ConsoleWriter,
    FileWriter,
    GenerationDriver,
    GenerationResult,
    get_language_info,
    get_registry,
    list_supported_languages,
    load_config,
)
from .codegen.core.config import ConfigError, get_config_manager
from .codegen.core.generator import CodeGenerator
from .codegen.registry import RegistryError
from .codegen.sources import class_source
from .descriptions import DescriptionLoadError, is_description_location, load_description_source
from .discovery import DiscoveryError, discover_modules
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


console = Console()

# Lexers for printing generated code
SYNTAX_LEXERS = {"python": "python", "java": "java"}


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="beanerator",
        description="Generate mutable bean companions for immutable records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  beanerator generate beanerator.demo.coffee beanerator.demo.order
  beanerator generate records.json --target java -o build/generated
  beanerator generate https://example.com/records.json -t py
  beanerator languages
        """.strip(),
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", metavar="FILE", help="Also write logs to FILE")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    generate = subparsers.add_parser(
        "generate",
        help="Generate beans",
        description="Generate beans for marked records",
    )
    generate.add_argument(
        "sources",
        nargs="+",
        metavar="SOURCE",
        help="Importable module name, .json description file or URL",
    )
    generate.add_argument(
        "--target",
        "-t",
        default="python",
        help="Target language (default: python)",
    )
    generate.add_argument(
        "--output",
        "-o",
        metavar="DIR",
        help="Root directory for generated files (default: print to stdout)",
    )
    generate.add_argument(
        "--config", metavar="FILE", help="JSON configuration file for generation"
    )
    generate.add_argument(
        "--workers",
        type=int,
        metavar="N",
        help="Number of beans generated in parallel",
    )
    generate.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't add comments to generated code",
    )
    generate.set_defaults(func=_handle_generate)

    languages = subparsers.add_parser("languages", help="List supported target languages")
    languages.set_defaults(func=_handle_languages)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point of the ``beanerator`` console script."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_file)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        return 1


# Commands


def _handle_generate(args: argparse.Namespace) -> int:
    generator = _create_generator(args)
    sources = _load_sources(args.sources)

    output_dir = args.output or generator.config.output_dir
    if output_dir:
        writer = FileWriter(output_dir, file_name=generator.file_name)
    else:
        lexer = SYNTAX_LEXERS.get(generator.language_name, "text")
        writer = ConsoleWriter(console, lexer=lexer)

    diagnostics = CollectingDiagnostics()
    driver = GenerationDriver(generator, writer, diagnostics, max_workers=args.workers)

    results: List[GenerationResult] = []
    for source in sources:
        results.extend(driver.run(source))

    _print_summary(results, output_dir)
    return 1 if diagnostics.errors else 0


def _handle_languages(args: argparse.Namespace) -> int:
    table = Table(title="Supported Languages", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for language in list_supported_languages():
        info = get_language_info(language)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(info["name"], info["file_extension"], info["class"], aliases)

    console.print(table)
    return 0


# Helpers


def _create_generator(args: argparse.Namespace) -> CodeGenerator:
    """Build the target generator from the config file and CLI overrides."""
    overrides = {}
    if args.no_comments:
        overrides["add_comments"] = False
    if args.workers is not None:
        if args.workers < 1:
            raise CLIError(f"--workers must be at least 1, got {args.workers}")
        overrides["max_workers"] = args.workers

    try:
        language = get_registry().resolve(args.target)
        config = load_config(language, custom_config=overrides, config_file=args.config)
        generator = get_registry().create_generator(language, config)
    except (RegistryError, ConfigError) as e:
        raise CLIError(str(e)) from e

    for warning in get_config_manager().validate_config(config):
        logger.warning(warning)
    return generator


def _load_sources(locations: List[str]) -> list:
    """Turn SOURCE arguments into host sources, modules first batched together."""
    module_names = []
    sources = []
    try:
        for location in locations:
            if is_description_location(location):
                sources.append(load_description_source(location))
            else:
                module_names.append(location)

        if module_names:
            sources.insert(0, class_source(discover_modules(module_names)))
    except (DescriptionLoadError, DiscoveryError) as e:
        raise CLIError(str(e)) from e
    return sources


def _print_summary(results: List[GenerationResult], output_dir: Optional[str]):
    if not results:
        console.print("[yellow]No marked records found[/yellow]")
        return

    table = Table(title="Generation Summary", box=box.SIMPLE, header_style="bold cyan")
    table.add_column("Record", style="bold")
    table.add_column("Bean")
    table.add_column("Status")

    for result in results:
        bean = result.metadata.get("class_name", "")
        if result.success:
            table.add_row(escape(result.host or ""), bean, "[green]✓ generated[/green]")
        else:
            stage = result.metadata.get("stage", "")
            table.add_row(escape(result.host or ""), bean, f"[red]✗ {stage} failed[/red]")

    console.print()
    console.print(table)

    failed = [r for r in results if not r.success]
    for result in failed:
        console.print(f"[red]✗[/red] {escape(result.error_message)}")

    succeeded = len(results) - len(failed)
    location = f" to [cyan]{escape(str(output_dir))}[/cyan]" if output_dir else ""
    console.print(f"[green]✓[/green] {succeeded} of {len(results)} bean(s) generated{location}")


if __name__ == "__main__":
    sys.exit(main())
