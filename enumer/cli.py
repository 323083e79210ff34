from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Sequence

from rich.console import Console

from . import __version__
from .codegen import get_generator, get_registry
from .codegen.core.config import ConfigError, EnumerConfig, get_config_manager, load_config
from .codegen.core.errors import GeneratorError
from .codegen.core.generator import GenerationResult, generate_code
from .codegen.core.symbols import SymbolTable
from .logging_config import get_logger, setup_logging
from .utils import load_symbol_table

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser, using the Go tool's single-dash flags."""
    parser = argparse.ArgumentParser(
        prog="enumer",
        description="Generate helper methods for Go enum constants.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "-type",
        dest="type_names",
        metavar="TYPES",
        help="comma-separated list of type names; must be set",
    )
    parser.add_argument(
        "-output",
        dest="output",
        metavar="FILE",
        help="output file name; default is <type>_enumer.go for a single type",
    )
    parser.add_argument(
        "-trimprefix",
        dest="trim_prefix",
        metavar="PREFIX",
        help="prefix to be trimmed from the name of each constant",
    )
    parser.add_argument(
        "-linecomment",
        dest="line_comment",
        action="store_true",
        default=None,
        help="use line comment text as printed text when present",
    )
    parser.add_argument(
        "-sql",
        dest="sql",
        action="store_true",
        default=None,
        help="enable SQL Scanner and Valuer interface generation",
    )
    parser.add_argument(
        "-json",
        dest="json",
        action="store_true",
        default=None,
        help="enable JSON marshaling methods",
    )
    parser.add_argument(
        "-yaml",
        dest="yaml",
        action="store_true",
        default=None,
        help="enable YAML marshaling methods",
    )
    parser.add_argument(
        "-bitmask",
        dest="bitmask",
        action="store_true",
        default=None,
        help="enable bitmask methods for flag based enums",
    )

    source_group = parser.add_mutually_exclusive_group()
    source_group.add_argument(
        "--dir",
        dest="directory",
        metavar="DIR",
        help="package directory to load (default: current directory)",
    )
    source_group.add_argument(
        "--symbols",
        metavar="FILE_OR_URL",
        help="load a JSON symbol table instead of parsing Go sources",
    )

    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="print the generated code instead of writing a file",
    )
    parser.add_argument(
        "--no-format",
        dest="format_output",
        action="store_false",
        default=None,
        help="do not run gofmt on the written file",
    )
    parser.add_argument("--verbose", action="store_true", help="debug logging")
    parser.add_argument("--version", action="version", version=f"enumer {__version__}")
    return parser


class CLIHandler:
    """Handle command-line operations for one generation run."""

    def __init__(self) -> None:
        self.console = Console(stderr=True)
        logger.debug("CLIHandler initialized")

    def run(self, args: Any) -> int:
        """Run one generation based on parsed arguments.

        Args:
            args: Parsed CLI arguments.

        Returns:
            Exit code (0 for success, 1 for failure, 2 for usage errors).
        """
        if not args.type_names and not args.config:
            build_parser().print_usage(sys.stderr)
            return 2

        try:
            config = self._build_config(args)
        except ConfigError as e:
            self.console.print(f"❌ [red]Configuration error:[/red] {e}")
            return 1

        if not config.type_names:
            build_parser().print_usage(sys.stderr)
            return 2

        for warning in get_config_manager().validate_config(config):
            self.console.print(f"⚠️  [yellow]{warning}[/yellow]")

        try:
            table = self._load_table(args, config)
        except GeneratorError as e:
            self.console.print(f"❌ [red]Failed to load package:[/red] {e}")
            logger.error("Package load failed: %s", e)
            return 1

        generator = get_generator("go", config)
        result = generate_code(generator, table)
        if not result.success:
            self.console.print(f"❌ [red]{result.error_message}[/red]")
            return 1

        for warning in result.warnings:
            self.console.print(f"⚠️  [yellow]{warning}[/yellow]")

        if args.stdout:
            sys.stdout.write(result.code)
            return 0

        return self._write(generator, result, config)

    def _build_config(self, args: Any) -> EnumerConfig:
        overrides = {
            "type_names": args.type_names,
            "output": args.output,
            "trim_prefix": args.trim_prefix,
            "line_comment": args.line_comment,
            "sql": args.sql,
            "json": args.json,
            "yaml": args.yaml,
            "bitmask": args.bitmask,
            "directory": args.directory,
            "format_output": args.format_output,
        }
        return load_config(custom_config=overrides, config_file=args.config)

    def _load_table(self, args: Any, config: EnumerConfig) -> SymbolTable:
        if args.symbols:
            logger.info("Loading symbol table from %s", args.symbols)
            return load_symbol_table(args.symbols)
        return get_registry().get_loader("go")(config.directory)

    def _write(self, generator, result: GenerationResult, config: EnumerConfig) -> int:
        path = Path(config.directory) / config.default_output_name()
        try:
            generator.write_source(result.code, path)
        except GeneratorError as e:
            self.console.print(f"❌ [red]{e}[/red]")
            return 1

        self.console.print(
            f"✅ [green]Generated {path}[/green] "
            f"({result.metadata['type_count']} type(s), "
            f"{result.metadata['element_count']} constant(s))"
        )
        return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the enumer command."""
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose)
    return CLIHandler().run(args)
