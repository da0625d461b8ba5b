"""Command line entry point: generate data from a pattern or validate one."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .data_generator import DataGenerator, GenerationMode
from .errors import ExportFailedError, GenerationFailedError, InvalidRegexError
from .exporters import EXPORT_FORMATS, exporter_for
from .regex_engine import RegexEngine

_VERSION = "0.1.0"

_MODES = {
    "random": GenerationMode.RANDOM,
    "sequential": GenerationMode.SEQUENTIAL,
    "reverse": GenerationMode.REVERSE_SEQUENTIAL,
}


def _non_negative(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"{text!r} must not be negative")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="regex-data-gen", description="Generate random data from regex patterns"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_VERSION}")
    commands = parser.add_subparsers(dest="command", required=True)

    generate = commands.add_parser("generate", help="generate data into a file")
    generate.add_argument("-p", "--pattern", required=True, help="Regex pattern to generate data from")
    generate.add_argument(
        "-n", "--count", type=_non_negative, default=10, help="Number of data items to generate"
    )
    generate.add_argument("-f", "--format", choices=EXPORT_FORMATS, default="csv", help="Output format")
    generate.add_argument("-o", "--output", type=Path, required=True, help="Output file path")
    generate.add_argument(
        "-s", "--seed", type=_non_negative, default=None, help="Random seed for reproducible generation"
    )
    generate.add_argument("-m", "--mode", choices=tuple(_MODES), default="random", help="Generation mode")
    generate.set_defaults(handler=_generate)

    validate = commands.add_parser("validate", help="check that a pattern compiles")
    validate.add_argument("pattern", help="Regex pattern to validate")
    validate.set_defaults(handler=_validate)
    return parser


def _fail(message: str) -> int:
    print(message, file=sys.stderr)
    return 1


def _generate(args: argparse.Namespace) -> int:
    parent = args.output.parent
    if not parent.exists():
        return _fail(f"Error: Output directory '{parent}' does not exist")

    print(f"🔄 Generating {args.count} items from pattern: '{args.pattern}'")

    try:
        generator = DataGenerator(args.pattern, seed=args.seed)
    except InvalidRegexError as exc:
        return _fail(f"❌ Failed to create generator: {exc}")
    if args.seed is not None:
        print(f"ℹ️  Using seed: {args.seed} for reproducible generation")

    try:
        data = generator.generate(args.count, _MODES[args.mode])
    except GenerationFailedError as exc:
        return _fail(f"❌ Data generation failed: {exc}")
    print(f"✅ Successfully generated {len(data)} items")

    output_path = str(args.output)
    print(f"💾 Exporting to {args.format.upper()} format...")
    try:
        exporter_for(args.format).export(data, output_path)
    except ExportFailedError as exc:
        return _fail(f"❌ Export failed: {exc}")
    print(f"🎉 Successfully exported {args.count} items to '{output_path}'")
    return 0


def _validate(args: argparse.Namespace) -> int:
    try:
        RegexEngine.validate_pattern(args.pattern)
    except InvalidRegexError as exc:
        print(f"✗ Pattern '{args.pattern}' is invalid: {exc}")
        return 1
    print(f"✓ Pattern '{args.pattern}' is valid")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the command line interface and return its exit status."""
    args = _build_parser().parse_args(argv)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())