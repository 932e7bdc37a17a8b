"""Command-line options parser for depthpress.

Usage:
- build_parser() -> argparse.ArgumentParser
- parse_args(argv, parser=None) -> ParsedOptions

Subcommands:
- scan ROOT...             print depth photos found under the roots
- compress ROOT...         recompress every depth photo found
- list-compressed ROOT...  print earlier outputs, newest first
- clean ROOT...            delete earlier outputs

Defaults come from the environment (optionally a .env file):
- DEPTHPRESS_MIN_SIZE_MB: candidate size threshold in MB (default 5).
- DEPTHPRESS_VERBOSE: enable debug logging (1/0, true/false, yes/no, on/off).
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from image_common.env import env_flag, env_int

from .constants import MIN_FILE_SIZE_MB

_DOTENV_FILE = Path(".env")

COMMANDS = ("scan", "compress", "list-compressed", "clean")


@dataclass
class ParsedOptions:
    """Structured result of parsing command-line arguments.

    Attributes:
        command: Selected subcommand name.
        roots: Directories (or single files) to work on.
        min_size_mb: Only JPEGs strictly larger than this are candidates.
        verbose: Whether debug logging was requested.
    """

    command: str
    roots: list[Path] = field(default_factory=list)
    min_size_mb: int = MIN_FILE_SIZE_MB
    verbose: bool = False


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("expected an integer") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("must not be negative")
    return parsed


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--min-size-mb",
        dest="min_size_mb",
        type=_positive_int,
        default=None,
        help=f"only consider JPEGs larger than this many MB (default {MIN_FILE_SIZE_MB})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        action="store_true",
        default=None,
        help="log every processing step",
    )


def _build_common_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    _add_common_options(parser)
    return parser


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser with one subcommand per action."""

    common_parser = _build_common_parser()
    parser = argparse.ArgumentParser(
        prog="depthpress",
        description="find depth-effect photos and recompress them",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="command", required=True)

    descriptions = {
        "scan": "list photos that carry a depth map",
        "compress": "recompress photos that carry a depth map",
        "list-compressed": "list previously recompressed photos",
        "clean": "delete previously recompressed photos",
    }
    for name in COMMANDS:
        command_parser = subparsers.add_parser(
            name,
            help=descriptions[name],
            description=descriptions[name],
            parents=[common_parser],
        )
        command_parser.add_argument(
            "roots",
            nargs="+",
            type=Path,
            metavar="ROOT",
            help="directory to search (recursively) or a single file",
        )
    return parser


def parse_args(
    argv: list[str], *, parser: argparse.ArgumentParser | None = None
) -> ParsedOptions:
    """Parse argv into a ParsedOptions object."""

    load_dotenv(_DOTENV_FILE)  # silently ignore if there is none, assume defaults.

    if parser is None:
        parser = build_parser()

    ns = parser.parse_args(argv)

    try:
        min_size_mb = ns.min_size_mb
        if min_size_mb is None:
            min_size_mb = env_int("DEPTHPRESS_MIN_SIZE_MB", MIN_FILE_SIZE_MB)
        verbose = ns.verbose
        if verbose is None:
            verbose = env_flag("DEPTHPRESS_VERBOSE")
    except ValueError as exc:
        parser.error(str(exc))

    return ParsedOptions(
        command=ns.command,
        roots=list(ns.roots),
        min_size_mb=min_size_mb,
        verbose=bool(verbose),
    )
