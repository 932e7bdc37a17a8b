"""depthpress package entrypoint.

main() parses command-line options using depthpress.options and runs the
selected subcommand via depthpress.commands. The core operations are
re-exported here for library use.
"""

from __future__ import annotations

import logging
import sys

from PIL import Image

from .constants import MAX_IMAGE_PIXELS
from .detector import detect
from .merger import merge_and_verify
from .options import parse_args
from .recompress import decode, recompress

__all__ = ["decode", "detect", "main", "merge_and_verify", "recompress"]

Image.MAX_IMAGE_PIXELS = MAX_IMAGE_PIXELS


def main() -> None:
    """CLI entrypoint: parse argv, run the subcommand, print reported paths."""

    parsed = parse_args(sys.argv[1:])
    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    from . import commands as commands_module

    try:
        paths = commands_module.run(parsed)
    except commands_module.StoreUnavailable as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    for path in paths:
        print(str(path))
