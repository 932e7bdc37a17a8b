"""Implementations of the depthpress subcommands."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path

from image_common.files import format_file_size

from .models import OutcomeStatus
from .options import ParsedOptions
from .pipeline import process_batch
from .scanner import (
    clear_compressed_files,
    find_candidates,
    find_compressed_files,
    scan_for_depth_images,
)


class StoreUnavailable(Exception):
    """A requested root cannot be accessed; nothing was started."""


def run(parsed: ParsedOptions) -> list[Path]:
    """Run the selected subcommand and return the paths it reports.

    Raises:
        StoreUnavailable: a root does not exist or is not readable.
    """
    _check_roots(parsed.roots)

    if parsed.command == "list-compressed":
        return find_compressed_files(parsed.roots)
    if parsed.command == "clean":
        deleted = clear_compressed_files(parsed.roots)
        print(f"Deleted {deleted} compressed photos", file=sys.stderr)
        return []

    candidates = find_candidates(parsed.roots, min_size_mb=parsed.min_size_mb)
    photos = scan_for_depth_images(candidates)
    if parsed.command == "scan":
        if not photos:
            print("No depth photos found", file=sys.stderr)
        return [asset.path for asset in photos]

    if not photos:
        print("No depth photos found", file=sys.stderr)
        return []
    summary = process_batch(photos)
    for result in summary.results:
        if result.status is OutcomeStatus.FAILED:
            print(f"failed: {result.asset.path}: {result.error}", file=sys.stderr)
        elif result.status is OutcomeStatus.DEGRADED:
            print(
                f"warning: {result.asset.path} compressed without metadata: {result.error}",
                file=sys.stderr,
            )
    _emit_summary(
        summary.succeeded,
        summary.degraded,
        summary.failed,
        summary.unverified,
        summary.saved_bytes,
    )
    return [
        result.outcome.output_path
        for result in summary.results
        if result.outcome is not None
    ]


def _check_roots(roots: Sequence[Path]) -> None:
    for root in roots:
        if not root.exists():
            raise StoreUnavailable(f"{root} does not exist")
        if root.is_dir():
            try:
                next(root.iterdir(), None)
            except OSError as exc:
                raise StoreUnavailable(f"cannot read {root}: {exc}") from exc


def _emit_summary(
    succeeded: int, degraded: int, failed: int, unverified: int, saved_bytes: int
) -> None:
    print(
        f"Compressed {succeeded + degraded} photos "
        f"({succeeded} with metadata, {degraded} without, {failed} failed, "
        f"{unverified} unverified), saved {format_file_size(saved_bytes)}",
        file=sys.stderr,
    )
