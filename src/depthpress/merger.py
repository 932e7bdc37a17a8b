"""Copying allowlisted EXIF fields onto a recompressed file and verifying
the result."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from .allowlist import TAG_ALLOWLIST, VERIFIED_FIELDS
from .exif_handle import ExifHandle, MetadataHandle
from .models import MergeReport, VerificationResult

logger = logging.getLogger(__name__)


def copy_fields(
    source: MetadataHandle,
    target: MetadataHandle,
    fields: Sequence[str] = TAG_ALLOWLIST,
) -> tuple[int, int]:
    """Copy each non-empty source field verbatim onto the target.

    Fields that are absent or empty on the source are skipped and left
    untouched on the target. Nothing is persisted; call ``commit`` on the
    target afterwards.

    Returns:
        (copied, skipped) counts.

    Raises:
        MetadataWriteFailed: a value could not be set on the target.
    """
    copied = 0
    skipped = 0
    for name in fields:
        value = source.get_field(name)
        if not value:
            skipped += 1
            continue
        target.set_field(name, value)
        copied += 1
        logger.debug("copied EXIF field %s = %r", name, value)
    return copied, skipped


def verify_fields(
    source: MetadataHandle,
    target: MetadataHandle,
    fields: Sequence[str] = VERIFIED_FIELDS,
) -> VerificationResult:
    source_values = {name: source.get_field(name) for name in fields}
    target_values = {name: target.get_field(name) for name in fields}
    result = VerificationResult(
        verified=source_values == target_values,
        source_values=source_values,
        target_values=target_values,
    )

    logger.debug("EXIF verification:")
    for name in fields:
        logger.debug(
            "  %s: original=%r processed=%r",
            name,
            source_values[name],
            target_values[name],
        )
    for name in result.mismatched_fields:
        logger.warning("  - %s was not preserved", name)
    return result


def merge_metadata(source: MetadataHandle, target: MetadataHandle) -> MergeReport:
    """Copy the allowlist onto ``target``, commit once, then verify.

    Verification re-reads both sides through fresh handles. A failed
    verification is reported, never undone.

    Raises:
        MetadataReadFailed: a handle could not be (re)opened.
        MetadataWriteFailed: setting a field or the commit failed.
    """
    copied, skipped = copy_fields(source, target)
    target.commit()
    logger.debug(
        "EXIF copy complete: %d fields copied, %d empty fields skipped",
        copied,
        skipped,
    )

    verification = verify_fields(source.reopen(), target.reopen())
    return MergeReport(copied=copied, skipped=skipped, verification=verification)


def merge_and_verify(source: MetadataHandle, target: MetadataHandle) -> bool:
    return merge_metadata(source, target).verification.verified


def merge_files(source_path: Path, target_path: Path) -> MergeReport:
    return merge_metadata(ExifHandle(source_path), ExifHandle(target_path))
