"""Per-image detect/recompress/merge pipeline and the sequential batch runner.

A single image moves through
``decoded -> recompressed -> merged (verified or not)`` or, when the
metadata merge fails, ``decoded -> recompressed -> written without
metadata``. Failures stay local to the image; the batch always continues.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from image_common.files import format_file_size

from .constants import JPEG_QUALITY
from .errors import DecodeFailed, EncodeFailed, MetadataReadFailed, MetadataWriteFailed
from .merger import merge_files
from .metadata import describe_metadata, parse_metadata
from .models import (
    BatchSummary,
    CompressionOutcome,
    ImageAsset,
    ImageResult,
    OutcomeStatus,
    VerificationResult,
)
from .naming import output_path_for
from .recompress import decode, recompress
from .states import Error, Processing, ProcessProgress, ProgressCallback, Success, reporter

logger = logging.getLogger(__name__)


def process_image(
    asset: ImageAsset,
    *,
    quality: int = JPEG_QUALITY,
    output_path: Path | None = None,
) -> ImageResult:
    """Recompress one photo into a new file next to it.

    The source file is only read. Returns a FAILED result (and leaves no
    output behind) when the photo cannot be decoded or encoded, a DEGRADED
    result when the output had to be written without metadata.
    """
    source = asset.path
    logger.info("compressing %s", source)

    try:
        image_bytes = source.read_bytes()
        if logger.isEnabledFor(logging.DEBUG):
            _log_source_metadata(image_bytes)
        encoded = recompress(decode(image_bytes), quality)
    except (DecodeFailed, EncodeFailed, OSError) as exc:
        logger.error("unable to compress %s: %s", source, exc)
        return ImageResult(asset=asset, status=OutcomeStatus.FAILED, error=str(exc))

    target = output_path if output_path is not None else output_path_for(source)
    try:
        _write_output(target, encoded)
    except OSError as exc:
        logger.error("unable to write %s: %s", target, exc)
        return ImageResult(asset=asset, status=OutcomeStatus.FAILED, error=str(exc))

    status = OutcomeStatus.SUCCESS
    error: str | None = None
    verification: VerificationResult | None = None
    try:
        report = merge_files(source, target)
    except (MetadataReadFailed, MetadataWriteFailed) as exc:
        logger.warning(
            "metadata merge failed for %s, keeping output without metadata: %s",
            source,
            exc,
        )
        try:
            _write_output(target, encoded)
        except OSError as write_exc:
            logger.error("unable to write %s: %s", target, write_exc)
            return ImageResult(
                asset=asset, status=OutcomeStatus.FAILED, error=str(write_exc)
            )
        status = OutcomeStatus.DEGRADED
        error = str(exc)
    else:
        verification = report.verification
        if not verification.verified:
            logger.warning(
                "EXIF verification failed for %s: %s",
                target.name,
                ", ".join(verification.mismatched_fields),
            )

    outcome = CompressionOutcome(
        original_path=source,
        output_path=target,
        original_size_bytes=asset.byte_size,
        output_size_bytes=target.stat().st_size,
    )
    logger.info(
        "compressed %s: %s -> %s, saved %s",
        source.name,
        format_file_size(outcome.original_size_bytes),
        format_file_size(outcome.output_size_bytes),
        format_file_size(outcome.saved_bytes),
    )
    return ImageResult(
        asset=asset,
        status=status,
        outcome=outcome,
        verification=verification,
        error=error,
    )


def process_batch(
    assets: Sequence[ImageAsset],
    *,
    quality: int = JPEG_QUALITY,
    on_progress: ProgressCallback | None = None,
    should_stop: Callable[[], bool] | None = None,
) -> BatchSummary:
    """Run ``process_image`` over ``assets`` one at a time.

    ``should_stop`` is consulted between images only; an image that has
    started is always finished.
    """
    emit = reporter(on_progress)
    if not assets:
        emit(Error("no photos selected for processing"))
        return BatchSummary()

    emit(Processing())
    total = len(assets)
    results: list[ImageResult] = []
    for index, asset in enumerate(assets, start=1):
        if should_stop is not None and should_stop():
            logger.info("stopping after %d of %d photos", index - 1, total)
            break
        emit(ProcessProgress(current=index, total=total))
        results.append(process_image(asset, quality=quality))

    summary = BatchSummary(results=tuple(results))
    logger.info(
        "batch complete: %d succeeded, %d degraded, %d failed, saved %s",
        summary.succeeded,
        summary.degraded,
        summary.failed,
        format_file_size(summary.saved_bytes),
    )
    emit(Success(f"processed {len(results)} photos"))
    return summary


def _write_output(target: Path, data: bytes) -> None:
    try:
        target.write_bytes(data)
    except OSError:
        target.unlink(missing_ok=True)
        raise


def _log_source_metadata(image_bytes: bytes) -> None:
    try:
        describe_metadata(parse_metadata(image_bytes))
    except MetadataReadFailed as exc:
        logger.debug("metadata unavailable: %s", exc)
