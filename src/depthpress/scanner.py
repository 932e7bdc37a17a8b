"""Filesystem-backed enumeration of candidate photos and of earlier outputs."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from image_common.files import guess_mime_type

from .constants import JPEG_MIME_TYPES, MIN_FILE_SIZE_MB, SCAN_PROGRESS_INTERVAL
from .detector import detect_file
from .models import ImageAsset
from .naming import is_compressed_file
from .states import ProgressCallback, ScanComplete, ScanProgress, Scanning, reporter

logger = logging.getLogger(__name__)

_MB = 1024 * 1024


def iter_files(roots: Iterable[Path]) -> Iterator[Path]:
    for root in roots:
        if root.is_file():
            yield root
            continue
        for path in sorted(root.rglob("*")):
            if path.is_file():
                yield path


def find_candidates(
    roots: Iterable[Path], *, min_size_mb: int = MIN_FILE_SIZE_MB
) -> list[ImageAsset]:
    """Collect JPEG files larger than ``min_size_mb``, newest first.

    Previously produced outputs are never candidates.
    """
    threshold = min_size_mb * _MB
    found: list[tuple[float, ImageAsset]] = []
    for path in iter_files(roots):
        mime_type = guess_mime_type(path)
        if mime_type not in JPEG_MIME_TYPES or is_compressed_file(path):
            continue
        try:
            stat = path.stat()
        except OSError as exc:
            logger.warning("skipping unreadable file %s: %s", path, exc)
            continue
        if stat.st_size <= threshold:
            continue
        found.append(
            (stat.st_mtime, ImageAsset(path=path, byte_size=stat.st_size, mime_type=mime_type))
        )
    found.sort(key=lambda item: item[0], reverse=True)
    return [asset for _, asset in found]


def scan_for_depth_images(
    candidates: list[ImageAsset], *, on_progress: ProgressCallback | None = None
) -> list[ImageAsset]:
    """Return the candidates whose XMP carries the depth marker."""
    emit = reporter(on_progress)
    emit(Scanning())
    total = len(candidates)
    logger.info("scanning %d candidate photos", total)

    photos: list[ImageAsset] = []
    for index, asset in enumerate(candidates, start=1):
        if index % SCAN_PROGRESS_INTERVAL == 0 or index == total:
            emit(ScanProgress(current=index, total=total))
        if detect_file(asset.path):
            photos.append(asset)
            logger.info("found depth photo: %s", asset.identifier)

    logger.info("scan complete, %d depth photos found", len(photos))
    emit(ScanComplete(photos=tuple(photos)))
    return photos


def find_compressed_files(roots: Iterable[Path]) -> list[Path]:
    compressed = [path for path in iter_files(roots) if is_compressed_file(path)]
    return sorted(compressed, key=lambda path: path.stat().st_mtime, reverse=True)


def clear_compressed_files(roots: Iterable[Path]) -> int:
    deleted = 0
    for path in find_compressed_files(roots):
        try:
            path.unlink()
        except OSError as exc:
            logger.warning("unable to delete compressed file %s: %s", path.name, exc)
            continue
        deleted += 1
        logger.info("deleted compressed file %s", path.name)
    logger.info("cleanup complete, %d compressed files deleted", deleted)
    return deleted
