"""Output file naming for recompressed photos.

An output lives next to its source as
``<stem>_compressed_<YYYYmmdd_HHMMSS>.jpg``. The timestamp comes from the
source's DateTimeOriginal tag, falls back to the file modification time
when the tag is missing, and to the current time when the tag cannot be
parsed or the source cannot be read.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from image_common.exif import parse_exif_datetime

from .constants import (
    COMPRESSED_FILE_SUFFIX,
    FILE_NAME_TIME_FORMAT,
    OUTPUT_IMAGE_EXTENSION,
)
from .errors import DepthpressError
from .exif_handle import ExifHandle
from .fields import FIELD_DATETIME_ORIGINAL

logger = logging.getLogger(__name__)


def output_timestamp(
    source: Path, *, now: Callable[[], datetime] = datetime.now
) -> str:
    try:
        captured = ExifHandle(source).get_field(FIELD_DATETIME_ORIGINAL)
        if not captured:
            modified = datetime.fromtimestamp(source.stat().st_mtime)
            return modified.strftime(FILE_NAME_TIME_FORMAT)
    except (DepthpressError, OSError) as exc:
        logger.warning("unable to read capture time of %s, using now: %s", source, exc)
        return now().strftime(FILE_NAME_TIME_FORMAT)

    parsed = parse_exif_datetime(captured)
    if parsed is None:
        logger.warning("unparsable capture time %r in %s, using now", captured, source)
        return now().strftime(FILE_NAME_TIME_FORMAT)
    return parsed.strftime(FILE_NAME_TIME_FORMAT)


def output_path_for(
    source: Path, *, now: Callable[[], datetime] = datetime.now
) -> Path:
    """Return a path for the recompressed copy of ``source`` that does not
    exist yet."""
    timestamp = output_timestamp(source, now=now)
    stem = f"{source.stem}{COMPRESSED_FILE_SUFFIX}_{timestamp}"
    candidate = source.with_name(f"{stem}.{OUTPUT_IMAGE_EXTENSION}")
    counter = 1
    while candidate.exists():
        candidate = source.with_name(f"{stem}_{counter}.{OUTPUT_IMAGE_EXTENSION}")
        counter += 1
    return candidate


def is_compressed_file(path: Path) -> bool:
    return (
        COMPRESSED_FILE_SUFFIX in path.name
        and path.suffix.lower() == f".{OUTPUT_IMAGE_EXTENSION}"
    )
