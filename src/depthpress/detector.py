"""Detection of the vendor depth-effect marker in photo XMP."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO

from .constants import DEPTH_MARKER, XIAOMI_IMAGE_NAMESPACE, XIAOMI_XMP_PROPERTY_NAME
from .errors import MetadataReadFailed
from .metadata import MetadataBundle, parse_metadata

logger = logging.getLogger(__name__)


def contains_depth_marker(
    bundle: MetadataBundle,
    *,
    namespace: str = XIAOMI_IMAGE_NAMESPACE,
    property_name: str = XIAOMI_XMP_PROPERTY_NAME,
    marker: str = DEPTH_MARKER,
) -> bool:
    if not bundle.has_xmp:
        return False
    value = bundle.xmp_property(namespace, property_name)
    if value is None:
        return False
    if marker.lower() in value.lower():
        logger.debug("found depth effect via XMP property: %s", value)
        return True
    return False


def detect(image: bytes | IO[bytes]) -> bool:
    """Return True iff the image's XMP carries the depth marker.

    Never raises for bad input: an image whose metadata cannot be parsed
    is simply not a match.
    """
    try:
        bundle = parse_metadata(image)
    except MetadataReadFailed as exc:
        logger.warning("depth detection failed: %s", exc)
        return False
    return contains_depth_marker(bundle)


def detect_file(path: Path) -> bool:
    try:
        with path.open("rb") as stream:
            return detect(stream)
    except OSError as exc:
        logger.warning("unable to check %s for depth information: %s", path, exc)
        return False
