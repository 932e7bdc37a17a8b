"""Name-based addressing of EXIF tags.

Fields are addressed by their EXIF tag name (``"Make"``,
``"DateTimeOriginal"``, ``"GPSLatitude"``) and resolved to the IFD and tag
id piexif uses. The Exif IFD is searched before the primary image IFD
because piexif also lists TIFF/EP variants of several Exif tags
(``ExposureIndex``, ``FocalPlaneXResolution``, ...) under the image IFD.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass

import piexif  # type: ignore[import-untyped]

from .errors import UnknownFieldError

FIELD_DATETIME_ORIGINAL = "DateTimeOriginal"
FIELD_MAKE = "Make"
FIELD_MODEL = "Model"

_IFD_LOOKUP = (
    ("Exif", piexif.ExifIFD, "Exif"),
    ("0th", piexif.ImageIFD, "Image"),
    ("GPS", piexif.GPSIFD, "GPS"),
)


@dataclass(frozen=True)
class TagField:
    name: str
    ifd: str
    tag: int
    value_type: int


@functools.lru_cache(maxsize=None)
def resolve_field(name: str) -> TagField:
    for ifd, tag_names, table in _IFD_LOOKUP:
        tag = getattr(tag_names, name, None)
        if isinstance(tag, int) and tag in piexif.TAGS[table]:
            return TagField(
                name=name,
                ifd=ifd,
                tag=tag,
                value_type=piexif.TAGS[table][tag]["type"],
            )
    raise UnknownFieldError(name)
