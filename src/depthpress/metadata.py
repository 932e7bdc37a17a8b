"""Read-only view over the metadata embedded in an image."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from typing import IO, Any
from xml.etree.ElementTree import Element

import piexif  # type: ignore[import-untyped]
from defusedxml import ElementTree
from PIL import Image

from .errors import MetadataReadFailed

logger = logging.getLogger(__name__)

_EXIF_DIRECTORIES = ("0th", "Exif", "GPS", "Interop", "1st")
_XMP_SEGMENT_HEADER = b"http://ns.adobe.com/xap/1.0/\x00"


@dataclass(frozen=True)
class MetadataBundle:
    """Metadata of one image, split by standard.

    Attributes:
        exif: piexif dictionary, or None when the image carries no EXIF.
        xmp: Root element of the parsed XMP packet, or None.
        has_icc: Whether an ICC profile is embedded.
        errors: Problems hit while parsing individual blocks. A corrupt
            EXIF or XMP block is recorded here instead of failing the
            whole bundle.
    """

    exif: dict[str, Any] | None = None
    xmp: Element | None = None
    has_icc: bool = False
    errors: tuple[str, ...] = field(default=())

    @property
    def has_xmp(self) -> bool:
        return self.xmp is not None

    @property
    def exif_directory_count(self) -> int:
        if not self.exif:
            return 0
        return sum(1 for name in _EXIF_DIRECTORIES if self.exif.get(name))

    def xmp_property(self, namespace: str, name: str) -> str | None:
        """Return the string value of an XMP property, or None if absent.

        ``name`` may carry a prefix ("MiCamera:XMPMeta"); only the local
        part is matched, the namespace is given by URI. Simple properties
        are found both in attribute form on ``rdf:Description`` and in
        element form.
        """
        if self.xmp is None:
            return None
        qualified = f"{{{namespace}}}{name.rpartition(':')[2]}"
        for element in self.xmp.iter():
            value = element.get(qualified)
            if value is not None:
                return value
            if element.tag == qualified:
                return element.text or ""
        return None


def parse_metadata(source: bytes | IO[bytes]) -> MetadataBundle:
    """Parse the metadata of an image given as bytes or a binary stream.

    Only the image headers are read; pixel data is not decoded.

    Raises:
        MetadataReadFailed: the container itself cannot be identified.
    """
    stream = io.BytesIO(source) if isinstance(source, (bytes, bytearray)) else source
    try:
        with Image.open(stream) as img:
            info = dict(img.info)
            applist = list(getattr(img, "applist", []))
    except Exception as exc:
        raise MetadataReadFailed(f"unable to read image metadata: {exc}") from exc

    errors: list[str] = []
    exif = None
    exif_bytes = info.get("exif")
    if exif_bytes:
        try:
            exif = piexif.load(exif_bytes)
        except Exception as exc:
            errors.append(f"exif: {exc}")

    xmp = None
    xmp_bytes = info.get("xmp") or _find_xmp_segment(applist)
    if xmp_bytes:
        try:
            xmp = ElementTree.fromstring(_strip_padding(xmp_bytes))
        except Exception as exc:
            errors.append(f"xmp: {exc}")

    return MetadataBundle(
        exif=exif,
        xmp=xmp,
        has_icc=bool(info.get("icc_profile")),
        errors=tuple(errors),
    )


def describe_metadata(bundle: MetadataBundle) -> None:
    logger.debug("metadata:")
    logger.debug("  - EXIF directories: %d", bundle.exif_directory_count)
    logger.debug("  - ICC profile: %s", bundle.has_icc)
    logger.debug("  - XMP: %s (dropped on recompression)", bundle.has_xmp)
    for error in bundle.errors:
        logger.debug("  - parse error: %s", error)


def _find_xmp_segment(applist: list[tuple[str, bytes]]) -> bytes | None:
    for marker, payload in applist:
        if marker == "APP1" and payload.startswith(_XMP_SEGMENT_HEADER):
            return payload[len(_XMP_SEGMENT_HEADER) :]
    return None


def _strip_padding(raw: bytes | str) -> bytes:
    if isinstance(raw, str):
        raw = raw.encode("utf-8")
    return raw.rstrip(b"\x00 \t\r\n")
