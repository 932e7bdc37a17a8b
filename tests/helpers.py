"""Builders for test images and metadata handles."""

from __future__ import annotations

import io
import struct
from pathlib import Path
from typing import Any
from xml.sax.saxutils import quoteattr

import piexif
from PIL import Image

from depthpress.constants import XIAOMI_IMAGE_NAMESPACE
from depthpress.errors import MetadataWriteFailed

XMP_HEADER = b"http://ns.adobe.com/xap/1.0/\x00"
DEPTH_XMP_VALUE = "this photo has a depthmap layer"


def xmp_packet(value: str, *, namespace: str = XIAOMI_IMAGE_NAMESPACE, element: bool = False) -> bytes:
    if element:
        description = (
            f'<rdf:Description rdf:about="" xmlns:MiCamera="{namespace}">'
            f"<MiCamera:XMPMeta>{_escape_text(value)}</MiCamera:XMPMeta>"
            "</rdf:Description>"
        )
    else:
        description = (
            f'<rdf:Description rdf:about="" xmlns:MiCamera="{namespace}" '
            f"MiCamera:XMPMeta={quoteattr(value)}/>"
        )
    packet = (
        "<?xpacket begin='' id='W5M0MpCehiHzreSzNTczkc9d'?>"
        '<x:xmpmeta xmlns:x="adobe:ns:meta/">'
        '<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#">'
        f"{description}"
        "</rdf:RDF></x:xmpmeta>"
        "<?xpacket end='w'?>"
    )
    return packet.encode("utf-8")


def _escape_text(value: str) -> str:
    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def inject_xmp(jpeg: bytes, xmp: bytes) -> bytes:
    payload = XMP_HEADER + xmp
    segment = b"\xff\xe1" + struct.pack(">H", len(payload) + 2) + payload
    return jpeg[:2] + segment + jpeg[2:]


def sample_exif() -> dict[str, Any]:
    return {
        "0th": {
            piexif.ImageIFD.Make: b"Xiaomi",
            piexif.ImageIFD.Model: b"Mi 11",
            piexif.ImageIFD.DateTime: b"2024:01:02 08:00:00",
            piexif.ImageIFD.Orientation: 6,
            piexif.ImageIFD.XResolution: (72, 1),
            piexif.ImageIFD.Artist: b"",
        },
        "Exif": {
            piexif.ExifIFD.DateTimeOriginal: b"2024:01:01 10:00:00",
            piexif.ExifIFD.SubSecTimeOriginal: b"123",
            piexif.ExifIFD.ExposureTime: (1, 100),
            piexif.ExifIFD.FNumber: (18, 10),
            piexif.ExifIFD.ISOSpeedRatings: 100,
            piexif.ExifIFD.ExifVersion: b"0230",
            piexif.ExifIFD.MakerNote: b"MI\x00\x01\xff\xfe",
            piexif.ExifIFD.LensModel: b"wide",
        },
        "GPS": {
            piexif.GPSIFD.GPSLatitudeRef: b"N",
            piexif.GPSIFD.GPSLatitude: ((39, 1), (54, 1), (2616, 100)),
            piexif.GPSIFD.GPSAltitudeRef: 0,
            piexif.GPSIFD.GPSAltitude: (4350, 100),
        },
    }


def make_image(size: tuple[int, int] = (64, 48), *, noisy: bool = False) -> Image.Image:
    if not noisy:
        return Image.new("RGB", size, color=(200, 120, 40))
    channels = [Image.effect_noise(size, sigma) for sigma in (40, 60, 80)]
    return Image.merge("RGB", channels)


def jpeg_bytes(
    *,
    size: tuple[int, int] = (64, 48),
    exif: dict[str, Any] | None = None,
    xmp: bytes | None = None,
    noisy: bool = False,
    quality: int = 90,
) -> bytes:
    buffer = io.BytesIO()
    save_kwargs: dict[str, Any] = {"format": "JPEG", "quality": quality}
    if quality == 100:
        save_kwargs["subsampling"] = 0
    if exif is not None:
        save_kwargs["exif"] = piexif.dump(exif)
    make_image(size, noisy=noisy).save(buffer, **save_kwargs)
    data = buffer.getvalue()
    if xmp is not None:
        data = inject_xmp(data, xmp)
    return data


def write_jpeg(path: Path, **kwargs: Any) -> Path:
    path.write_bytes(jpeg_bytes(**kwargs))
    return path


class DictHandle:
    """In-memory metadata handle."""

    def __init__(self, fields: dict[str, str] | None = None, *, fail_commit: bool = False):
        self.fields = dict(fields or {})
        self.fail_commit = fail_commit
        self.commits = 0

    def get_field(self, name: str) -> str | None:
        return self.fields.get(name)

    def set_field(self, name: str, value: str) -> None:
        self.fields[name] = value

    def commit(self) -> None:
        if self.fail_commit:
            raise MetadataWriteFailed("commit refused")
        self.commits += 1

    def reopen(self) -> DictHandle:
        return self


