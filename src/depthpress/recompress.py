"""Decoding photos to raw pixels and re-encoding them as JPEG."""

from __future__ import annotations

import io

from PIL import Image

from .constants import JPEG_QUALITY
from .errors import DecodeFailed, EncodeFailed
from .models import PixelBuffer

_PIXEL_MODES = ("RGB", "L")


def decode(image_bytes: bytes) -> PixelBuffer:
    """Decode image bytes into an RGB (or greyscale) pixel buffer.

    Orientation is not applied; the Orientation tag travels with the
    copied EXIF instead.

    Raises:
        DecodeFailed: the bytes are not a complete, decodable image.
    """
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            img.load()
            converted = img if img.mode in _PIXEL_MODES else img.convert("RGB")
            return PixelBuffer(
                mode=converted.mode,
                width=converted.width,
                height=converted.height,
                data=converted.tobytes(),
            )
    except Exception as exc:
        raise DecodeFailed(f"unable to decode image: {exc}") from exc


def recompress(pixels: PixelBuffer, quality_percent: int = JPEG_QUALITY) -> bytes:
    """Encode pixels as a baseline JPEG at the given quality.

    The image is rebuilt from raw pixels, so nothing from the source
    container (EXIF, XMP, ICC, comments) is carried into the output.

    Raises:
        ValueError: quality_percent is outside (0, 100].
        EncodeFailed: the pixel buffer is empty, malformed or not encodable.
    """
    if not 0 < quality_percent <= 100:
        raise ValueError(f"quality must be in (0, 100], got {quality_percent}")
    if pixels.width <= 0 or pixels.height <= 0:
        raise EncodeFailed(
            f"cannot encode an image with dimensions {pixels.width}x{pixels.height}"
        )

    try:
        expected_size = pixels.width * pixels.height * Image.getmodebands(pixels.mode)
    except (KeyError, ValueError) as exc:
        raise EncodeFailed(f"unsupported pixel mode {pixels.mode!r}") from exc
    if pixels.raw_size != expected_size:
        raise EncodeFailed(
            f"pixel buffer holds {pixels.raw_size} bytes, expected {expected_size}"
        )

    buffer = io.BytesIO()
    try:
        image = Image.frombytes(pixels.mode, (pixels.width, pixels.height), pixels.data)
        image.save(buffer, format="JPEG", quality=quality_percent)
    except (OSError, ValueError) as exc:
        raise EncodeFailed(f"JPEG encoding failed: {exc}") from exc

    encoded = buffer.getvalue()
    if not encoded:
        raise EncodeFailed("JPEG encoder produced no data")
    return encoded
