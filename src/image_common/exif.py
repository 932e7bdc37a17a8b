"""EXIF value helpers shared across components.

piexif hands out typed values (bytes for ASCII/UNDEFINED, ints or tuples
for integer types, ``(numerator, denominator)`` pairs for rationals). The
metadata handles expose every field as text, so these helpers convert in
both directions without losing information:

- ASCII/UNDEFINED bytes are decoded as UTF-8 with ``surrogateescape`` so
  arbitrary binary payloads (maker notes, user comments) survive a round trip.
- Integer types render as comma-separated decimals.
- Rationals render as ``num/den`` items, comma-separated.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import piexif  # type: ignore[import-untyped]

EXIF_DATETIME_FORMAT = "%Y:%m:%d %H:%M:%S"

_BYTES_TYPES = frozenset({piexif.TYPES.Ascii, piexif.TYPES.Undefined})
_RATIONAL_TYPES = frozenset({piexif.TYPES.Rational, piexif.TYPES.SRational})


def value_to_text(value: Any, value_type: int) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="surrogateescape")
    if value_type in _RATIONAL_TYPES:
        pairs = [value] if _is_rational_pair(value) else list(value)
        return ",".join(f"{num}/{den}" for num, den in pairs)
    if isinstance(value, (tuple, list)):
        return ",".join(str(item) for item in value)
    return str(value)


def text_to_value(text: str, value_type: int) -> Any:
    """Convert text produced by value_to_text back into a piexif value.

    Raises ValueError when the text does not fit the tag type.
    """
    if value_type in _BYTES_TYPES:
        return text.encode("utf-8", errors="surrogateescape")

    parts = [part.strip() for part in text.split(",")]
    if value_type in _RATIONAL_TYPES:
        pairs = tuple(_parse_rational(part) for part in parts)
        return pairs[0] if len(pairs) == 1 else pairs

    numbers = tuple(int(part) for part in parts)
    return numbers[0] if len(numbers) == 1 else numbers


def parse_exif_datetime(text: str) -> datetime | None:
    try:
        return datetime.strptime(text.strip(), EXIF_DATETIME_FORMAT)
    except ValueError:
        return None


def _is_rational_pair(value: Any) -> bool:
    return (
        isinstance(value, tuple)
        and len(value) == 2
        and all(isinstance(item, int) for item in value)
    )


def _parse_rational(part: str) -> tuple[int, int]:
    numerator, sep, denominator = part.partition("/")
    if not sep:
        return int(numerator), 1
    return int(numerator), int(denominator)
