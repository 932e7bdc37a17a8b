"""Shared helpers for depthpress."""

from .env import as_boolean, env_flag, env_int
from .exif import parse_exif_datetime, text_to_value, value_to_text
from .files import format_file_size, guess_mime_type

__all__ = [
    "as_boolean",
    "env_flag",
    "env_int",
    "format_file_size",
    "guess_mime_type",
    "parse_exif_datetime",
    "text_to_value",
    "value_to_text",
]
