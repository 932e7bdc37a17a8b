"""File helpers shared across components."""

from __future__ import annotations

import mimetypes
from pathlib import Path

_KIB = 1024
_MIB = 1024 * 1024
_GIB = 1024 * 1024 * 1024


def format_file_size(size: int) -> str:
    if size < 0:
        return f"-{format_file_size(-size)}"
    if size < _KIB:
        return f"{size}B"
    if size < _MIB:
        return f"{size // _KIB}KB"
    if size < _GIB:
        return f"{size // _MIB}MB"
    return f"{size / _GIB:.2f}GB"


def guess_mime_type(path: Path) -> str | None:
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type
