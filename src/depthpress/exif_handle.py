"""Field-level read/write access to the EXIF block of a JPEG file."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

import piexif  # type: ignore[import-untyped]

from image_common.exif import text_to_value, value_to_text

from .errors import MetadataReadFailed, MetadataWriteFailed
from .fields import resolve_field


class MetadataHandle(Protocol):
    """What the merger needs from a metadata store."""

    def get_field(self, name: str) -> str | None: ...

    def set_field(self, name: str, value: str) -> None: ...

    def commit(self) -> None: ...

    def reopen(self) -> MetadataHandle: ...


class ExifHandle:
    """EXIF of a JPEG file loaded with piexif.

    Reads come from the in-memory copy loaded at construction; writes are
    buffered until ``commit`` re-inserts the whole EXIF block into the file.

    Raises:
        MetadataReadFailed: the file cannot be read or its EXIF is corrupt.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        try:
            self._exif: dict[str, Any] = piexif.load(str(self.path))
        except Exception as exc:
            raise MetadataReadFailed(
                f"unable to read EXIF from {self.path}: {exc}"
            ) from exc

    def get_field(self, name: str) -> str | None:
        field = resolve_field(name)
        value = (self._exif.get(field.ifd) or {}).get(field.tag)
        if value is None:
            return None
        return value_to_text(value, field.value_type)

    def set_field(self, name: str, value: str) -> None:
        field = resolve_field(name)
        try:
            converted = text_to_value(value, field.value_type)
        except ValueError as exc:
            raise MetadataWriteFailed(
                f"value {value!r} does not fit EXIF field {name}"
            ) from exc
        ifd = self._exif.get(field.ifd)
        if ifd is None:
            ifd = self._exif[field.ifd] = {}
        ifd[field.tag] = converted

    def commit(self) -> None:
        try:
            exif_bytes = piexif.dump(self._exif)
            piexif.insert(exif_bytes, str(self.path))
        except Exception as exc:
            raise MetadataWriteFailed(
                f"unable to write EXIF to {self.path}: {exc}"
            ) from exc

    def reopen(self) -> ExifHandle:
        return type(self)(self.path)

    def __repr__(self) -> str:
        return f"ExifHandle({str(self.path)!r})"
