"""Exceptions raised by the depthpress core."""

from __future__ import annotations


class DepthpressError(Exception):
    """Base class for all depthpress failures."""


class DecodeFailed(DepthpressError):
    """The source bytes could not be decoded into pixels."""


class EncodeFailed(DepthpressError):
    """Pixels could not be re-encoded; no output must be written."""


class MetadataReadFailed(DepthpressError):
    """Embedded metadata of a file could not be parsed."""


class MetadataWriteFailed(DepthpressError):
    """Copying a field or committing the metadata block failed."""


class UnknownFieldError(DepthpressError, KeyError):
    """A field name does not correspond to any known EXIF tag."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown EXIF field '{self.name}'"
