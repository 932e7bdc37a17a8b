"""Data records passed between the depthpress core and its callers."""

from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .fields import FIELD_DATETIME_ORIGINAL, FIELD_MAKE, FIELD_MODEL


@dataclass(frozen=True)
class ImageAsset:
    """A candidate image on disk.

    Attributes:
        path: Location of the image file. Never modified by the core.
        byte_size: Size of the file in bytes at enumeration time.
        mime_type: Mime type guessed from the file name.
    """

    path: Path
    byte_size: int
    mime_type: str | None = None

    @property
    def identifier(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class PixelBuffer:
    """Decoded pixels in a Pillow raw mode ("RGB" or "L")."""

    mode: str
    width: int
    height: int
    data: bytes = field(repr=False)

    @property
    def raw_size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of comparing the key capture fields after a merge.

    Attributes:
        verified: True iff every compared field matches exactly.
        source_values: Field name to value read back from the original.
        target_values: Field name to value read back from the new file.
    """

    verified: bool
    source_values: Mapping[str, str | None]
    target_values: Mapping[str, str | None]

    @property
    def mismatched_fields(self) -> list[str]:
        return [
            name
            for name, value in self.source_values.items()
            if self.target_values.get(name) != value
        ]

    @property
    def capture_timestamp(self) -> tuple[str | None, str | None]:
        return self._pair(FIELD_DATETIME_ORIGINAL)

    @property
    def make(self) -> tuple[str | None, str | None]:
        return self._pair(FIELD_MAKE)

    @property
    def model(self) -> tuple[str | None, str | None]:
        return self._pair(FIELD_MODEL)

    def _pair(self, name: str) -> tuple[str | None, str | None]:
        return self.source_values.get(name), self.target_values.get(name)


@dataclass(frozen=True)
class MergeReport:
    copied: int
    skipped: int
    verification: VerificationResult


@dataclass(frozen=True)
class CompressionOutcome:
    original_path: Path
    output_path: Path
    original_size_bytes: int
    output_size_bytes: int

    @property
    def saved_bytes(self) -> int:
        # negative when the recompressed file came out larger
        return self.original_size_bytes - self.output_size_bytes


class OutcomeStatus(enum.Enum):
    SUCCESS = "success"
    DEGRADED = "degraded"
    FAILED = "failed"


@dataclass(frozen=True)
class ImageResult:
    """Per-image result of the pipeline.

    ``outcome`` is set for SUCCESS and DEGRADED, ``verification`` only when
    the metadata merge completed, ``error`` for DEGRADED and FAILED.
    """

    asset: ImageAsset
    status: OutcomeStatus
    outcome: CompressionOutcome | None = None
    verification: VerificationResult | None = None
    error: str | None = None


@dataclass(frozen=True)
class BatchSummary:
    results: Sequence[ImageResult] = ()

    def _count(self, status: OutcomeStatus) -> int:
        return sum(1 for result in self.results if result.status is status)

    @property
    def succeeded(self) -> int:
        return self._count(OutcomeStatus.SUCCESS)

    @property
    def degraded(self) -> int:
        return self._count(OutcomeStatus.DEGRADED)

    @property
    def failed(self) -> int:
        return self._count(OutcomeStatus.FAILED)

    @property
    def unverified(self) -> int:
        return sum(
            1
            for result in self.results
            if result.verification is not None and not result.verification.verified
        )

    @property
    def saved_bytes(self) -> int:
        return sum(
            result.outcome.saved_bytes
            for result in self.results
            if result.outcome is not None
        )
