"""Progress states reported while scanning and processing.

Pure data; consumers switch on the concrete class.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Union

from .models import ImageAsset


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Scanning:
    pass


@dataclass(frozen=True)
class ScanProgress:
    current: int
    total: int


@dataclass(frozen=True)
class ScanComplete:
    photos: Sequence[ImageAsset]


@dataclass(frozen=True)
class Processing:
    pass


@dataclass(frozen=True)
class ProcessProgress:
    current: int
    total: int


@dataclass(frozen=True)
class Success:
    message: str


@dataclass(frozen=True)
class Error:
    message: str


PipelineState = Union[
    Idle,
    Scanning,
    ScanProgress,
    ScanComplete,
    Processing,
    ProcessProgress,
    Success,
    Error,
]

ProgressCallback = Callable[[PipelineState], None]


def _ignore(state: PipelineState) -> None:
    return None


def reporter(callback: ProgressCallback | None) -> ProgressCallback:
    return callback if callback is not None else _ignore
