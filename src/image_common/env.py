"""Environment helpers shared across components."""

from __future__ import annotations

import os


def env_flag(key: str, default: bool = False) -> bool:
    value = os.getenv(key, "")
    if not value.strip():
        return default
    return as_boolean(value, key=key)


def env_int(key: str, default: int) -> int:
    value = os.getenv(key, "")
    if not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ValueError(f"value {value} for {key} must be an integer") from exc


def as_boolean(value: str, *, key: str | None = None) -> bool:
    if not key:
        key = "key"
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ValueError(
        f"value {value} for {key} must be one of 1, 0, true, false, yes, no, on, off"
    )
