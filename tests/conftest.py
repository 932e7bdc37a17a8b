from __future__ import annotations

from pathlib import Path

import pytest

import depthpress.options as options_module
from helpers import DEPTH_XMP_VALUE, sample_exif, write_jpeg, xmp_packet

ENV_KEYS = ("DEPTHPRESS_MIN_SIZE_MB", "DEPTHPRESS_VERBOSE")


@pytest.fixture()
def depth_photo(tmp_path) -> Path:
    """A large-ish, noisy JPEG with EXIF and the depth marker in its XMP."""

    return write_jpeg(
        tmp_path / "IMG_20240101_100000.jpg",
        size=(640, 480),
        exif=sample_exif(),
        xmp=xmp_packet(DEPTH_XMP_VALUE),
        noisy=True,
        quality=100,
    )


@pytest.fixture()
def test_env_file(tmp_path, monkeypatch) -> Path:
    """Provide an isolated .env file for each test that needs CLI parsing."""

    env_path = tmp_path / ".env"
    env_path.write_text("")
    monkeypatch.setattr(options_module, "_DOTENV_FILE", env_path)
    for key in ENV_KEYS:
        # recorded by setenv so anything load_dotenv adds is undone on teardown
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return env_path
