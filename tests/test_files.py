from pathlib import Path

import pytest

from image_common.files import format_file_size, guess_mime_type


@pytest.mark.parametrize(
    "size,expected",
    [
        (0, "0B"),
        (1023, "1023B"),
        (1024, "1KB"),
        (1024 * 1024 - 1, "1023KB"),
        (5 * 1024 * 1024 - 1, "4MB"),
        (20 * 1024 * 1024 + 7, "20MB"),
        (3 * 1024 * 1024 * 1024 // 2, "1.50GB"),
    ],
)
def test_format_file_size(size, expected):
    assert format_file_size(size) == expected


def test_guess_mime_type():
    assert guess_mime_type(Path("IMG.JPG")) == "image/jpeg"
    assert guess_mime_type(Path("IMG.jpeg")) == "image/jpeg"
    assert guess_mime_type(Path("notes")) is None


def test_format_negative_file_size():
    """Ensures a size delta below zero keeps its unit.

    Why: saved bytes are negative when a recompressed photo grows, and the
    summary line must still read like a size.
    """
    assert format_file_size(-3 * 1024 * 1024) == "-3MB"
    assert format_file_size(-512) == "-512B"
