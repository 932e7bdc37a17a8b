from __future__ import annotations

import io
import struct

import pytest
from PIL import Image

from depthpress.constants import MAX_IMAGE_PIXELS
from depthpress.detector import contains_depth_marker, detect, detect_file
from depthpress.metadata import parse_metadata
from helpers import DEPTH_XMP_VALUE, jpeg_bytes, sample_exif, xmp_packet


def test_detect_without_xmp_is_false():
    assert detect(jpeg_bytes(exif=sample_exif())) is False


@pytest.mark.parametrize(
    "value",
    [
        DEPTH_XMP_VALUE,
        "<depthmap version='2'/>",
        "DEPTHMAP",
        "has a DepthMap in the middle",
    ],
)
def test_detect_marker_any_case(value):
    assert detect(jpeg_bytes(xmp=xmp_packet(value))) is True


def test_detect_marker_in_element_form():
    assert detect(jpeg_bytes(xmp=xmp_packet(DEPTH_XMP_VALUE, element=True))) is True


@pytest.mark.parametrize("value", ["portrait mode, no depth", "", "depth map"])
def test_detect_property_without_marker_is_false(value):
    assert detect(jpeg_bytes(xmp=xmp_packet(value))) is False


def test_detect_ignores_marker_in_other_namespace():
    """The property name alone is not enough, the vendor namespace must match."""

    xmp = xmp_packet(DEPTH_XMP_VALUE, namespace="http://example.com/other/1.0/")
    assert detect(jpeg_bytes(xmp=xmp)) is False


@pytest.mark.parametrize(
    "data",
    [b"", b"not an image at all", b"\xff\xd8\xff"],
)
def test_detect_unparsable_input_is_false(data):
    assert detect(data) is False


def test_detect_broken_xmp_is_false():
    assert detect(jpeg_bytes(xmp=b"<x:xmpmeta><unclosed")) is False


def test_detect_accepts_streams():
    data = jpeg_bytes(xmp=xmp_packet(DEPTH_XMP_VALUE))
    assert detect(io.BytesIO(data)) is True


def test_detect_file_missing_path_is_false(tmp_path):
    assert detect_file(tmp_path / "missing.jpg") is False


def test_detect_file(depth_photo):
    assert detect_file(depth_photo) is True


def test_bundle_reports_blocks():
    bundle = parse_metadata(jpeg_bytes(exif=sample_exif(), xmp=xmp_packet("x")))

    assert bundle.has_xmp
    assert bundle.exif is not None
    assert bundle.exif_directory_count == 3
    assert bundle.errors == ()
    assert contains_depth_marker(bundle) is False
    assert contains_depth_marker(bundle, marker="x") is True


def _with_frame_size(jpeg: bytes, width: int, height: int) -> bytes:
    # baseline frame header: marker, length, precision, height, width
    offset = jpeg.index(b"\xff\xc0")
    return jpeg[: offset + 5] + struct.pack(">HH", height, width) + jpeg[offset + 9 :]


def test_detects_200_megapixel_photo():
    """Ensures very high resolution camera photos are not rejected as bombs.

    Why: Pillow's default pixel limit rejects images above about 179 MP,
    which would silently hide 200 MP sensor photos from the scan.
    """
    data = _with_frame_size(
        jpeg_bytes(xmp=xmp_packet(DEPTH_XMP_VALUE)), width=16384, height=12288
    )

    assert Image.MAX_IMAGE_PIXELS == MAX_IMAGE_PIXELS
    assert parse_metadata(data).has_xmp
    assert detect(data) is True
