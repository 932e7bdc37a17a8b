"""Fixed settings for detection, recompression and output naming."""

from __future__ import annotations

JPEG_QUALITY = 95

COMPRESSED_FILE_SUFFIX = "_compressed"
OUTPUT_IMAGE_EXTENSION = "jpg"
FILE_NAME_TIME_FORMAT = "%Y%m%d_%H%M%S"

MIN_FILE_SIZE_MB = 5
JPEG_MIME_TYPES = ("image/jpeg", "image/jpg")

XIAOMI_IMAGE_NAMESPACE = "http://ns.xiaomi.com/photos/1.0/camera/"
XIAOMI_XMP_PROPERTY_NAME = "MiCamera:XMPMeta"
DEPTH_MARKER = "depthmap"

# progress is reported every N candidates while scanning
SCAN_PROGRESS_INTERVAL = 5

# Pillow refuses images above twice this many pixels; high-resolution
# camera modes reach 200 MP
MAX_IMAGE_PIXELS = 300_000_000
