"""The fixed set of EXIF fields copied from an original photo to its
recompressed version.

Everything not listed here (XMP packets, thumbnails, interoperability
data) is left behind on purpose.
"""

from __future__ import annotations

from .fields import (
    FIELD_DATETIME_ORIGINAL,
    FIELD_MAKE,
    FIELD_MODEL,
    TagField,
    resolve_field,
)

TAG_ALLOWLIST: tuple[str, ...] = (
    # timestamps
    FIELD_DATETIME_ORIGINAL,
    "DateTime",
    "DateTimeDigitized",
    "SubSecTimeOriginal",
    "SubSecTime",
    "SubSecTimeDigitized",
    # camera
    FIELD_MAKE,
    FIELD_MODEL,
    "Software",
    "Artist",
    "Copyright",
    # exposure
    "ExposureTime",
    "FNumber",
    "ExposureProgram",
    "ISOSpeedRatings",
    "SensitivityType",
    "ExposureBiasValue",
    "MaxApertureValue",
    "MeteringMode",
    "LightSource",
    "Flash",
    "FlashEnergy",
    # lens
    "FocalLength",
    "FocalLengthIn35mmFilm",
    "LensMake",
    "LensModel",
    "LensSpecification",
    "LensSerialNumber",
    # geometry
    "PixelXDimension",
    "PixelYDimension",
    "ColorSpace",
    "Orientation",
    "XResolution",
    "YResolution",
    "ResolutionUnit",
    # advanced capture
    "WhiteBalance",
    "DigitalZoomRatio",
    "SceneCaptureType",
    "GainControl",
    "Contrast",
    "Saturation",
    "Sharpness",
    "SubjectDistanceRange",
    # technical / provenance
    "ExifVersion",
    "FlashpixVersion",
    "SubjectArea",
    "SubjectLocation",
    "ExposureIndex",
    "SensingMethod",
    "FileSource",
    "SceneType",
    "CFAPattern",
    "CustomRendered",
    "ExposureMode",
    "FocalPlaneXResolution",
    "FocalPlaneYResolution",
    "FocalPlaneResolutionUnit",
    "SpatialFrequencyResponse",
    "DeviceSettingDescription",
    "ImageUniqueID",
    "CameraOwnerName",
    "BodySerialNumber",
    # annotations
    "UserComment",
    "MakerNote",
    "RelatedSoundFile",
    # GPS
    "GPSLatitude",
    "GPSLongitude",
    "GPSLatitudeRef",
    "GPSLongitudeRef",
    "GPSAltitude",
    "GPSAltitudeRef",
    "GPSTimeStamp",
    "GPSDateStamp",
    "GPSProcessingMethod",
    "GPSAreaInformation",
    "GPSDifferential",
    "GPSHPositioningError",
)

# Only these gate verification; the rest are copied best-effort.
VERIFIED_FIELDS: tuple[str, ...] = (FIELD_DATETIME_ORIGINAL, FIELD_MAKE, FIELD_MODEL)

ALLOWLIST_FIELDS: tuple[TagField, ...] = tuple(
    resolve_field(name) for name in TAG_ALLOWLIST
)
