"""Static field tables for metadata normalization.

Each table maps a source tag name to the destination field it fills, or to
None when the tag is only an input to a derived field. Every source tag
listed here is treated as consumed and never repeated in the raw output.
"""

# Capture time candidates, highest priority first
CAPTURE_TIME_TAGS = (
    "SubSecDateTimeOriginal",
    "DateTimeOriginal",
    "CreateDate",
    "GPSDateTime",
)

# (coordinate tag, hemisphere tag, destination prefix)
COORDINATE_TAGS = (
    ("GPSLatitude", "GPSLatitudeRef", "Latitude"),
    ("GPSLongitude", "GPSLongitudeRef", "Longitude"),
)

# Components the extractor combines into composite capture time tags
CAPTURE_TIME_COMPONENT_TAGS = (
    "SubsecTimeOriginal",
    "OffsetTimeOriginal",
    "GPSDateStamp",
    "GPSTimeStamp",
)

# Tags folded into derived clean fields (CapturedTime, coordinates)
DERIVED_SOURCE_FIELDS = {
    **{tag: None for tag in CAPTURE_TIME_TAGS},
    **{tag: None for tag in CAPTURE_TIME_COMPONENT_TAGS},
    "GPSLatitude": None,
    "GPSLatitudeRef": None,
    "GPSLongitude": None,
    "GPSLongitudeRef": None,
}

# Device identification, copied verbatim
DEVICE_FIELDS = {
    "Make": "Make",
    "Model": "Model",
    "LensModel": "LensModel",
}

# Image dimensions and format, copied verbatim
IMAGE_FIELDS = {
    "ImageWidth": "ImageWidth",
    "ImageHeight": "ImageHeight",
    "Megapixels": "Megapixels",
    "MIMEType": "MIMEType",
}

# Shooting conditions considered safe to surface as analysis
ANALYSIS_FIELDS = {
    "ISO": "ISO",
    "FNumber": "FNumber",
    "ExposureTime": "ExposureTime",
    "WhiteBalance": "WhiteBalance",
    "MeteringMode": "MeteringMode",
}

# Clean fields that come from the upload rather than the image itself
FILE_FIELDS = ("FileName", "FileSizeMB")

CONSUMED_SOURCE_TAGS = frozenset(
    list(DERIVED_SOURCE_FIELDS)
    + list(DEVICE_FIELDS)
    + list(IMAGE_FIELDS)
    + list(ANALYSIS_FIELDS)
)

# Clean fields that indicate camera metadata survived in the file
CAMERA_FIELDS = frozenset(
    ["CapturedTime", "GPSPosition", "Latitude_DMS", "Longitude_DMS"]
    + list(DEVICE_FIELDS.values())
)

BYTES_PER_MB = 1_048_576
