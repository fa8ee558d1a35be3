"""
Constants and configuration values for BatchBox Curves.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the library.
"""

# Lookup table constants
LUT_SIZE = 256
CHANNEL_MIN = 0
CHANNEL_MAX = 255

# Control point constants
POINT_X_EPSILON = 5
MIN_POINT_COUNT = 2
DEFAULT_START_POINT_ID = "start"
DEFAULT_END_POINT_ID = "end"
DEFAULT_POINTS = (
    (DEFAULT_START_POINT_ID, 0, 0),
    (DEFAULT_END_POINT_ID, 255, 255),
)

# Color grade constants
GRADE_MIN = -100
GRADE_MAX = 100
GRADE_SHIFT_FACTOR = 0.4

# Encoding
DEFAULT_QUALITY = 0.9
DEFAULT_OUTPUT_FORMAT = "JPEG"
LOSSY_OUTPUT_FORMATS = {"JPEG": "jpg", "WEBP": "webp"}

# File naming
OUTPUT_FILE_SUFFIX = "_processed"
ARCHIVE_NAME_PREFIX = "BatchBox_Curves_"
ARCHIVE_EXTENSION = ".zip"

# Supported file formats
SUPPORTED_STANDARD_IMAGES = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tiff", ".webp"}

# Settings persistence
SETTINGS_FILE_NAME = "batchbox_settings.json"
STORAGE_KEY = "batchbox_curve_points"
SCHEMA_VERSION = 1

# Settings field names
FIELD_SCHEMA_VERSION = "schema_version"
FIELD_POINTS = "points"
FIELD_COLOR_GRADE = "color_grade"
FIELD_POINT_ID = "id"
FIELD_POINT_X = "x"
FIELD_POINT_Y = "y"
FIELD_TEMPERATURE = "temperature"
FIELD_TINT = "tint"
