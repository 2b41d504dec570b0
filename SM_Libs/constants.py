"""
Constants and configuration values for Stamp Maker.

This module centralizes all constant values, magic numbers, and
field names used throughout the library.
"""

# Stamp file constants
STAMP_TYPE = "SYNDICATE"
STAMP_FILE_EXTENSION = ".stamp"
DEFAULT_STAMP_FILENAME = "stamp"
DEFAULT_JSON_INDENT = 2

# Image constants
PIXEL_MODE = "RGBA"
BYTES_PER_PIXEL = 4
PNG_FORMAT = "PNG"
PNG_DATA_URL_PREFIX = "data:image/png;base64,"
SUPPORTED_SOURCE_FORMATS = {".png"}
MAX_UPLOAD_BYTES = 10 * 1024 * 1024

# Color-to-alpha processing
DEFAULT_ROW_CHUNK = 256

# Reference line defaults
BASELINE_OFFSET = 1  # baseline defaults to footerTop + 1
TOP_LINE_OFFSET = 1  # topLine defaults to headerBottom - 1
LETTER_LINE_MIN_SPACING = 1

# Safe filename characters
FILENAME_REPLACEMENT_CHAR = "_"

# Stamp record field names
FIELD_NAME = "name"
FIELD_TYPE = "type"
FIELD_REFERENCE_HEIGHT = "referenceHeight"
FIELD_HEADER_BOTTOM = "headerBottom"
FIELD_FOOTER_TOP = "footerTop"
FIELD_FONT_SIZE = "fontSize"
FIELD_LEFT_START = "leftStart"
FIELD_RIGHT_START = "rightStart"
FIELD_BASE_COORDINATE = "baseCoordinate"
FIELD_OFFSET = "offset"
FIELD_IMAGE_DATA = "imageData"
FIELD_X = "x"
FIELD_Y = "y"

# Reference line field names
FIELD_TEXT_LINE = "textLine"
FIELD_BASELINE = "baseline"
FIELD_TOP_LINE = "topLine"
FIELD_LETTER_LINES = "letterLines"
FIELD_IMAGE_WIDTH = "imageWidth"
FIELD_IMAGE_HEIGHT = "imageHeight"

# Config file
CONFIG_FILE_NAME = ".stamp_maker.json"
