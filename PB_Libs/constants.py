"""
Constants and configuration values for Photo Blur.

This module centralizes all constant values, magic numbers, and
policy settings used throughout the redaction engine and photo cache.
"""

# Blur radius policy
MAX_BLUR_RADIUS = 31
MIN_BLUR_RADIUS = 1

# Fraction of a region dimension used as the smoothing margin (1/7)
SMOOTHING_MARGIN_DIVISOR = 7

# Default radius estimation: a 100x100 region looks best at radius 12
SAMPLE_AREA_SIZE = 100 * 100
SAMPLE_BEST_BLUR_RADIUS = 12

# Dominant color extraction
DOMINANT_COLOR_PALETTE_SIZE = 5
DOMINANT_COLOR_SAMPLE_SIZE = (256, 256)

# Photo cache
CACHE_KEY_PREFIX = "cache-"
CACHE_BUDGET_KB = 1024
CACHE_BUDGET_SHARE = 0.4
DEFAULT_CACHE_CAPACITY_KB = int(CACHE_BUDGET_KB * CACHE_BUDGET_SHARE)

# Upload limits
MAX_UPLOAD_WIDTH = 1920
MAX_UPLOAD_HEIGHT = 1080
PNG_LIMIT_MB = 8
JPEG_LIMIT_MB = 2
PNG_HEADERS = {"89504e47"}
JPEG_HEADERS = {"ffd8ffe0", "ffd8ffe1", "ffd8ffe2", "ffd8ffe3", "ffd8ffe8"}

# Image formats
IMAGE_TYPE_PNG = "png"
IMAGE_TYPE_JPEG = "jpeg"
DEFAULT_OUTPUT_FORMAT = "PNG"

# Region wire fields
FIELD_POINT_X = "x"
FIELD_POINT_Y = "y"
RECT_POINT_COUNT = 4

# Redaction config field names
FIELD_STRATEGY = "strategy"
FIELD_RADIUS = "radius"
