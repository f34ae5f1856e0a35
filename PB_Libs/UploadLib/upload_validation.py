"""
Upload validation.

Checks an uploaded file before it enters the redaction pipeline: only PNG
and JPEG files are accepted, each with its own file size limit, and the
image resolution may not exceed 1920x1080 pixels.

Functions:
    detect_image_type: Identify PNG/JPEG from the file signature
    validate_image_size: Enforce the per-format file size limit
    validate_image_resolution: Enforce the pixel count limit
    validate_upload: Run all checks on raw file bytes
"""

import io
import math
from typing import Tuple

from PIL import Image, UnidentifiedImageError

from PB_Libs.constants import (
    IMAGE_TYPE_JPEG,
    IMAGE_TYPE_PNG,
    JPEG_HEADERS,
    JPEG_LIMIT_MB,
    MAX_UPLOAD_HEIGHT,
    MAX_UPLOAD_WIDTH,
    PNG_HEADERS,
    PNG_LIMIT_MB,
)

_BYTES_PER_MB = 1024 * 1024


class UploadValidationError(ValueError):
    """Raised when an uploaded file is rejected."""


def detect_image_type(data: bytes) -> str:
    """
    Identify the image type from the first 4 bytes.

    Returns:
        'png' or 'jpeg'

    Raises:
        UploadValidationError: If the signature is neither PNG nor JPEG
    """
    header = bytes(data[:4]).hex()

    if header in PNG_HEADERS:
        return IMAGE_TYPE_PNG
    if header in JPEG_HEADERS:
        return IMAGE_TYPE_JPEG

    raise UploadValidationError("Invalid file type. Only jpeg and png images can be uploaded")


def validate_image_size(size_bytes: int, image_type: str) -> None:
    """
    Make sure the file is not too big for its format.

    PNG: 1920 x 1080 x 4 bytes per pixel ~ 8 MB.
    JPEG: 1920 x 1080 x ~8.25 bits per pixel ~ 2 MB.
    """
    limits = {IMAGE_TYPE_PNG: PNG_LIMIT_MB, IMAGE_TYPE_JPEG: JPEG_LIMIT_MB}
    if image_type not in limits:
        raise UploadValidationError(f"Unsupported image type: {image_type}")

    limit_mb = limits[image_type]
    if size_bytes > limit_mb * _BYTES_PER_MB:
        raise UploadValidationError(
            f"File size should not exceed {limit_mb}MB for {image_type} images. "
            f"The size of an uploaded {image_type} image is "
            f"{math.ceil(size_bytes / _BYTES_PER_MB)}MB"
        )


def validate_image_resolution(
    width: int,
    height: int,
    max_width: int = MAX_UPLOAD_WIDTH,
    max_height: int = MAX_UPLOAD_HEIGHT,
) -> None:
    """Reject images with more pixels than max_width x max_height."""
    if width * height > max_width * max_height:
        raise UploadValidationError(
            f"The image resolution can not exceed {max_width}x{max_height}px. "
            f"The uploaded image resolution is {width}x{height}px"
        )


def read_image_size(data: bytes) -> Tuple[int, int]:
    """Read (width, height) from the image header without decoding pixels."""
    try:
        with Image.open(io.BytesIO(data)) as image:
            return image.size
    except (UnidentifiedImageError, OSError) as e:
        raise UploadValidationError(f"Could not read image: {e}") from e


def validate_upload(data: bytes) -> str:
    """
    Run every upload check on raw file bytes.

    Returns:
        Detected image type ('png' or 'jpeg')

    Raises:
        UploadValidationError: On the first failed check
    """
    if not data:
        raise UploadValidationError("Nothing is uploaded")

    image_type = detect_image_type(data)
    validate_image_size(len(data), image_type)
    validate_image_resolution(*read_image_size(data))
    return image_type
