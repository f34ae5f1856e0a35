"""
UploadLib - Upload validation

Accepts PNG and JPEG uploads within the size and resolution limits.
"""

from PB_Libs.UploadLib.upload_validation import (
    UploadValidationError,
    detect_image_type,
    validate_image_size,
    validate_image_resolution,
    read_image_size,
    validate_upload,
)

__all__ = [
    "UploadValidationError",
    "detect_image_type",
    "validate_image_size",
    "validate_image_resolution",
    "read_image_size",
    "validate_upload",
]
