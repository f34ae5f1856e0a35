"""
PB_Libs - Photo Blur Library Modules

This package contains the redaction core of the Photo Blur project,
organized into specialized sub-packages:

- ImageEditingLib: Pixel buffer, color accumulator and pixel operations
- RegionLib: Validation of untrusted region descriptors
- RedactionLib: Blur and fill strategies and the redaction engine
- CacheLib: Knapsack-based client-side photo cache
- UploadLib: Upload type, size and resolution checks
"""

__version__ = "0.1.0"
