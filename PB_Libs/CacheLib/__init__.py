"""
CacheLib - Client-side photo cache

Selects which recently viewed photos to keep under a storage budget and
owns the key/value store they are written to.
"""

from PB_Libs.CacheLib.photo_cache_selector import PhotoCacheCandidate, select_photos_to_cache
from PB_Libs.CacheLib.photo_cache import (
    CacheConfig,
    PhotoCache,
    PhotoMetadata,
    cache_key,
    candidates_from_metadata,
    refresh_photo_cache,
)

__all__ = [
    "PhotoCacheCandidate",
    "select_photos_to_cache",
    "CacheConfig",
    "PhotoCache",
    "PhotoMetadata",
    "cache_key",
    "candidates_from_metadata",
    "refresh_photo_cache",
]
