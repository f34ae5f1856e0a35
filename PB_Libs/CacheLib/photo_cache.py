"""
Client-side photo cache.

The cache is an explicit key/value store ("cache-<photo id>" -> serialized
image). It is never updated incrementally: every refresh selects a new set
of photos, clears the store and writes the new entries.

Classes:
    CacheConfig: Cache budget configuration
    PhotoMetadata: Photo description coming from the history listing
    PhotoCache: Owned key/value store

Functions:
    cache_key: Build the storage key for a photo id
    candidates_from_metadata: Derive recency values for the selector
    refresh_photo_cache: Select, serialize and rewrite the cache
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from PB_Libs.CacheLib.photo_cache_selector import PhotoCacheCandidate, select_photos_to_cache
from PB_Libs.constants import CACHE_BUDGET_KB, CACHE_BUDGET_SHARE, CACHE_KEY_PREFIX

logger = logging.getLogger(__name__)


@dataclass
class CacheConfig:
    """Configuration for the photo cache.

    Attributes:
        budget_kb: Total client storage budget
        share: Fraction of the budget the photo cache may use
    """
    budget_kb: int = CACHE_BUDGET_KB
    share: float = CACHE_BUDGET_SHARE

    @property
    def capacity_kb(self) -> int:
        return int(self.budget_kb * self.share)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "budget_kb": self.budget_kb,
            "share": self.share,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CacheConfig":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                    if k in cls.__dataclass_fields__}
        return cls(**filtered)


@dataclass(frozen=True)
class PhotoMetadata:
    id: Any
    size_in_kb: int
    date_created: datetime


def cache_key(photo_id: Any) -> str:
    return f"{CACHE_KEY_PREFIX}{photo_id}"


def _as_aware(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def candidates_from_metadata(
    photos: Iterable[PhotoMetadata],
    now: Optional[datetime] = None,
) -> List[PhotoCacheCandidate]:
    """
    Turn photo metadata into selector candidates.

    value = 1 / seconds since creation. Photos younger than one second
    (or dated in the future) count as one second old.
    Naive datetimes are treated as UTC.
    """
    now = _as_aware(now or datetime.now(timezone.utc))

    candidates = []
    for photo in photos:
        age_seconds = (now - _as_aware(photo.date_created)).total_seconds()
        candidates.append(
            PhotoCacheCandidate(
                id=photo.id,
                size_in_kb=int(photo.size_in_kb),
                value=1.0 / max(1.0, age_seconds),
            )
        )
    return candidates


class PhotoCache:
    """
    Key/value store for serialized photos.

    Example:
        >>> cache = PhotoCache()
        >>> cache.clear_and_repopulate([(7, "data:image/png;base64,...")])
        >>> cache.keys()
        ['cache-7']
    """

    def __init__(self, storage: Optional[Dict[str, str]] = None):
        # Callers may pass their own dict-like backing store
        self._storage: Dict[str, str] = storage if storage is not None else {}

    def clear_and_repopulate(self, entries: Iterable[Tuple[Any, str]]) -> int:
        """
        Replace the whole cache content.

        Args:
            entries: (photo_id, serialized_image) pairs

        Returns:
            Number of entries written
        """
        self._storage.clear()
        written = 0
        for photo_id, serialized in entries:
            self._storage[cache_key(photo_id)] = str(serialized)
            written += 1
        return written

    def get(self, photo_id: Any) -> Optional[str]:
        return self._storage.get(cache_key(photo_id))

    def keys(self) -> List[str]:
        return list(self._storage.keys())

    def as_dict(self) -> Dict[str, str]:
        return dict(self._storage)

    def __contains__(self, photo_id: Any) -> bool:
        return cache_key(photo_id) in self._storage

    def __len__(self) -> int:
        return len(self._storage)

    def __iter__(self) -> Iterator[str]:
        return iter(self._storage)


def refresh_photo_cache(
    cache: PhotoCache,
    photos: Sequence[PhotoMetadata],
    serialize: Callable[[PhotoMetadata], str],
    now: Optional[datetime] = None,
    capacity_kb: Optional[int] = None,
) -> List[Any]:
    """
    Rebuild the cache from scratch.

    Selects the freshest photos fitting the capacity, serializes each of
    them with `serialize`, then clears the cache and writes the entries.
    Serialization happens before the cache is cleared, so a failing
    serializer leaves the previous content in place.

    Args:
        cache: Cache to rewrite
        photos: Candidate photos
        serialize: Callable producing the stored string for a photo
        now: Reference time for recency values (defaults to now, UTC)
        capacity_kb: Cache capacity (defaults to CacheConfig().capacity_kb)

    Returns:
        Ids of the cached photos, in selection order
    """
    if capacity_kb is None:
        capacity_kb = CacheConfig().capacity_kb

    by_id: Mapping[Any, PhotoMetadata] = {photo.id: photo for photo in photos}
    selected = select_photos_to_cache(candidates_from_metadata(photos, now), capacity_kb)

    entries = [(candidate.id, serialize(by_id[candidate.id])) for candidate in selected]
    cache.clear_and_repopulate(entries)

    logger.info(f"Photo cache rebuilt with {len(entries)} of {len(photos)} photo(s)")
    return [photo_id for photo_id, _ in entries]
