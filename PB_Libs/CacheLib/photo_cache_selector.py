"""
Photo cache selection.

Chooses which recently viewed photos to keep client-side. Each candidate
has a size and a value (fresher photos are worth more); the subset with
the largest total value that fits in the cache capacity is selected with
a 0/1-knapsack dynamic program.

Functions:
    select_photos_to_cache: Value-maximizing subset under a capacity
"""

from dataclasses import dataclass
from typing import Any, List, Sequence

from PB_Libs.constants import DEFAULT_CACHE_CAPACITY_KB


@dataclass(frozen=True)
class PhotoCacheCandidate:
    """A photo that may be cached.

    Attributes:
        id: Photo identifier
        size_in_kb: Storage cost (> 0)
        value: Recency-derived worth (> 0), usually 1 / seconds since creation
    """
    id: Any
    size_in_kb: int
    value: float


def select_photos_to_cache(
    candidates: Sequence[PhotoCacheCandidate],
    capacity_kb: int = DEFAULT_CACHE_CAPACITY_KB,
) -> List[PhotoCacheCandidate]:
    """
    Select the value-maximizing subset of candidates fitting the capacity.

    table[i][c] is the best total value using only the first i candidates
    within capacity c. The best capacity is the first one (scanning upward)
    reaching the maximum of the last row; the subset is then rebuilt from
    the last candidate down, including a candidate only when it strictly
    improves on the row above, so ties favor exclusion.

    Complexity: O(len(candidates) * capacity_kb) time and space.

    Args:
        candidates: Photos to choose from
        capacity_kb: Cache capacity; <= 0 selects nothing

    Returns:
        Selected candidates, last input candidate first
    """
    capacity = int(capacity_kb)
    count = len(candidates)
    if capacity <= 0 or count == 0:
        return []

    table = [[0.0] * (capacity + 1) for _ in range(count + 1)]
    for i in range(1, count + 1):
        size = int(candidates[i - 1].size_in_kb)
        value = candidates[i - 1].value
        previous = table[i - 1]
        current = table[i]
        for c in range(capacity + 1):
            current[c] = previous[c]
            if 0 <= size <= c and previous[c - size] + value > current[c]:
                current[c] = previous[c - size] + value

    last_row = table[count]
    best_value = max(last_row)
    remaining = last_row.index(best_value)

    selected: List[PhotoCacheCandidate] = []
    for i in range(count, 0, -1):
        if table[i][remaining] > table[i - 1][remaining]:
            candidate = candidates[i - 1]
            selected.append(candidate)
            remaining -= int(candidate.size_in_kb)

    return selected
