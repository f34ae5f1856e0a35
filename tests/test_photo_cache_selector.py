"""
Tests for knapsack-based photo cache selection.
"""

import unittest

from PB_Libs.CacheLib.photo_cache_selector import PhotoCacheCandidate, select_photos_to_cache
from PB_Libs.constants import DEFAULT_CACHE_CAPACITY_KB


def make_candidates(sizes, values=(0.2, 0.5, 0.8, 0.3)):
    return [
        PhotoCacheCandidate(id=index + 1, size_in_kb=size, value=value)
        for index, (size, value) in enumerate(zip(sizes, values))
    ]


def ids(selection):
    return [candidate.id for candidate in selection]


class TestSelectPhotosToCache(unittest.TestCase):
    """Test select_photos_to_cache."""

    def test_default_capacity(self):
        self.assertEqual(DEFAULT_CACHE_CAPACITY_KB, 409)

    def test_general_case(self):
        candidates = make_candidates([80, 150, 210, 130])

        selection = select_photos_to_cache(candidates, 409)

        self.assertEqual(ids(selection), [3, 2])

    def test_all_photos_too_big(self):
        candidates = make_candidates([500, 500, 500, 500])

        self.assertEqual(select_photos_to_cache(candidates, 409), [])

    def test_all_photos_fit(self):
        candidates = make_candidates([10, 10, 10, 10])

        selection = select_photos_to_cache(candidates)

        self.assertEqual(ids(selection), [4, 3, 2, 1])

    def test_zero_capacity(self):
        self.assertEqual(select_photos_to_cache(make_candidates([10, 10, 10, 10]), 0), [])

    def test_negative_capacity(self):
        self.assertEqual(select_photos_to_cache(make_candidates([10]), -5), [])

    def test_no_candidates(self):
        self.assertEqual(select_photos_to_cache([], 409), [])

    def test_selection_fits_capacity(self):
        candidates = make_candidates([200, 200, 200, 200], values=(0.1, 0.4, 0.3, 0.2))

        selection = select_photos_to_cache(candidates, 409)

        self.assertEqual(ids(selection), [3, 2])
        self.assertLessEqual(sum(c.size_in_kb for c in selection), 409)

    def test_prefers_many_small_over_one_large(self):
        candidates = [
            PhotoCacheCandidate(id="big", size_in_kb=400, value=0.5),
            PhotoCacheCandidate(id="a", size_in_kb=200, value=0.3),
            PhotoCacheCandidate(id="b", size_in_kb=200, value=0.3),
        ]

        selection = select_photos_to_cache(candidates, 409)

        self.assertEqual(ids(selection), ["b", "a"])

    def test_exact_fit(self):
        candidates = [
            PhotoCacheCandidate(id=1, size_in_kb=409, value=1.0),
            PhotoCacheCandidate(id=2, size_in_kb=1, value=0.1),
        ]

        selection = select_photos_to_cache(candidates, 409)

        self.assertEqual(ids(selection), [1])

    def test_returns_original_candidate_objects(self):
        candidates = make_candidates([10, 10, 10, 10])

        selection = select_photos_to_cache(candidates, 409)

        for candidate in selection:
            self.assertIn(candidate, candidates)


if __name__ == "__main__":
    unittest.main()
