"""
Tests for the thread-safe visited set.
"""

import threading
import unittest
from concurrent.futures import ThreadPoolExecutor

from cache_warmer.core.visited import VisitedSet


class TestVisitedSet(unittest.TestCase):
    def test_first_claim_wins(self):
        visited = VisitedSet()
        self.assertTrue(visited.try_claim("http://site.test/a"))
        self.assertFalse(visited.try_claim("http://site.test/a"))
        self.assertFalse(visited.try_claim("http://site.test/a"))

    def test_claims_are_case_insensitive(self):
        visited = VisitedSet()
        self.assertTrue(visited.try_claim("http://site.test/About"))
        self.assertFalse(visited.try_claim("HTTP://SITE.TEST/about"))
        self.assertIn("http://site.test/ABOUT", visited)

    def test_distinct_urls_all_claimed(self):
        visited = VisitedSet()
        urls = [f"http://site.test/{i}" for i in range(10)]
        self.assertTrue(all(visited.try_claim(u) for u in urls))
        self.assertEqual(len(visited), 10)

    def test_contains_non_string(self):
        self.assertNotIn(42, VisitedSet())

    def test_concurrent_claims_single_winner(self):
        visited = VisitedSet()
        threads = 32
        barrier = threading.Barrier(threads)

        def claim(_):
            barrier.wait()
            return visited.try_claim("http://site.test/contended")

        with ThreadPoolExecutor(max_workers=threads) as pool:
            results = list(pool.map(claim, range(threads)))

        self.assertEqual(results.count(True), 1)
        self.assertEqual(len(visited), 1)

    def test_concurrent_mixed_claims_no_lost_updates(self):
        visited = VisitedSet()
        urls = [f"http://site.test/page{i}" for i in range(200)]

        def claim_all(_):
            return sum(1 for u in urls if visited.try_claim(u))

        with ThreadPoolExecutor(max_workers=8) as pool:
            wins = sum(pool.map(claim_all, range(8)))

        self.assertEqual(wins, len(urls))
        self.assertEqual(len(visited), len(urls))

    def test_snapshot_is_immutable_copy(self):
        visited = VisitedSet()
        visited.try_claim("http://site.test/a")
        snap = visited.snapshot()
        visited.try_claim("http://site.test/b")
        self.assertEqual(snap, frozenset({"http://site.test/a"}))


if __name__ == "__main__":
    unittest.main()
