"""Tests for the response disk cache."""

import json
import tempfile
import unittest
from datetime import UTC, datetime, timedelta
from pathlib import Path

from spacetraveling.cms.cache import DiskCache


class TestDiskCache(unittest.TestCase):
    def test_put_get_roundtrip(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            cache = DiskCache(Path(td) / "cache")
            self.assertIsNone(cache.get("https://x/a"))
            cache.put("https://x/a", {"results": [1, 2]})
            self.assertTrue(cache.exists("https://x/a"))
            self.assertEqual(cache.get("https://x/a"), {"results": [1, 2]})

    def test_max_age(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            cache = DiskCache(Path(td))
            cache.put("https://x/root", {"refs": []})
            self.assertIsNotNone(cache.get("https://x/root", max_age_seconds=60))

            _, meta_path = cache._paths("https://x/root")
            meta = json.loads(meta_path.read_text())
            meta["cached_at"] = (datetime.now(UTC) - timedelta(hours=1)).isoformat()
            meta_path.write_text(json.dumps(meta))

            self.assertIsNone(cache.get("https://x/root", max_age_seconds=60))
            self.assertIsNotNone(cache.get("https://x/root"))

    def test_stats_and_clear(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            cache = DiskCache(Path(td) / "cache")
            self.assertEqual(cache.stats(), (0, 0))
            cache.put("https://x/a", {"a": 1})
            count, size = cache.stats()
            self.assertEqual(count, 2)
            self.assertGreater(size, 0)
            cache.clear()
            self.assertFalse(cache.cache_dir.exists())


if __name__ == "__main__":
    unittest.main()
