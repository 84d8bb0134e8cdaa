"""Disk cache for content API responses."""

from __future__ import annotations

import hashlib
import json
import logging
import shutil
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class DiskCache:
    """JSON response cache keyed by URL hash.

    Structure: {cache_dir}/{key[:2]}/{key}.json
    Metadata stored alongside as {key}.meta.json

    Search URLs carry the content ref, so their entries never go stale; only
    the API root needs a max age.
    """

    def __init__(self, cache_dir: Path):
        self.cache_dir = cache_dir

    def _paths(self, url: str) -> tuple[Path, Path]:
        key = hashlib.sha256(url.encode()).hexdigest()
        base = self.cache_dir / key[:2]
        return base / f"{key}.json", base / f"{key}.meta.json"

    def get(self, url: str, max_age_seconds: int | None = None) -> Any | None:
        """Get the cached JSON payload for a URL.

        Args:
            url: The URL to look up
            max_age_seconds: If set, only return if cache is younger than this

        Returns:
            Decoded payload or None if not found/expired/unreadable
        """
        path, meta_path = self._paths(url)
        if not path.exists():
            return None

        if max_age_seconds is not None:
            try:
                meta = json.loads(meta_path.read_text(encoding="utf-8"))
                cached_at = datetime.fromisoformat(meta["cached_at"])
            except (OSError, KeyError, ValueError):
                return None
            age = (datetime.now(UTC) - cached_at).total_seconds()
            if age > max_age_seconds:
                return None

        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return None
        logger.debug("Cache hit for %s", url)
        return payload

    def put(self, url: str, payload: Any) -> None:
        """Store a JSON payload. Write failures leave the cache untouched."""
        path, meta_path = self._paths(url)
        body = json.dumps(payload, sort_keys=True)
        meta = {
            "url": url,
            "cached_at": datetime.now(UTC).isoformat(),
            "size": len(body),
        }
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(body, encoding="utf-8")
            meta_path.write_text(json.dumps(meta, indent=2, sort_keys=True), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not write cache entry for %s: %s", url, e)

    def exists(self, url: str) -> bool:
        """Check if URL is in cache."""
        return self._paths(url)[0].exists()

    def stats(self) -> tuple[int, int]:
        """Return (file_count, total_bytes) for everything under the cache dir."""
        if not self.cache_dir.exists():
            return 0, 0
        count = 0
        total = 0
        for f in self.cache_dir.rglob("*"):
            if f.is_file():
                count += 1
                total += f.stat().st_size
        return count, total

    def clear(self) -> None:
        """Remove every cached entry."""
        if self.cache_dir.exists():
            shutil.rmtree(self.cache_dir)
