"""
File cache for fetched page text.

Entries are keyed by the md5 of the URL and considered fresh for a fixed
number of minutes after they were written.
"""

import hashlib
import logging
import time
from pathlib import Path
from typing import Optional

from tornelo_ranking.fetcher import PageFetcher

logger = logging.getLogger(__name__)


class PageCache:

    def __init__(self, directory: str, max_age_minutes: int = 30):
        self.directory = Path(directory)
        self.max_age_minutes = max_age_minutes

    @property
    def enabled(self) -> bool:
        return self.max_age_minutes > 0

    def path_for(self, url: str) -> Path:
        digest = hashlib.md5(url.encode("utf-8")).hexdigest()
        return self.directory / f"tornelo_cache_{digest}.txt"

    def get(self, url: str) -> Optional[str]:
        """Cached text for `url`, or None when missing, stale or disabled."""
        if not self.enabled:
            return None
        path = self.path_for(url)
        if not path.is_file():
            return None
        age_seconds = time.time() - path.stat().st_mtime
        if age_seconds >= self.max_age_minutes * 60:
            return None
        return path.read_text(encoding="utf-8")

    def put(self, url: str, text: str):
        if not self.enabled:
            return
        path = self.path_for(url)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")


class CachingFetcher(PageFetcher):
    """Serve fresh cached text, otherwise delegate and store the result."""

    def __init__(self, fetcher: PageFetcher, cache: PageCache):
        self.fetcher = fetcher
        self.cache = cache

    def fetch_text(self, url: str) -> str:
        text = self.cache.get(url)
        if text is not None:
            logger.info(f"Cache HIT for {url}")
            return text

        logger.info(f"Cache MISS for {url}")
        text = self.fetcher.fetch_text(url)
        self.cache.put(url, text)
        return text

    def close(self):
        self.fetcher.close()
