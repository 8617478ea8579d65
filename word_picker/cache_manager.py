"""Cache management for dictionary lookups.

Dictionary responses are cached in a requests_cache SQLite database. This
module creates that session and lets individual words be evicted.
"""

from datetime import timedelta
from pathlib import Path
from urllib.parse import unquote, urlparse

import requests_cache
from loguru import logger


class CacheManager:
    """Manager for the HTTP response cache."""

    CACHE_NAME = "word_picker_cache"
    CACHE_BACKEND = "sqlite"
    CACHE_EXPIRE_AFTER = timedelta(days=30)

    def __init__(self, cache_dir: str | None = None):
        """Create the cached session, optionally inside cache_dir."""
        if cache_dir:
            Path(cache_dir).mkdir(parents=True, exist_ok=True)
            self.cache_name = str(Path(cache_dir) / self.CACHE_NAME)
        else:
            self.cache_name = self.CACHE_NAME

        self.session = requests_cache.CachedSession(
            self.cache_name,
            backend=self.CACHE_BACKEND,
            expire_after=self.CACHE_EXPIRE_AFTER,
        )
        logger.debug(f"Using response cache at {self.cache_name}")

    def bust_word_cache(self, word: str) -> int:
        """Remove cached lookups for a specific word.

        Returns:
            Number of cache entries deleted

        Raises:
            ValueError: If word is empty or whitespace
        """
        if not word or not word.strip():
            msg = "word cannot be empty"
            raise ValueError(msg)

        word = word.strip()
        logger.debug(f"Busting cache for word: '{word}'")

        cache = self.session.cache
        keys_to_delete = [
            key
            for key, response in cache.responses.items()
            if self._is_word_lookup_url(response.url, word)
        ]

        if keys_to_delete:
            cache.delete(*keys_to_delete)
            logger.info(f"Deleted {len(keys_to_delete)} cache entries for word '{word}'")
        else:
            logger.info(f"No cache entries found for word '{word}'")

        return len(keys_to_delete)

    def _is_word_lookup_url(self, url: str, word: str) -> bool:
        """Check whether url is a /words/{word} lookup."""
        path = unquote(urlparse(url).path).rstrip("/").lower()
        return path.endswith(f"/words/{word.lower()}")

    def clear_all_cache(self) -> None:
        logger.debug("Clearing all cache entries")
        self.session.cache.clear()
        logger.info("All cache entries cleared")

    def get_cache_info(self) -> dict:
        """Get information about the cache.

        Returns:
            Dictionary with cache statistics
        """
        return {
            "cache_name": self.cache_name,
            "backend": self.CACHE_BACKEND,
            "response_count": len(self.session.cache.responses),
            "expire_after": str(self.CACHE_EXPIRE_AFTER),
        }
