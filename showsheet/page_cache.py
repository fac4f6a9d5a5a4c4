"""
Persistent cache of extracted media metadata.

Maps a lower-cased media URL to the MediaMetadata extracted from it. The
whole cache is loaded once when the build starts, grows in memory, and is
written back once at the end.

Entries never expire. Stale metadata stays until it is removed by hand
(see scripts/prune_cache.py).
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterator, Optional

from showsheet.exceptions import CacheError
from showsheet.io_utils import write_json
from showsheet.models import MediaMetadata

logger = logging.getLogger(__name__)


def cache_key(url: str) -> str:
    """Normalize a media URL into its cache key."""
    return url.strip().lower()


class PageCache:
    """
    Key/value store of MediaMetadata backed by a JSON file.

    The cache is constructed explicitly and passed to the media client, so
    tests can hand in an empty or pre-populated instance.
    """

    def __init__(self, path: Optional[Path] = None):
        """
        Args:
            path: JSON file backing the cache. None keeps the cache in memory only.
        """
        self.path = Path(path) if path is not None else None
        self._entries: Dict[str, MediaMetadata] = {}

    def get(self, url: str) -> Optional[MediaMetadata]:
        return self._entries.get(cache_key(url))

    def put(self, url: str, metadata: MediaMetadata) -> None:
        self._entries[cache_key(url)] = metadata

    def remove(self, url: str) -> bool:
        return self._entries.pop(cache_key(url), None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, url: str) -> bool:
        return cache_key(url) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def items(self):
        return list(self._entries.items())

    def load_all(self) -> int:
        """
        Load every entry from the backing file, replacing in-memory state.

        A missing or unparsable file is not an error: the cache starts empty
        and the condition is logged.

        Returns:
            Number of entries loaded
        """
        self._entries = {}
        if self.path is None:
            return 0

        if not self.path.exists():
            logger.info(f"No media cache at {self.path}, starting empty")
            return 0

        try:
            data = json.loads(self.path.read_text(encoding='utf-8'))
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read media cache {self.path}, starting empty: {e}")
            return 0

        if not isinstance(data, dict):
            logger.warning(f"Media cache {self.path} is not a JSON object, starting empty")
            return 0

        for key, value in data.items():
            if not isinstance(value, dict):
                logger.debug(f"Skipping malformed cache entry for {key}")
                continue
            self._entries[cache_key(key)] = MediaMetadata.from_dict(value)

        logger.info(f"Loaded {len(self._entries)} cached media entries from {self.path}")
        return len(self._entries)

    def to_dict(self) -> Dict[str, dict]:
        return {key: value.to_dict() for key, value in self._entries.items()}

    def persist_all(self) -> None:
        """
        Overwrite the backing file with the full in-memory cache.

        Raises:
            CacheError: if the file cannot be written
        """
        if self.path is None:
            return
        try:
            write_json(self.path, self.to_dict())
        except OSError as e:
            raise CacheError(f"Failed to write media cache {self.path}: {e}") from e
        logger.info(f"Saved {len(self._entries)} media cache entries to {self.path}")

    def __repr__(self) -> str:
        return f"PageCache(path={self.path}, entries={len(self._entries)})"
