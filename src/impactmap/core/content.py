"""File content lookup with LRU caching."""

import logging
import threading
from collections import OrderedDict
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)


ENCODINGS: Tuple[str, ...] = ("utf-8", "cp1252")


class FileContentLoader:
    """Reads repository files as text, caching recently used contents.

    ``get`` returns ``None`` for anything that cannot be read or decoded so
    callers can treat unavailable content as "nothing to analyze".
    """

    def __init__(self, root: Union[str, Path], cache_enabled: bool = True, cache_size: int = 512):
        self.root = Path(root).resolve()
        self.cache_enabled = cache_enabled
        self.cache_size = cache_size

        self._cache: "OrderedDict[str, Optional[str]]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, path: str) -> Optional[str]:
        """Return the text content of a repository-relative path."""
        if self.cache_enabled:
            with self._lock:
                if path in self._cache:
                    # Most recently used goes last
                    self._cache.move_to_end(path)
                    self._hits += 1
                    return self._cache[path]
                self._misses += 1

        content = self._read(path)

        if self.cache_enabled and self.cache_size > 0:
            with self._lock:
                self._cache[path] = content
                self._cache.move_to_end(path)
                while len(self._cache) > self.cache_size:
                    self._cache.popitem(last=False)

        return content

    def __call__(self, path: str) -> Optional[str]:
        return self.get(path)

    def _read(self, path: str) -> Optional[str]:
        """Read a file trying each supported encoding in turn."""
        full_path = (self.root / path).resolve()
        if full_path != self.root and self.root not in full_path.parents:
            logger.warning("Refusing to read %s outside of %s", path, self.root)
            return None

        try:
            raw = full_path.read_bytes()
        except OSError as e:
            logger.debug("Cannot read %s: %s", path, e)
            return None

        for encoding in ENCODINGS:
            try:
                return raw.decode(encoding)
            except UnicodeDecodeError:
                continue

        logger.debug("Could not decode %s with any supported encoding", path)
        return None

    def clear_cache(self):
        """Clear the content cache."""
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    def get_cache_stats(self) -> Dict[str, object]:
        """Get cache statistics."""
        with self._lock:
            return {
                'cached_items': len(self._cache),
                'hits': self._hits,
                'misses': self._misses,
                'cache_size_limit': self.cache_size,
                'cache_enabled': self.cache_enabled,
            }


class MappingContentLoader:
    """Content lookup over contents that are already in memory."""

    def __init__(self, contents: Mapping[str, str]):
        self._contents = dict(contents)

    def get(self, path: str) -> Optional[str]:
        return self._contents.get(path)

    def __call__(self, path: str) -> Optional[str]:
        return self.get(path)

    def __len__(self) -> int:
        return len(self._contents)
