"""Content cache for pre-downloaded media.

The prefetcher only needs two calls: ``lookup(url)`` and
``store(url, content)``. Any object with those methods works; this module
provides the default on-disk implementation, one file per URL named by
the SHA-256 of the URL.
"""

import hashlib
import logging
import os
import re
import tempfile
from typing import Optional, Protocol
from urllib.parse import urlsplit

logger = logging.getLogger("cqcode.cache")

_SUFFIX_RE = re.compile(r'^\.[A-Za-z0-9]{1,8}$')


class ContentCache(Protocol):
    def lookup(self, key: str) -> Optional[str]: ...

    def store(self, key: str, content: bytes) -> str: ...


def _cache_suffix(key: str) -> str:
    """File extension taken from the URL path, or .bin."""
    suffix = os.path.splitext(urlsplit(key).path)[1]
    return suffix.lower() if _SUFFIX_RE.match(suffix) else ".bin"


class FileContentCache:
    """Stores each key's content as a file under `root`."""

    def __init__(self, root: str):
        self.root = os.path.expanduser(root)

    def path_for(self, key: str) -> str:
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return os.path.join(self.root, digest + _cache_suffix(key))

    def lookup(self, key: str) -> Optional[str]:
        """Return the cached file path for key, or None on a miss.

        Empty files are treated as a miss.
        """
        path = self.path_for(key)
        if os.path.isfile(path) and os.path.getsize(path) > 0:
            return path
        return None

    def store(self, key: str, content: bytes) -> str:
        """Write content for key and return its path.

        Raises:
            ValueError: content is empty.
            OSError: the cache directory cannot be written.
        """
        if not content:
            raise ValueError(f"refusing to cache empty content for {key}")
        os.makedirs(self.root, exist_ok=True)
        path = self.path_for(key)
        fd, tmp_path = tempfile.mkstemp(dir=self.root, suffix=".part")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
        logger.debug(f"Cached {len(content)} bytes for {key} at {path}")
        return path

    def clear(self) -> int:
        """Delete every cached file. Returns the number removed."""
        if not os.path.isdir(self.root):
            return 0
        removed = 0
        for name in os.listdir(self.root):
            path = os.path.join(self.root, name)
            if os.path.isfile(path):
                os.unlink(path)
                removed += 1
        logger.info(f"Cleared {removed} cached file(s) from {self.root}")
        return removed
