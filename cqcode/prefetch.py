"""Image pre-download — send a locally cached copy instead of a remote URL.

Some chat clients fetch remote images slowly or not at all, so a bot can
download the image first and send a ``file://`` reference instead. The
result is always a usable image code: on any failure the original URL is
used and the error is logged.

Downloads share one semaphore per prefetcher (default capacity 4).
Concurrent calls for the same URL are not merged; each may download, and
later calls hit the cache.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Optional

from .builders import image
from .cache import ContentCache, FileContentCache
from .errors import classify_fetch_error
from .transport import RetryTransport, Transport

logger = logging.getLogger("cqcode.prefetch")

DEFAULT_MAX_CONCURRENT = 4


class MediaPrefetcher:
    """Downloads media into a content cache with bounded parallelism."""

    def __init__(
        self,
        cache: ContentCache,
        transport: Transport,
        limiter: Optional[asyncio.Semaphore] = None,
        max_concurrent: int = DEFAULT_MAX_CONCURRENT,
        default_options: Optional[dict[str, Any]] = None,
    ):
        """Initialize the prefetcher.

        Args:
            cache: Object with lookup(key) and store(key, content)
            transport: Object with async get(url, **options) returning a response with .content
            limiter: Shared semaphore; a new one of size max_concurrent is created if omitted
            max_concurrent: Capacity of the created semaphore
            default_options: Transport options applied to every download
        """
        self.cache = cache
        self.transport = transport
        if limiter is None:
            limiter = asyncio.Semaphore(max(1, max_concurrent))
        self.limiter = limiter
        self.default_options = dict(default_options or {})

    async def fetch_to_cache(self, url: str, **options: Any) -> str:
        """Return the local path for url, downloading it on a cache miss.

        Raises whatever the cache or transport raises.
        """
        path = self.cache.lookup(url)
        if path:
            logger.debug(f"Media cache hit for {url}")
            return path

        async with self.limiter:
            response = await self.transport.get(url, **{**self.default_options, **options})
            path = self.cache.store(url, response.content)
        logger.info(f"Pre-downloaded {url} ({len(response.content)} bytes)")
        return path

    async def prefetch_image(self, url: str, type: Optional[str] = None, **options: Any) -> str:
        """Build an image code pointing at a cached copy of url.

        Args:
            url: Remote image URL
            type: "flash", "show" or None
            **options: Extra transport options for this download

        Returns:
            Serialized image code with a file:// URL, or with the original
            url when the download or cache failed.
        """
        try:
            path = await self.fetch_to_cache(url, **options)
            return image(Path(path).resolve().as_uri(), type)
        except Exception as e:
            logger.error(f"cq image pre-download failed for {url}: {classify_fetch_error(e)}")
            logger.error(f"cq image pre-download error detail: {e!r}")
        return image(url, type)


# Default prefetcher, built from settings on first use. Its httpx client
# belongs to one event loop, so a settings-built prefetcher is rebuilt when
# called from a different loop (e.g. successive asyncio.run calls).
_prefetcher: Optional[MediaPrefetcher] = None
_prefetcher_loop: Optional[asyncio.AbstractEventLoop] = None
_prefetcher_from_settings = False


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def get_prefetcher() -> MediaPrefetcher:
    """Get or create the default prefetcher from CQCODE_* settings.

    A prefetcher installed with set_prefetcher is always returned as is.
    """
    global _prefetcher, _prefetcher_loop, _prefetcher_from_settings
    loop = _running_loop()
    if _prefetcher is not None and _prefetcher_from_settings and loop is not None:
        if _prefetcher_loop is None:
            _prefetcher_loop = loop
        elif _prefetcher_loop is not loop:
            logger.debug("Event loop changed, rebuilding default prefetcher")
            _prefetcher = None

    if _prefetcher is None:
        from .config import load_settings

        settings = load_settings()
        transport = RetryTransport(
            retries=settings.download_retries,
            delay=settings.retry_delay,
            timeout=settings.download_timeout,
            headers={"User-Agent": settings.user_agent},
        )
        _prefetcher = MediaPrefetcher(
            FileContentCache(settings.cache_path),
            transport,
            max_concurrent=settings.max_concurrent_downloads,
        )
        _prefetcher_loop = loop
        _prefetcher_from_settings = True
    return _prefetcher


def set_prefetcher(prefetcher: Optional[MediaPrefetcher]):
    """Replace the default prefetcher (None resets it)."""
    global _prefetcher, _prefetcher_loop, _prefetcher_from_settings
    _prefetcher = prefetcher
    _prefetcher_loop = None
    _prefetcher_from_settings = False


async def prefetch_image(url: str, type: Optional[str] = None, **options: Any) -> str:
    """Convenience wrapper around the default prefetcher."""
    return await get_prefetcher().prefetch_image(url, type, **options)
