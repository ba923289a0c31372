"""HTTP GET with retry, used to download media before sending.

Retries network errors and 429/5xx responses with exponential backoff.
Other 4xx responses are raised immediately. After the last attempt the
final error is raised to the caller.
"""

import asyncio
import logging
from typing import Any, Optional, Protocol

import httpx

logger = logging.getLogger("cqcode.transport")


class Transport(Protocol):
    async def get(self, url: str, **options: Any) -> httpx.Response: ...


def _is_retryable_status(status: int) -> bool:
    return status == 429 or 500 <= status < 600


class RetryTransport:
    """Async GET with retry on top of a shared httpx.AsyncClient."""

    def __init__(
        self,
        retries: int = 3,
        delay: float = 1.0,
        timeout: float = 30.0,
        headers: Optional[dict[str, str]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the transport.

        Args:
            retries: Total attempts per request (minimum 1)
            delay: Base backoff delay in seconds, doubled after each attempt
            timeout: Per-attempt timeout for the owned client
            headers: Default headers for the owned client
            client: Existing client to use instead of creating one
        """
        self.retries = max(1, retries)
        self.delay = delay
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers=headers,
        )

    async def get(self, url: str, **options: Any) -> httpx.Response:
        """GET url, retrying transient failures.

        Args:
            url: URL to fetch
            **options: Passed through to httpx.AsyncClient.get

        Returns:
            The successful response; its body is in ``response.content``.

        Raises:
            httpx.HTTPStatusError: non-retryable status, or retryable status on the last attempt
            httpx.TransportError: network failure on the last attempt
        """
        for attempt in range(self.retries - 1):
            try:
                resp = await self._client.get(url, **options)
            except httpx.TransportError as e:
                logger.warning(
                    f"GET {url} failed ({type(e).__name__}), "
                    f"retrying (attempt {attempt + 1}/{self.retries})"
                )
            else:
                if not _is_retryable_status(resp.status_code):
                    resp.raise_for_status()
                    return resp
                logger.warning(
                    f"GET {url} returned {resp.status_code}, "
                    f"retrying (attempt {attempt + 1}/{self.retries})"
                )
            await asyncio.sleep(self.delay * (2 ** attempt))

        # last attempt: errors go to the caller
        resp = await self._client.get(url, **options)
        resp.raise_for_status()
        return resp

    async def aclose(self):
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "RetryTransport":
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()
