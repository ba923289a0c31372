"""Short summaries of download failures for log lines."""

import asyncio

import httpx


def classify_fetch_error(e: Exception) -> str:
    """Classify a pre-download exception into a one-line summary.

    Covers the transport (httpx) and the cache (OSError, ValueError);
    anything else is reported by type name.
    """
    if isinstance(e, httpx.HTTPStatusError):
        code = e.response.status_code
        if code == 404:
            return "remote file not found (HTTP 404)"
        if code in (401, 403):
            return f"access denied (HTTP {code})"
        if code == 429:
            return "rate limited by remote host (HTTP 429)"
        if 500 <= code < 600:
            return f"remote server error (HTTP {code})"
        return f"HTTP {code}"

    if isinstance(e, httpx.TimeoutException):
        return "request timed out"
    if isinstance(e, httpx.ConnectError):
        return "cannot connect to remote host"
    if isinstance(e, httpx.TooManyRedirects):
        return "too many redirects"
    if isinstance(e, httpx.InvalidURL):
        return "invalid URL"
    if isinstance(e, httpx.TransportError):
        return f"network error ({type(e).__name__})"

    if isinstance(e, asyncio.TimeoutError):
        return "request timed out"

    if isinstance(e, PermissionError):
        return "cache directory not writable"
    if isinstance(e, OSError):
        return f"cache I/O error ({e.strerror or type(e).__name__})"
    if isinstance(e, ValueError):
        return f"invalid content ({e})"

    return f"unexpected error ({type(e).__name__})"
