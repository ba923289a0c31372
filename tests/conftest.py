"""Pytest configuration and shared fixtures."""

import asyncio

import pytest


class DictCache:
    """In-memory content cache writing each entry to tmp_path."""

    def __init__(self, root):
        self.root = root
        self.paths: dict[str, str] = {}
        self.stored: list[str] = []

    def lookup(self, key):
        return self.paths.get(key)

    def store(self, key, content):
        path = self.root / f"{len(self.paths)}.bin"
        path.write_bytes(content)
        self.paths[key] = str(path)
        self.stored.append(key)
        return str(path)


class FakeResponse:
    def __init__(self, content: bytes):
        self.content = content


class CountingTransport:
    """Transport stub that records how many GETs are in flight at once."""

    def __init__(self, delay: float = 0.01, content: bytes = b"\x89PNG fake"):
        self.delay = delay
        self.content = content
        self.in_flight = 0
        self.max_in_flight = 0
        self.calls: list[str] = []

    async def get(self, url, **options):
        self.calls.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
        finally:
            self.in_flight -= 1
        return FakeResponse(self.content)


@pytest.fixture
def dict_cache(tmp_path):
    return DictCache(tmp_path)


@pytest.fixture
def counting_transport():
    return CountingTransport()


@pytest.fixture
def reset_default_prefetcher():
    """Make sure the module-level default prefetcher is rebuilt per test."""
    from cqcode.prefetch import set_prefetcher

    set_prefetcher(None)
    yield
    set_prefetcher(None)


@pytest.fixture
def image_server():
    """Local HTTP server answering every GET with a few PNG-ish bytes.

    Yields the base URL, e.g. ``http://127.0.0.1:PORT``.
    """
    import threading
    from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

    class Handler(BaseHTTPRequestHandler):
        def do_GET(self):
            body = b"\x89PNG served " + self.path.encode()
            self.send_response(200)
            self.send_header("Content-Type", "image/png")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, format, *args):
            pass

    server = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()
