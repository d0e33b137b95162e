"""Pytest fixtures shared by the mirror tests."""

import asyncio

import pytest

from hlscp.errors import DownloadError, NetworkError


class FakeHttpClient:
    """In-memory stand-in for HttpClient keyed by absolute URL."""

    def __init__(self, texts=None, blobs=None, failing=None, delay=0.0, delays=None):
        self.texts = dict(texts or {})
        self.blobs = dict(blobs or {})
        self.failing = set(failing or ())
        self.delay = delay
        self.delays = dict(delays or {})
        self.fetched = []
        self.downloaded = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.async_closes = 0

    def fetch_text(self, url):
        self.fetched.append(url)
        if url not in self.texts:
            raise DownloadError(f"Playlist {url} returned HTTP 404")
        return self.texts[url]

    async def download_stream(self, url, dest_path):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(url, self.delay))
            if url in self.failing:
                raise NetworkError(f"Failed to fetch segment {url}")
            if url not in self.blobs:
                raise DownloadError(f"Segment {url} returned HTTP 404")
            with open(dest_path, "wb") as handle:
                handle.write(self.blobs[url])
            self.downloaded.append(url)
        finally:
            self.in_flight -= 1

    async def close_async(self):
        self.async_closes += 1


MASTER = """#EXTM3U
#EXT-X-VERSION:3
#EXT-X-STREAM-INF:BANDWIDTH=800000,RESOLUTION=640x360
low.m3u8
"""

LOW = """#EXTM3U
#EXT-X-TARGETDURATION:10
#EXT-X-MEDIA-SEQUENCE:0
#EXTINF:10.0,
seg0.ts
#EXTINF:10.0,
seg1.ts
#EXT-X-ENDLIST
"""


@pytest.fixture
def fake_client_factory():
    return FakeHttpClient


@pytest.fixture
def master_text():
    return MASTER


@pytest.fixture
def media_text():
    return LOW


@pytest.fixture
def output_dir(tmp_path):
    """Destination directory for a mirror run (not created up front)."""
    return tmp_path / "mirror"
