"""Shared HTTP helpers for playlist and segment requests."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

import aiohttp
import requests

from ..errors import DownloadError, FilesystemError, NetworkError
from .file_utils import ensure_parent_directory

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_5) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.36"
)

DEFAULT_HEADERS: Dict[str, str] = {
    "accept": "*/*",
    "accept-language": "en-US,en;q=0.9",
}

CHUNK_SIZE = 1 << 14


class HttpClient:
    """Fetches playlists synchronously and segments asynchronously with shared headers."""

    def __init__(self, timeout: float = 30, user_agent: str = DEFAULT_USER_AGENT) -> None:
        self.timeout = timeout
        self._headers = DEFAULT_HEADERS.copy()
        self._headers["user-agent"] = user_agent

        self._session = requests.Session()
        self._session.headers.update(self._headers)

        self._async_session: Optional[aiohttp.ClientSession] = None
        self._async_lock: Optional[asyncio.Lock] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def fetch_text(self, url: str) -> str:
        """Fetch a playlist as text."""

        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            logging.error("Playlist request to %s failed: %s", url, exc)
            raise NetworkError(f"Failed to fetch playlist {url}: {exc}") from exc

        if not response.ok:
            raise DownloadError(f"Playlist {url} returned HTTP {response.status_code}")
        # m3u8 documents are always UTF-8, whatever the Content-Type says
        response.encoding = "utf-8"
        return response.text

    async def download_stream(self, url: str, dest_path: str) -> None:
        """Asynchronously download a segment to ``dest_path``."""

        session = await self._get_async_session()
        try:
            async with session.get(url) as resp:
                if resp.status >= 400:
                    raise DownloadError(f"Segment {url} returned HTTP {resp.status}")
                ensure_parent_directory(dest_path)
                with open(dest_path, "wb") as file_obj:
                    async for chunk in resp.content.iter_chunked(CHUNK_SIZE):
                        if chunk:
                            file_obj.write(chunk)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise NetworkError(f"Failed to fetch segment {url}: {exc!r}") from exc
        except OSError as exc:
            raise FilesystemError(f"Failed to write segment {dest_path}: {exc}") from exc

    async def _get_async_session(self) -> aiohttp.ClientSession:
        current_loop = asyncio.get_running_loop()
        if self._loop is not current_loop:
            # sessions are bound to the loop that created them
            self._async_session = None
            self._async_lock = None

        if self._async_lock is None:
            self._async_lock = asyncio.Lock()
            self._loop = current_loop

        async with self._async_lock:
            if self._async_session and not self._async_session.closed:
                return self._async_session
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            connector = aiohttp.TCPConnector(limit=0)
            self._async_session = aiohttp.ClientSession(
                timeout=timeout,
                connector=connector,
                headers=self._headers.copy(),
            )
        return self._async_session

    async def close_async(self) -> None:
        """Close the aiohttp session bound to the running loop, if any."""

        if self._async_session and not self._async_session.closed:
            await self._async_session.close()
        self._async_session = None

    def close(self) -> None:
        self._session.close()
        if self._async_session and not self._async_session.closed:
            logging.warning("Dropping aiohttp session that was not closed by its event loop")
        self._async_session = None
        self._async_lock = None
        self._loop = None

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
