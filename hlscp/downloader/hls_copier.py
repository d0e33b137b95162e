"""Mirrors a master or media playlist, and every segment it references, into a flat directory."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import List, Optional

from tqdm import tqdm

from ..errors import InvalidUrlError
from ..models import Playlist, SegmentTarget
from ..utils.file_utils import ensure_directory, write_text
from ..utils.http_client import HttpClient
from ..utils.url_utils import build_segment_targets, is_absolute_url, local_filename, resolve_url
from .m3u8_parser import M3U8Parser, extract_all_playlists, is_master_playlist, rewrite_content

DEFAULT_PLAYLIST_NAME = "playlist.m3u8"


class HlsCopier:
    """Downloads segments concurrently and writes playlists pointing at local files."""

    def __init__(
        self,
        http_client: HttpClient,
        source_url: str,
        dest_dir: str,
        workers: Optional[int] = None,
        show_progress: bool = True,
    ) -> None:
        if not is_absolute_url(source_url):
            raise InvalidUrlError(f"Invalid source URL: {source_url!r}")
        self.source_url = source_url
        self.dest_dir = dest_dir
        self.workers = workers or None
        self.show_progress = show_progress
        self._http_client = http_client
        self._parser = M3U8Parser(http_client)

    def copy_hls(self) -> List[str]:
        """Mirrors the source playlist tree and returns the paths written."""

        ensure_directory(self.dest_dir)
        written: List[str] = []

        master_name = local_filename(self.source_url, DEFAULT_PLAYLIST_NAME)
        logging.info("Fetching playlist %s", self.source_url)
        master_text = self._http_client.fetch_text(self.source_url)
        written.append(write_text(os.path.join(self.dest_dir, master_name), master_text))

        if not is_master_playlist(master_text):
            written.extend(self.process_playlist(self.source_url, master_name, content=master_text))
            return written

        stream_playlists = extract_all_playlists(master_text)
        logging.info("Master playlist lists %s sub-playlists", len(stream_playlists))
        for reference in stream_playlists:
            playlist_url = resolve_url(reference, self.source_url)
            playlist_name = local_filename(playlist_url, reference)
            written.extend(self.process_playlist(playlist_url, playlist_name))

        master = Playlist(raw_text=master_text, origin_url=self.source_url, references=stream_playlists)
        write_text(os.path.join(self.dest_dir, master_name), rewrite_content(master))
        return written

    def process_playlist(self, playlist_url: str, local_name: str, content: Optional[str] = None) -> List[str]:
        """Downloads a media playlist's segments, then writes its localized copy."""

        if content is None:
            logging.info("Fetching playlist %s", playlist_url)
        playlist = self._parser.parse(playlist_url, text=content)

        written: List[str] = []
        if playlist.references:
            targets = build_segment_targets(playlist.references, playlist.origin_url)
            written.extend(self.download_segments(targets, label=local_name))

        playlist_path = os.path.join(self.dest_dir, local_name)
        write_text(playlist_path, rewrite_content(playlist))
        logging.info("Saved playlist to %s", playlist_path)
        if content is None:
            written.append(playlist_path)
        return written

    def download_segments(self, targets: List[SegmentTarget], label: str = "") -> List[str]:
        """Downloads every target in one batch; the first failure aborts the batch."""

        if not targets:
            return []
        asyncio.run(self._download_batch(targets, label))
        logging.info("Downloaded %s segments for %s", len(targets), label or "playlist")
        return [os.path.join(self.dest_dir, target.filename) for target in targets]

    async def _download_batch(self, targets: List[SegmentTarget], label: str) -> None:
        sem = asyncio.Semaphore(self.workers) if self.workers else None
        with tqdm(
            total=len(targets),
            unit="seg",
            desc=label or None,
            disable=not self.show_progress,
            leave=False,
        ) as progress:
            tasks = [
                asyncio.create_task(self._download_single(sem, target, progress))
                for target in targets
            ]
            try:
                await asyncio.gather(*tasks)
            except Exception:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise
            finally:
                await self._http_client.close_async()

    async def _download_single(
        self,
        sem: Optional[asyncio.Semaphore],
        target: SegmentTarget,
        progress: tqdm,
    ) -> None:
        dest_path = os.path.join(self.dest_dir, target.filename)
        if sem is None:
            await self._http_client.download_stream(target.url, dest_path)
        else:
            async with sem:
                await self._http_client.download_stream(target.url, dest_path)
        progress.update(1)
        logging.debug("Downloaded %s", target.url)
