"""Tools for extracting and localizing the references inside m3u8 playlists."""

from __future__ import annotations

import logging
import re
from typing import List

from ..errors import PlaylistParseError
from ..models import Playlist
from ..utils.http_client import HttpClient
from ..utils.url_utils import is_absolute_url, local_filename

MAP_TAG = "#EXT-X-MAP:"
STREAM_INF_TAG = "#EXT-X-STREAM-INF"
MEDIA_TAG = "#EXT-X-MEDIA:"
IFRAME_STREAM_INF_TAG = "#EXT-X-I-FRAME-STREAM-INF"

MASTER_MARKERS = (STREAM_INF_TAG, MEDIA_TAG, IFRAME_STREAM_INF_TAG)

URI_ATTRIBUTE = re.compile(r'URI="([^"]+)"')


def _is_reference_line(line: str) -> bool:
    return bool(line) and not line.startswith("#")


def _quoted_uri(line: str) -> str | None:
    match = URI_ATTRIBUTE.search(line)
    return match.group(1) if match else None


def parse_playlist(text: str, origin_url: str) -> Playlist:
    """Collects segment and init-map references in document order."""

    references: List[str] = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith(MAP_TAG):
            uri = _quoted_uri(line)
            if uri:
                references.append(uri)
        elif _is_reference_line(line):
            references.append(line)
    return Playlist(raw_text=text, origin_url=origin_url, references=references)


def is_master_playlist(text: str) -> bool:
    """Substring check for master-only tags.

    A marker inside a comment or attribute value also counts.
    """

    return any(marker in text for marker in MASTER_MARKERS)


def extract_all_playlists(text: str) -> List[str]:
    """Returns variant, alternate-media and i-frame playlist references of a master playlist."""

    lines = [raw_line.strip() for raw_line in text.splitlines()]
    playlists: List[str] = []
    for index, line in enumerate(lines):
        if line.startswith(STREAM_INF_TAG):
            if index + 1 < len(lines) and _is_reference_line(lines[index + 1]):
                playlists.append(lines[index + 1])
            else:
                logging.debug("Stream info tag without a playlist line: %s", line)
        elif line.startswith(MEDIA_TAG) or line.startswith(IFRAME_STREAM_INF_TAG):
            uri = _quoted_uri(line)
            if uri:
                playlists.append(uri)
    return playlists


def _localize(reference: str) -> str:
    if not is_absolute_url(reference):
        return reference
    return local_filename(reference, reference)


def rewrite_content(playlist: Playlist) -> str:
    """Points every absolute reference at its flat local filename.

    Relative references, comments and tags are kept as they are. Lines are
    emitted stripped and joined with ``\\n``.
    """

    content = URI_ATTRIBUTE.sub(lambda match: f'URI="{_localize(match.group(1))}"', playlist.raw_text)

    lines: List[str] = []
    for raw_line in content.splitlines():
        line = raw_line.strip()
        lines.append(_localize(line) if _is_reference_line(line) else line)

    rewritten = "\n".join(lines)
    if content.endswith(("\n", "\r")):
        rewritten += "\n"
    return rewritten


class M3U8Parser:
    """Fetches m3u8 playlists and extracts their references."""

    def __init__(self, http_client: HttpClient) -> None:
        self._http_client = http_client

    def parse(self, m3u8_url: str, text: str | None = None) -> Playlist:
        if text is None:
            text = self._http_client.fetch_text(m3u8_url)
        if not text.strip():
            raise PlaylistParseError(f"Playlist at {m3u8_url} is empty")

        playlist = parse_playlist(text, m3u8_url)
        if not playlist.references:
            logging.warning("m3u8 at %s did not contain any references", m3u8_url)
        return playlist
