"""Playlist parsing and rendition mirroring."""

from .hls_copier import HlsCopier
from .m3u8_parser import M3U8Parser

__all__ = ["M3U8Parser", "HlsCopier"]
