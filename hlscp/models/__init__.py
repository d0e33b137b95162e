"""Data models for playlists and resolved download targets."""

from .playlist_models import Playlist, SegmentTarget

__all__ = ["Playlist", "SegmentTarget"]
