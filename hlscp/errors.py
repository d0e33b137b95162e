"""Exceptions raised while mirroring a rendition set."""

from __future__ import annotations


class HlsError(Exception):
    """Base class for every failure that aborts a mirror run."""


class InvalidUrlError(HlsError):
    """Raised when the source argument or a derived URL cannot be parsed."""


class InvalidReferenceError(InvalidUrlError):
    """Raised when a playlist reference cannot be turned into an absolute URL."""


class NetworkError(HlsError):
    """Raised on transport-level failures while fetching a playlist or segment."""


class FilesystemError(HlsError):
    """Raised when creating a directory or writing a file fails."""


class PlaylistParseError(HlsError):
    """Raised for playlist documents that cannot be mirrored at all."""


class DownloadError(HlsError):
    """Raised when a fetch completes but the response is not usable (non-2xx)."""
