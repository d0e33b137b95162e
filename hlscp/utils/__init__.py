"""Utility helpers for HTTP, URL and filesystem operations."""

from .http_client import HttpClient
from .file_utils import ensure_directory, write_text
from .url_utils import local_filename, resolve_url

__all__ = ["HttpClient", "ensure_directory", "write_text", "local_filename", "resolve_url"]
