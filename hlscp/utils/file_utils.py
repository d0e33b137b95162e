"""Filesystem helpers for preparing the mirror directory and writing files."""

from __future__ import annotations

import os
from pathlib import Path

from ..errors import FilesystemError


def ensure_directory(path: str) -> str:
    """Creates a directory (and its parents) if needed."""

    try:
        Path(path).mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(f"Failed to create directory {path}: {exc}") from exc
    return path


def ensure_parent_directory(path: str) -> str:
    """Creates the folder that will hold ``path``."""

    parent = os.path.dirname(os.path.abspath(path)) or "."
    return ensure_directory(parent)


def write_text(path: str, text: str) -> str:
    ensure_parent_directory(path)
    try:
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)
    except OSError as exc:
        raise FilesystemError(f"Failed to write {path}: {exc}") from exc
    return path

