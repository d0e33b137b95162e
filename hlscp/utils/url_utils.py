"""Helpers that turn playlist references into absolute URLs and flat filenames."""

from __future__ import annotations

import posixpath
from typing import Iterable, List
from urllib.parse import urljoin, urlparse

from ..errors import InvalidReferenceError
from ..models import SegmentTarget


def is_absolute_url(value: str) -> bool:
    """Returns True when ``value`` carries both a scheme and a host."""

    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return bool(parsed.scheme and parsed.netloc)


def resolve_url(reference: str, base_url: str) -> str:
    """Resolves ``reference`` against ``base_url`` (RFC 3986 rules)."""

    if is_absolute_url(reference):
        return reference
    try:
        resolved = urljoin(base_url, reference)
    except ValueError as exc:
        raise InvalidReferenceError(f"Cannot resolve {reference!r} against {base_url!r}: {exc}") from exc
    if not is_absolute_url(resolved):
        raise InvalidReferenceError(f"Cannot resolve {reference!r} against {base_url!r}")
    return resolved


def local_filename(absolute_url: str, fallback: str) -> str:
    """Returns the last path segment of ``absolute_url``, or ``fallback`` if there is none.

    Directory structure is flattened, so two URLs sharing a basename map to
    the same file.
    """

    try:
        path = urlparse(absolute_url).path
    except ValueError:
        return fallback
    return posixpath.basename(path) or fallback


def build_segment_targets(references: Iterable[str], base_url: str) -> List[SegmentTarget]:
    targets: List[SegmentTarget] = []
    for reference in references:
        url = resolve_url(reference, base_url)
        targets.append(SegmentTarget(url=url, filename=local_filename(url, reference)))
    return targets
