"""Pydantic models that describe fetched playlists and their download targets."""

from typing import List

from pydantic import BaseModel, ConfigDict


class Playlist(BaseModel):
    """A fetched M3U8 document together with the references found in it."""

    model_config = ConfigDict(frozen=True)

    raw_text: str
    origin_url: str
    references: List[str]


class SegmentTarget(BaseModel):
    """Absolute URL of a referenced resource and the flat filename it is saved as."""

    model_config = ConfigDict(frozen=True)

    url: str
    filename: str
