"""
models.py

Plain value types shared by the source reader, matcher and playlist builder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Track:
    name: str
    artist: str
    album: str = ""

    @property
    def is_valid(self) -> bool:
        return bool((self.name or "").strip()) and bool((self.artist or "").strip())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Track":
        return cls(
            name=str(data.get("name") or ""),
            artist=str(data.get("artist") or ""),
            album=str(data.get("album") or ""),
        )

    def as_dict(self) -> Dict[str, str]:
        return {"name": self.name, "artist": self.artist, "album": self.album}


@dataclass(frozen=True)
class VideoCandidate:
    id: str
    title: str
    description: str
    thumbnail_width: int
    thumbnail_height: int

    @property
    def is_landscape(self) -> bool:
        if self.thumbnail_height <= 0:
            return False
        return self.thumbnail_width / self.thumbnail_height > 1

    @classmethod
    def from_search_item(cls, item: Dict[str, Any]) -> Optional["VideoCandidate"]:
        """
        Build a candidate from a search.list item.

        Returns None for items without a video id (channels, playlists).
        """
        video_id = (item.get("id") or {}).get("videoId")
        if not video_id:
            return None

        snippet = item.get("snippet") or {}
        thumb = (snippet.get("thumbnails") or {}).get("default") or {}

        return cls(
            id=video_id,
            title=snippet.get("title") or "",
            description=snippet.get("description") or "",
            thumbnail_width=int(thumb.get("width") or 0),
            thumbnail_height=int(thumb.get("height") or 0),
        )


@dataclass(frozen=True)
class Project:
    search_api_key: str
    oauth_client_id: str
    oauth_client_secret: str
    oauth_redirect_uri: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        return cls(
            search_api_key=str(data.get("apiKey") or ""),
            oauth_client_id=str(data.get("clientId") or ""),
            oauth_client_secret=str(data.get("clientSecret") or ""),
            oauth_redirect_uri=str(data.get("redirectUri") or ""),
        )


@dataclass(frozen=True)
class SourcePlaylist:
    name: str
    description: str
    tracks: List[Track] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "tracks": [t.as_dict() for t in self.tracks],
        }


@dataclass(frozen=True)
class ConversionResult:
    playlist_url: str
    matched: int
    skipped: int
