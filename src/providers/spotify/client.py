"""
client.py

Read-only Spotify playlist access using the client-credentials token.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, List, Optional

import requests
import spotipy
from spotipy.exceptions import SpotifyException

import config
from auth.lifecycle import TokenLifecycleManager
from errors import InvalidInput, SourceReadError
from logger import get_logger
from models import SourcePlaylist, Track
from providers.base import SourceProvider

logger = get_logger(__name__)

_PLAYLIST_URL_RE = re.compile(r"open\.spotify\.com/(?:[^/]+/)?playlist/([A-Za-z0-9]+)")
_PLAYLIST_URI_RE = re.compile(r"^spotify:playlist:([A-Za-z0-9]+)$")


def extract_playlist_id(value: str) -> str:
    """
    Accept a bare playlist id, a spotify:playlist: URI or an open.spotify.com URL.
    """
    raw = (value or "").strip()
    if not raw:
        raise InvalidInput("Playlist id is required")

    for pattern in (_PLAYLIST_URL_RE, _PLAYLIST_URI_RE):
        m = pattern.search(raw)
        if m:
            return m.group(1)

    return raw


def _track_from_item(item: Dict[str, Any]) -> Optional[Track]:
    track = item.get("track")
    # Removed and local tracks come back without a usable track object
    if not track or not track.get("name"):
        return None

    return Track(
        name=track["name"],
        artist=", ".join(a.get("name", "") for a in track.get("artists") or []),
        album=(track.get("album") or {}).get("name", ""),
    )


class SpotifyPlaylistReader(SourceProvider):
    name = config.SOURCE_PLATFORM

    def __init__(
        self,
        tokens: TokenLifecycleManager,
        timeout: int = config.DEFAULT_REQUEST_TIMEOUT_SEC,
        client_factory: Optional[Callable[[str], Any]] = None,
    ):
        self.tokens = tokens
        self.timeout = timeout
        self.client_factory = client_factory or self._build_client

    def _build_client(self, access_token: str) -> spotipy.Spotify:
        return spotipy.Spotify(
            auth=access_token,
            requests_timeout=self.timeout,
            retries=0,
        )

    def fetch_playlist(self, playlist_id: str) -> SourcePlaylist:
        """
        Read a playlist's name, description and every track, following pages.

        Raises:
            InvalidInput: empty playlist id
            AuthFailed: the client-credentials exchange failed
            SourceReadError: Spotify rejected or failed the read
        """
        pid = extract_playlist_id(playlist_id)
        sp = self.client_factory(self.tokens.ensure_source_token())

        try:
            data = sp.playlist(pid)
            tracks: List[Track] = []
            page = data.get("tracks") or {}
            while page:
                for item in page.get("items") or []:
                    track = _track_from_item(item)
                    if track is not None:
                        tracks.append(track)
                page = sp.next(page) if page.get("next") else None
        except (SpotifyException, requests.RequestException) as e:
            logger.error(f"Spotify playlist read failed for {pid}: {e}")
            raise SourceReadError(f"Failed to read Spotify playlist {pid}") from e

        logger.info(f"Read Spotify playlist '{data.get('name', '')}' ({len(tracks)} tracks)")
        return SourcePlaylist(
            name=data.get("name") or "",
            description=data.get("description") or "",
            tracks=tracks,
        )
