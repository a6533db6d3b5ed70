"""
playlist.py

Destination playlist assembly: create once, then append items one by one.

Creation failure is fatal. Item failures are logged and skipped; a partial
playlist is still returned.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Iterable

import httplib2
from googleapiclient.errors import HttpError

import config
from auth.errors import AuthError
from auth.lifecycle import TokenLifecycleManager
from errors import PlaylistCreateError
from logger import get_logger
from providers.youtube.client import build_youtube_client

logger = get_logger(__name__)

YouTubeClient = Any


def _http_reason(e: HttpError) -> str:
    try:
        details = e.error_details or []
        if details and isinstance(details, list):
            return str(details[0].get("reason") or e.resp.status)
    except (AttributeError, TypeError):
        pass
    return str(getattr(e.resp, "status", "unknown"))


class PlaylistBuilder:
    def __init__(
        self,
        tokens: TokenLifecycleManager,
        insert_sleep_sec: float = config.DEFAULT_PLAYLIST_INSERT_SLEEP_SEC,
        client_factory: Callable[[Any], YouTubeClient] = build_youtube_client,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.tokens = tokens
        self.insert_sleep_sec = insert_sleep_sec
        self.client_factory = client_factory
        self.sleep = sleep

        self._creds: Any = None
        self._youtube: YouTubeClient = None

    def _client(self) -> YouTubeClient:
        # Token is re-checked before every write; the discovery client is
        # rebuilt only when the active credentials object changes.
        creds = self.tokens.ensure_destination_token()
        if self._youtube is None or creds is not self._creds:
            self._youtube = self.client_factory(creds)
            self._creds = creds
        return self._youtube

    def create_playlist(self, name: str) -> str:
        youtube = self._client()
        try:
            resp = (
                youtube.playlists()
                .insert(
                    part="snippet,status",
                    body={
                        "snippet": {
                            "title": name,
                            "description": config.PLAYLIST_DESCRIPTION,
                        },
                        "status": {"privacyStatus": config.PLAYLIST_PRIVACY_STATUS},
                    },
                )
                .execute()
            )
        except HttpError as e:
            logger.error(f"Playlist creation failed ({_http_reason(e)}): {e}")
            raise PlaylistCreateError("YouTube playlist creation failed") from e
        except (httplib2.HttpLib2Error, OSError) as e:
            logger.error(f"Playlist creation failed: {e}")
            raise PlaylistCreateError("YouTube playlist creation failed") from e

        playlist_id = resp.get("id")
        if not playlist_id:
            raise PlaylistCreateError("YouTube returned no playlist id")

        logger.info(f"Created playlist '{name}' ({playlist_id})")
        return playlist_id

    def insert_item(self, playlist_id: str, video_id: str) -> None:
        youtube = self._client()
        youtube.playlistItems().insert(
            part="snippet",
            body={
                "snippet": {
                    "playlistId": playlist_id,
                    "resourceId": {"kind": "youtube#video", "videoId": video_id},
                }
            },
        ).execute()

    def build(self, name: str, video_ids: Iterable[str]) -> str:
        """
        Create a private playlist named ``name`` holding ``video_ids`` in order.

        Returns the playlist URL, even when some insertions failed.
        """
        playlist_id = self.create_playlist(name)

        added = 0
        failed = 0
        for i, video_id in enumerate(video_ids):
            if i:
                self.sleep(self.insert_sleep_sec)
            try:
                self.insert_item(playlist_id, video_id)
                added += 1
                logger.debug(f"Added video {video_id} to playlist")
            except HttpError as e:
                failed += 1
                logger.error(f"Failed to add video {video_id} ({_http_reason(e)}): {e}")
            except (AuthError, httplib2.HttpLib2Error, OSError) as e:
                failed += 1
                logger.error(f"Failed to add video {video_id}: {e}")

        logger.info(f"Playlist {playlist_id}: {added} added, {failed} failed")
        return config.PLAYLIST_URL.format(playlist_id=playlist_id)
