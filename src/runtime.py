"""
runtime.py

Object graph for one process: a single rotation manager shared by the
matcher, the token guard and the consent flow.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests

from auth.destination import DestinationTokenGuard
from auth.lifecycle import TokenLifecycleManager
from auth.providers.youtube import YouTubeOAuthProvider
from auth.source import SpotifyTokenCache
from auth.store import FileRefreshTokenStore, RefreshTokenStore
from env import Environment, get_env
from providers.spotify.client import SpotifyPlaylistReader
from providers.youtube.api_manager import QuotaRotationManager
from providers.youtube.matcher import TrackMatcher
from providers.youtube.playlist import PlaylistBuilder
from providers.youtube.provider import YouTubeProvider


@dataclass
class Runtime:
    rotation: QuotaRotationManager
    tokens: TokenLifecycleManager
    source: SpotifyPlaylistReader
    destination: YouTubeProvider
    oauth: YouTubeOAuthProvider


def build_runtime(
    env: Optional[Environment] = None,
    store: Optional[RefreshTokenStore] = None,
) -> Runtime:
    env = env or get_env()
    store = store or FileRefreshTokenStore()
    session = requests.Session()

    rotation = QuotaRotationManager(
        env.projects, store, default_project=env.default_project
    )
    guard = DestinationTokenGuard(rotation)
    tokens = TokenLifecycleManager(
        source=SpotifyTokenCache(
            env.spotify_client_id,
            env.spotify_client_secret,
            timeout=env.request_timeout,
            session=session,
        ),
        destination=guard,
    )

    matcher = TrackMatcher(rotation, timeout=env.request_timeout, session=session)
    builder = PlaylistBuilder(tokens, insert_sleep_sec=env.insert_sleep_sec)

    return Runtime(
        rotation=rotation,
        tokens=tokens,
        source=SpotifyPlaylistReader(tokens, timeout=env.request_timeout),
        destination=YouTubeProvider(matcher, builder),
        oauth=YouTubeOAuthProvider(rotation, store, guard=guard),
    )
