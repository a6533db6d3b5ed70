"""
source.py

Client-credentials token for the Spotify Web API (read-only source).

A single shared token, refreshed only when absent or past its expiry.
Independent of YouTube project rotation.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Optional

import requests

import config
from auth.base import TokenState, classify_token, utcnow
from auth.errors import AuthFailed, AuthInvalid
from logger import get_logger

logger = get_logger(__name__)


class SpotifyTokenCache:
    def __init__(
        self,
        client_id: str,
        client_secret: str,
        timeout: int = config.DEFAULT_REQUEST_TIMEOUT_SEC,
        session: Optional[requests.Session] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.timeout = timeout
        self.session = session or requests.Session()
        self.clock = clock

        self.access_token: Optional[str] = None
        self.expires_at: Optional[datetime] = None

    def state(self) -> TokenState:
        return classify_token(self.access_token, self.expires_at, self.clock())

    def ensure(self) -> str:
        state = self.state()
        if state is not TokenState.VALID:
            logger.debug(f"Spotify access token {state.value}, requesting a new one")
            return self._exchange()
        return self.access_token

    def _exchange(self) -> str:
        if not self.client_id or not self.client_secret:
            raise AuthInvalid("SPOTIFY_CLIENT_ID / SPOTIFY_CLIENT_SECRET are not configured")

        requested_at = self.clock()
        try:
            response = self.session.post(
                config.SPOTIFY_TOKEN_URL,
                data={"grant_type": "client_credentials"},
                auth=(self.client_id, self.client_secret),
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
            token = payload["access_token"]
            ttl = int(payload["expires_in"])
        except (requests.RequestException, ValueError, KeyError, TypeError) as e:
            logger.error(f"Spotify token exchange failed: {e}")
            raise AuthFailed("Spotify access token exchange failed") from e

        if not token:
            raise AuthFailed("Spotify token response carried no access token")

        self.access_token = token
        self.expires_at = requested_at + timedelta(seconds=ttl)
        logger.info(f"Spotify access token refreshed (valid for {ttl}s)")
        return token
