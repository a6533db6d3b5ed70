"""
destination.py

OAuth access token for the YouTube Data API (write side).

The guard never caches credentials of its own: it always inspects the client
currently owned by the rotation manager, so a rotation is picked up by the
next ensure() without any extra bookkeeping.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials

from auth.base import TokenState, classify_token, utcnow
from auth.errors import AuthFailed, AuthInvalid
from logger import get_logger

logger = get_logger(__name__)


class DestinationTokenGuard:
    def __init__(
        self,
        rotation: Any,
        clock: Callable[[], datetime] = utcnow,
        request_factory: Callable[[], Any] = Request,
    ):
        self.rotation = rotation
        self.clock = clock
        self.request_factory = request_factory

    def state(self) -> TokenState:
        creds = self.rotation.current_client()
        return classify_token(creds.token, creds.expiry, self.clock())

    def ensure(self) -> Credentials:
        creds = self.rotation.current_client()
        state = classify_token(creds.token, creds.expiry, self.clock())
        if state is TokenState.VALID:
            return creds

        slot = self.rotation.token_slot()
        label = "default" if slot is None else f"project {slot}"

        if not creds.refresh_token:
            logger.error(f"No refresh token for {label}; cannot refresh access token")
            raise AuthInvalid(
                f"No refresh token for {label}. Run `tunebridge auth login`."
            )

        logger.debug(f"YouTube access token {state.value} ({label}), refreshing...")
        try:
            creds.refresh(self.request_factory())
        except GoogleAuthError as e:
            logger.error(f"Failed to refresh YouTube access token ({label}): {e}")
            raise AuthFailed(f"Access token refresh failed for {label}") from e

        logger.info(f"YouTube access token refreshed ({label})")
        return creds
