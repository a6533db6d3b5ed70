"""
api_manager.py

Project rotation and search HTTP utilities.

Responsibilities:
- Round-robin rotation across YouTube projects (search key + OAuth identity)
- Loading the persisted refresh token of the active project
- Search requests with quota detection
- HTTP → domain error translation
"""

from __future__ import annotations

import threading
from typing import Any, Dict, List, Optional, Sequence

import requests
from google.oauth2.credentials import Credentials

import config
from auth.store import RefreshTokenStore
from env import mask_secret
from errors import QuotaExhaustedError, TunebridgeError
from logger import get_logger
from models import Project


logger = get_logger(__name__)


class APIError(TunebridgeError):
    """Non-quota API failure."""

    pass


# ============================================================
# OAuth client construction
# ============================================================


def build_credentials(project: Project, refresh_token: Optional[str]) -> Credentials:
    """
    Unauthenticated OAuth client bound to a project's identity.

    The access token is left empty; the destination token guard refreshes it
    before the first write.
    """
    return Credentials(
        token=None,
        refresh_token=refresh_token,
        token_uri=config.GOOGLE_TOKEN_URI,
        client_id=project.oauth_client_id,
        client_secret=project.oauth_client_secret,
        scopes=config.YOUTUBE_OAUTH_SCOPES,
    )


# ============================================================
# Quota Rotation Manager
# ============================================================


class QuotaRotationManager:
    """
    Owns the process-wide rotation state: the active project index and the
    OAuth client bound to it.

    Rotation is immediate and unconditional: index advances modulo the number
    of projects and the client is rebuilt from the new project's identity.
    """

    def __init__(
        self,
        projects: Sequence[Project],
        store: RefreshTokenStore,
        default_project: Optional[Project] = None,
    ):
        if not projects:
            raise ValueError("Project list cannot be empty")

        self.projects: List[Project] = list(projects)
        self.store = store
        self.current_index = 0
        self.rotated = False
        self._lock = threading.RLock()

        self._default_project = default_project or self.projects[0]
        self._client = build_credentials(
            self._default_project, self._load_default_refresh_token()
        )

        logger.debug(f"Initialized QuotaRotationManager with {len(self.projects)} projects")

    @property
    def size(self) -> int:
        return len(self.projects)

    def _load_default_refresh_token(self) -> Optional[str]:
        token = self.store.load(None)
        if token is None and (
            self._default_project.oauth_client_id == self.projects[0].oauth_client_id
        ):
            token = self.store.load(0)

        if token is None:
            logger.warning(
                "No saved refresh token. Run `tunebridge auth login` to authorize."
            )
        return token

    # ---- reads ----

    def current_key(self) -> str:
        with self._lock:
            return self.projects[self.current_index].search_api_key

    def current_project(self) -> Project:
        """OAuth identity of the active client."""
        with self._lock:
            if not self.rotated:
                return self._default_project
            return self.projects[self.current_index]

    def current_client(self) -> Credentials:
        with self._lock:
            return self._client

    def token_slot(self) -> Optional[int]:
        """Store key for the active client's refresh token (None = default)."""
        with self._lock:
            return self.current_index if self.rotated else None

    # ---- mutations ----

    def rotate(self) -> None:
        with self._lock:
            self.current_index = (self.current_index + 1) % len(self.projects)
            self.rotated = True

            project = self.projects[self.current_index]
            refresh_token = self.store.load(self.current_index)
            self._client = build_credentials(project, refresh_token)

            logger.warning(
                f"Rotated to project {self.current_index + 1}/{len(self.projects)} "
                f"(key {mask_secret(project.search_api_key)})"
            )
            if refresh_token is None:
                logger.warning(
                    f"No refresh token for project {self.current_index}. "
                    "Run `tunebridge auth login` to authorize it."
                )

    def install_client(self, credentials: Credentials) -> None:
        """Replace the active client after a completed consent flow."""
        with self._lock:
            self._client = credentials


# ============================================================
# Error detection helpers
# ============================================================


def _is_quota_payload(data: Any) -> bool:
    """
    YouTube quota errors are reliably signaled here:
    error.errors[].reason in ('quotaExceeded', 'dailyLimitExceeded')
    """
    if not isinstance(data, dict):
        return False

    error = data.get("error")
    if not isinstance(error, dict):
        return False

    for err in error.get("errors") or []:
        if isinstance(err, dict) and err.get("reason") in config.QUOTA_ERROR_REASONS:
            return True
    return False


# ============================================================
# Search (API key)
# ============================================================


def search_videos(
    query: str,
    api_key: str,
    timeout: int = config.DEFAULT_REQUEST_TIMEOUT_SEC,
    session: Optional[requests.Session] = None,
) -> List[Dict[str, Any]]:
    """
    One search.list call restricted to videos, ordered by relevance.

    Raises:
        QuotaExhaustedError: the key's quota is exhausted
        APIError: any other HTTP, network or payload failure
    """
    http = session or requests
    params = {
        "part": "snippet",
        "type": "video",
        "order": "relevance",
        "q": query,
        "key": api_key,
    }

    try:
        response = http.get(config.SEARCH_URL, params=params, timeout=timeout)
    except requests.RequestException as e:
        raise APIError(f"Search request failed: {e}") from e

    try:
        data = response.json()
    except ValueError as e:
        raise APIError(f"Search returned non-JSON (HTTP {response.status_code})") from e

    if _is_quota_payload(data):
        raise QuotaExhaustedError(f"Quota exhausted for key {mask_secret(api_key)}")

    if not isinstance(data, dict):
        raise APIError(f"Search returned unexpected payload (HTTP {response.status_code})")

    if response.status_code >= 400 or "error" in data:
        error = data.get("error")
        message = error.get("message", "") if isinstance(error, dict) else str(error or "")
        raise APIError(f"Search failed (HTTP {response.status_code}): {message}")

    return list(data.get("items") or [])
