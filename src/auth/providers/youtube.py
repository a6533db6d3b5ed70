from __future__ import annotations

from typing import Any, Dict, Optional

import requests
from google_auth_oauthlib.flow import Flow, InstalledAppFlow
from google.oauth2.credentials import Credentials
from oauthlib.oauth2.rfc6749.errors import OAuth2Error

import config
from auth.base import AuthHealthResult, AuthHealthStatus
from auth.destination import DestinationTokenGuard
from auth.errors import AuthFailed, AuthInvalid
from auth.store import RefreshTokenStore
from logger import get_logger
from models import Project
from providers.youtube.api_manager import QuotaRotationManager
from providers.youtube.client import build_youtube_client


def _is_quota_exceeded_error(exc: Exception) -> bool:
    status = getattr(getattr(exc, "resp", None), "status", None)
    if status != 403:
        return False

    content = getattr(exc, "content", b"")
    if not content:
        return False

    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="ignore")

    return any(reason in content for reason in config.QUOTA_ERROR_REASONS)


def _client_config(project: Project, kind: str = "web") -> Dict[str, Any]:
    return {
        kind: {
            "client_id": project.oauth_client_id,
            "client_secret": project.oauth_client_secret,
            "auth_uri": config.GOOGLE_AUTH_URI,
            "token_uri": config.GOOGLE_TOKEN_URI,
            "redirect_uris": [project.oauth_redirect_uri],
        }
    }


class YouTubeOAuthProvider:
    """
    Authorization hand-off for the active rotation project.

    - authorization_url() builds the consent URL (offline access, youtube scope)
    - handle_callback() exchanges the returned code and persists the refresh token
    - login() runs the same hand-off through a local redirect server
    - health_check() performs a cheap authenticated call to validate auth
    """

    name = "youtube"

    def __init__(
        self,
        rotation: QuotaRotationManager,
        store: RefreshTokenStore,
        guard: Optional[DestinationTokenGuard] = None,
    ) -> None:
        self.rotation = rotation
        self.store = store
        self.guard = guard or DestinationTokenGuard(rotation)
        self._logger = get_logger("auth.youtube")

    # -----------------------------------------------------------------
    # Consent hand-off
    # -----------------------------------------------------------------

    def _flow(self) -> Flow:
        project = self.rotation.current_project()
        return Flow.from_client_config(
            _client_config(project),
            scopes=config.YOUTUBE_OAUTH_SCOPES,
            redirect_uri=project.oauth_redirect_uri,
            # URL and callback may run in different processes
            autogenerate_code_verifier=False,
        )

    def authorization_url(self) -> str:
        url, _state = self._flow().authorization_url(
            access_type="offline",
            prompt="consent",
        )
        return url

    def handle_callback(self, code: str) -> Credentials:
        if not code:
            raise AuthInvalid("Missing authorization code")

        flow = self._flow()
        try:
            flow.fetch_token(code=code)
        except (OAuth2Error, requests.RequestException, ValueError) as e:
            self._logger.error(f"OAuth code exchange failed: {e}")
            raise AuthFailed("Authorization code exchange failed") from e

        creds = flow.credentials
        self._install(creds)
        return creds

    def login(self) -> Credentials:
        project = self.rotation.current_project()
        flow = InstalledAppFlow.from_client_config(
            _client_config(project, kind="installed"),
            config.YOUTUBE_OAUTH_SCOPES,
        )
        try:
            creds = flow.run_local_server(port=0, access_type="offline", prompt="consent")
        except (OAuth2Error, requests.RequestException, OSError, ValueError) as e:
            self._logger.error(f"OAuth authentication failed: {e}")
            raise AuthFailed(str(e)) from e

        self._install(creds)
        return creds

    def _install(self, creds: Credentials) -> None:
        slot = self.rotation.token_slot()
        label = "default" if slot is None else f"project {slot}"

        if creds.refresh_token:
            self.store.save(slot, creds.refresh_token)
            self._logger.info(f"Refresh token stored for {label}")
        else:
            self._logger.warning(
                f"No refresh token returned for {label}; revoke access and retry"
            )

        self.rotation.install_client(creds)

    # -----------------------------------------------------------------
    # Health
    # -----------------------------------------------------------------

    def health_check(self) -> AuthHealthResult:
        """
        Validates OAuth by making a cheap authenticated request.
        Treats API quota exhaustion as OAuth OK.
        """
        self._logger.info("oauth.check.start")

        try:
            youtube = build_youtube_client(self.guard.ensure())
            youtube.channels().list(part="id", mine=True, maxResults=1).execute()

            self._logger.info("oauth.check.ok")
            return AuthHealthResult(
                provider=self.name,
                status=AuthHealthStatus.OK,
                message="OAuth OK",
            )

        except AuthInvalid as e:
            self._logger.error("oauth.check.auth_invalid", exc_info=e)
            return AuthHealthResult(
                provider=self.name,
                status=AuthHealthStatus.AUTH_INVALID,
                message="OAuth INVALID - reauthentication required",
            )

        except Exception as e:
            if _is_quota_exceeded_error(e):
                self._logger.warning("oauth.check.ok_quota_exhausted")
                return AuthHealthResult(
                    provider=self.name,
                    status=AuthHealthStatus.OK_API_QUOTA,
                    message="OAuth OK (API quota exhausted)",
                )

            self._logger.error("oauth.check.failed", exc_info=e)
            return AuthHealthResult(
                provider=self.name,
                status=AuthHealthStatus.FAILED,
                message="OAuth check failed (unexpected error)",
            )
