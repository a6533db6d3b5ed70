from __future__ import annotations

from typing import Any

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build


def build_youtube_client(credentials: Credentials) -> Any:
    """
    Authorized YouTube Data API client for write calls.

    Callers pass credentials that were just validated by the destination
    token guard.
    """
    return build("youtube", "v3", credentials=credentials, cache_discovery=False)
