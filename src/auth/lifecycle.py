from __future__ import annotations

from google.oauth2.credentials import Credentials

from auth.destination import DestinationTokenGuard
from auth.source import SpotifyTokenCache


class TokenLifecycleManager:
    """
    Keeps the two access tokens apart: the Spotify client-credentials token
    and the YouTube OAuth token of the active rotation project. They expire
    independently and are refreshed independently.
    """

    def __init__(self, source: SpotifyTokenCache, destination: DestinationTokenGuard):
        self.source = source
        self.destination = destination

    def ensure_source_token(self) -> str:
        return self.source.ensure()

    def ensure_destination_token(self) -> Credentials:
        return self.destination.ensure()
