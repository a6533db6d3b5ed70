from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from models import SourcePlaylist, Track


class SourceProvider(ABC):
    """
    Platform a playlist is read from.
    """

    name: str

    @abstractmethod
    def fetch_playlist(self, playlist_id: str) -> SourcePlaylist:
        """Read playlist metadata and tracks."""
        raise NotImplementedError


class DestinationProvider(ABC):
    """
    Platform a playlist is rebuilt on.
    """

    name: str

    @abstractmethod
    def match(self, track: Track) -> Optional[str]:
        """Resolve one track to a destination item id, or None."""
        raise NotImplementedError

    @abstractmethod
    def build(self, name: str, item_ids: Iterable[str]) -> str:
        """Create a playlist holding item_ids and return its URL."""
        raise NotImplementedError
