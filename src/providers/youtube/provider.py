from __future__ import annotations

from typing import Iterable, Optional

import config
from models import Track
from providers.base import DestinationProvider
from providers.youtube.matcher import TrackMatcher
from providers.youtube.playlist import PlaylistBuilder


class YouTubeProvider(DestinationProvider):
    name = config.DESTINATION_PLATFORM

    def __init__(self, matcher: TrackMatcher, builder: PlaylistBuilder):
        self.matcher = matcher
        self.builder = builder

    def match(self, track: Track) -> Optional[str]:
        return self.matcher.match(track)

    def build(self, name: str, item_ids: Iterable[str]) -> str:
        return self.builder.build(name, item_ids)
