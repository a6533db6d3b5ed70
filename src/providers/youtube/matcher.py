"""
matcher.py

Track → YouTube video matching.

One search.list call per attempt, using the active project's key. A quota
error rotates to the next project and retries the same track; after one
attempt per project the track is given up.
"""

from __future__ import annotations

from typing import List, Optional

import requests

import config
from errors import QuotaExhaustedError
from logger import get_logger
from models import Track, VideoCandidate
from providers.youtube.api_manager import APIError, QuotaRotationManager, search_videos
from providers.youtube.filters import build_query, select_candidate

logger = get_logger(__name__)


class TrackMatcher:
    def __init__(
        self,
        rotation: QuotaRotationManager,
        timeout: int = config.DEFAULT_REQUEST_TIMEOUT_SEC,
        session: Optional[requests.Session] = None,
    ):
        self.rotation = rotation
        self.timeout = timeout
        self.session = session

    def match(self, track: Track) -> Optional[str]:
        """
        Return the best video id for ``track``, or None.

        None covers invalid input, no usable search results and every
        project being out of quota. The caller decides whether to skip.
        """
        if not track.is_valid:
            logger.warning(f"Invalid track data, skipping: {track!r}")
            return None

        items = self._search(build_query(track.name, track.artist))
        if items is None:
            return None

        candidates = self._candidates(items)
        if not candidates:
            logger.info(f"No search results for '{track.name}' by {track.artist}")
            return None

        chosen = select_candidate(candidates, track.name)
        if chosen is None:
            logger.info(f"No landscape videos for '{track.name}' by {track.artist}")
            return None

        logger.debug(f"'{track.name}' -> {chosen.id} ({chosen.title})")
        return chosen.id

    def _search(self, query: str) -> Optional[List[dict]]:
        attempts = self.rotation.size

        for attempt in range(attempts):
            api_key = self.rotation.current_key()
            try:
                return search_videos(
                    query, api_key, timeout=self.timeout, session=self.session
                )
            except QuotaExhaustedError:
                logger.warning(
                    f"Search quota exhausted (attempt {attempt + 1}/{attempts}); "
                    "rotating project"
                )
                self.rotation.rotate()
            except APIError as e:
                logger.error(f"Search failed for {query}: {e}")
                return None

        logger.error(f"All {attempts} projects are out of search quota")
        return None

    @staticmethod
    def _candidates(items: List[dict]) -> List[VideoCandidate]:
        candidates = []
        for item in items:
            candidate = VideoCandidate.from_search_item(item)
            if candidate is not None:
                candidates.append(candidate)
        return candidates
