"""
convert.py

Conversion pipeline: match every track in order, then build the playlist.

Tracks are processed strictly one at a time so that a quota error is always
attributable to the project that was active when it happened.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from errors import NoMatchFound
from logger import get_logger
from models import ConversionResult, Track
from providers.base import DestinationProvider

logger = get_logger(__name__)


@dataclass
class MatchProgress:
    """Track matching progress for periodic reporting."""

    total: int
    processed: int = 0
    matched: int = 0
    skipped: int = 0

    def maybe_log(self, every: int = 10) -> None:
        if every <= 0 or self.processed == 0:
            return
        if self.processed % every != 0 and self.processed != self.total:
            return

        pct = (self.processed / self.total) * 100.0 if self.total else 100.0
        logger.info(
            f"Progress: {self.processed}/{self.total} ({pct:.1f}%) | "
            f"matched={self.matched} skipped={self.skipped}"
        )


def match_tracks(
    destination: DestinationProvider,
    tracks: Sequence[Track],
    progress_every: int = 10,
) -> tuple[List[str], MatchProgress]:
    progress = MatchProgress(total=len(tracks))
    video_ids: List[str] = []

    for track in tracks:
        video_id = destination.match(track)
        progress.processed += 1

        if video_id:
            video_ids.append(video_id)
            progress.matched += 1
        else:
            progress.skipped += 1
            logger.warning(f"Failed to convert track: {track.name or '<unnamed>'}")

        progress.maybe_log(progress_every)

    return video_ids, progress


def convert_playlist(
    destination: DestinationProvider,
    name: str,
    tracks: Sequence[Track],
) -> ConversionResult:
    """
    Raises:
        NoMatchFound: no track could be matched; nothing is created
        AuthError / PlaylistCreateError: from the playlist build
    """
    video_ids, progress = match_tracks(destination, tracks)

    if not video_ids:
        raise NoMatchFound(f"None of the {len(tracks)} tracks could be matched")

    playlist_url = destination.build(name, video_ids)
    logger.info(
        f"Converted '{name}': {progress.matched} matched, {progress.skipped} skipped"
    )
    return ConversionResult(
        playlist_url=playlist_url,
        matched=progress.matched,
        skipped=progress.skipped,
    )
