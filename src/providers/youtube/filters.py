"""
filters.py

Pure filtering and classification helpers for search candidates.

This module:
- Contains NO I/O
- Contains NO API calls
- Contains NO state

It is safe to call anywhere and cheap to run.
All marker phrases are driven by config.py.
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence

import config
from models import VideoCandidate


# ============================================================
# Title normalization
# ============================================================


def clean_title(title: str) -> str:
    """
    Strip featured-artist credits from a track name for searching.

    - Removes every "(with ...)" and "(feat. ...)" group, case-insensitive
    - Collapses whitespace left behind

    Idempotent, and the order of the two groups does not matter.

    Args:
        title: Track name as reported by the source platform

    Returns:
        Cleaned title string

    Examples:
        >>> clean_title("Song (with X) (feat. Y)")
        'Song'

        >>> clean_title("Song (Remastered)")
        'Song (Remastered)'
    """
    if not title:
        return ""

    t = title
    for pattern in config.TITLE_CREDIT_PATTERNS:
        t = pattern.sub("", t)

    return re.sub(r"\s+", " ", t).strip()


def build_query(title: str, artist: str) -> str:
    """Quoted title plus quoted artist, as sent to search.list."""
    return f'"{clean_title(title)}" "{artist}"'


# ============================================================
# Candidate filters
# ============================================================


def landscape_only(candidates: Sequence[VideoCandidate]) -> List[VideoCandidate]:
    """
    Keep candidates with a thumbnail wider than tall.

    Square and portrait thumbnails are Shorts and other non-music uploads.
    """
    return [c for c in candidates if c.is_landscape]


def exclude_marker_titles(
    candidates: Sequence[VideoCandidate], track_name: str
) -> List[VideoCandidate]:
    """
    Drop candidates whose title carries the excluded marker phrase.

    The filter is best-effort:
    - skipped entirely when the track's own name contains the marker
    - when it would remove everything, the input set is returned unchanged

    Args:
        candidates: Landscape candidates, in search relevance order
        track_name: Original (uncleaned) track name

    Returns:
        Candidates to select from, order preserved
    """
    marker = config.EXCLUDED_TITLE_MARKER
    if marker in (track_name or "").lower():
        return list(candidates)

    kept = [c for c in candidates if marker not in c.title.lower()]
    if not kept:
        return list(candidates)
    return kept


# ============================================================
# Classification
# ============================================================


def is_auto_generated(candidate: VideoCandidate, song_title: str) -> bool:
    """
    Auto-generated "Topic" uploads carry both distributor markers in their
    description and use the song title verbatim.
    """
    description = candidate.description.lower()
    if not all(m in description for m in config.AUTO_GENERATED_DESCRIPTION_MARKERS):
        return False
    return (song_title or "").lower() in candidate.title.lower()


def is_official(candidate: VideoCandidate) -> bool:
    return config.OFFICIAL_TITLE_MARKER in candidate.title.lower()


# ============================================================
# Selection
# ============================================================


def select_candidate(
    candidates: Sequence[VideoCandidate], track_name: str
) -> Optional[VideoCandidate]:
    """
    Pick the best video among raw search candidates.

    Priority (first match wins, relevance order preserved):
    1. auto-generated upload whose title contains the song title
    2. title containing "official"
    3. first remaining candidate

    Args:
        candidates: All candidates from one search call
        track_name: Original (uncleaned) track name

    Returns:
        Chosen candidate, or None when no landscape candidate exists
    """
    landscape = landscape_only(candidates)
    if not landscape:
        return None

    pool = exclude_marker_titles(landscape, track_name)

    for candidate in pool:
        if is_auto_generated(candidate, track_name):
            return candidate

    for candidate in pool:
        if is_official(candidate):
            return candidate

    return pool[0]
