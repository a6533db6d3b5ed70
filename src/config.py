"""
config.py

Central configuration for Tunebridge.

This file intentionally contains ONLY:
- Constants
- Tunables (defaults)
- Marker phrases
- Regex patterns
- Endpoints and scopes

It must NOT contain:
- Business logic
- API calls
- Reading environment variables
- Validation / side effects

Runtime configuration (env vars, project credentials) belongs in:
- env/env.py
- bootstrap.py (CLI bootstrap)
"""

from __future__ import annotations

import re

# ============================================================
# YOUTUBE API - ENDPOINTS / SCOPES
# ============================================================

SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"
GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"

YOUTUBE_OAUTH_SCOPES = ["https://www.googleapis.com/auth/youtube"]

QUOTA_ERROR_REASONS = ("quotaExceeded", "dailyLimitExceeded")

PLAYLIST_URL = "https://www.youtube.com/playlist?list={playlist_id}"

# ============================================================
# SPOTIFY API - ENDPOINTS
# ============================================================

SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"

# ============================================================
# PLATFORMS
# ============================================================

SOURCE_PLATFORM = "spotify"
DESTINATION_PLATFORM = "youtube"

SUPPORTED_CONVERSIONS = {(SOURCE_PLATFORM, DESTINATION_PLATFORM)}

# ============================================================
# REQUEST THROTTLING DEFAULTS (env.py may override)
# ============================================================

DEFAULT_REQUEST_TIMEOUT_SEC = 30

# Playlist mutations are intentionally slow to stay under burst limits
DEFAULT_PLAYLIST_INSERT_SLEEP_SEC = 1.0

# ============================================================
# PLAYLIST CREATION
# ============================================================

PLAYLIST_DESCRIPTION = "Generated by Tunebridge"
PLAYLIST_PRIVACY_STATUS = "private"

# ============================================================
# MATCHING - TITLE CLEANING
# ============================================================

# "(with X)" and "(feat. X)" credits never appear in video titles reliably
TITLE_CREDIT_PATTERNS = [
    re.compile(r"\(with [^)]+\)", re.IGNORECASE),
    re.compile(r"\(feat\. [^)]+\)", re.IGNORECASE),
]

# ============================================================
# MATCHING - CANDIDATE CLASSIFICATION
# ============================================================

# Live-session uploads that shadow the studio recording
EXCLUDED_TITLE_MARKER = "a colors show"

AUTO_GENERATED_DESCRIPTION_MARKERS = (
    "provided to youtube by",
    "auto-generated by youtube",
)

OFFICIAL_TITLE_MARKER = "official"

# ============================================================
# REFRESH TOKEN PERSISTENCE
# ============================================================

DEFAULT_REFRESH_TOKEN_BASENAME = "refresh_token.json"
PROJECT_REFRESH_TOKEN_BASENAME = "refresh_token_project_{index}.json"
