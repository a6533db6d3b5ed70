"""
service.py

Request-level operations with HTTP-equivalent outcomes.

Each function returns a ServiceResponse carrying a status code, a body and a
RunResult. Bodies only ever hold generic messages; diagnostic detail goes to
the log.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

import config
from auth.errors import AuthError, AuthInvalid
from errors import InvalidInput, NoMatchFound, TunebridgeError, UnsupportedConversion
from logger import get_logger
from models import Track
from pipeline.convert import convert_playlist
from runtime import Runtime

logger = get_logger(__name__)


class RunResult(str, Enum):
    OK = "ok"
    INVALID_INPUT = "invalid_input"
    NO_MATCH = "no_match"
    AUTH_INVALID = "auth_invalid"
    FAILED = "failed"

    @property
    def exit_code(self) -> int:
        return _EXIT_CODES[self]


_EXIT_CODES = {
    RunResult.OK: 0,
    RunResult.INVALID_INPUT: 2,
    RunResult.NO_MATCH: 1,
    RunResult.AUTH_INVALID: 12,
    RunResult.FAILED: 1,
}


@dataclass(frozen=True)
class ServiceResponse:
    status: int
    body: Union[Dict[str, Any], str]
    result: RunResult = RunResult.OK
    location: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status < 400


def _error(status: int, message: str, result: RunResult) -> ServiceResponse:
    return ServiceResponse(status=status, body={"error": message}, result=result)


# ------------------------------------------------------------
# Source playlist
# ------------------------------------------------------------


def get_source_playlist(runtime: Runtime, playlist_id: Optional[str]) -> ServiceResponse:
    if not (playlist_id or "").strip():
        return _error(400, "Please provide a playlist id.", RunResult.INVALID_INPUT)

    try:
        playlist = runtime.source.fetch_playlist(playlist_id or "")
    except InvalidInput as e:
        logger.warning(f"Invalid playlist request: {e}")
        return _error(400, "Please provide a playlist id.", RunResult.INVALID_INPUT)
    except AuthInvalid as e:
        logger.error(f"Source auth invalid: {e}")
        return _error(500, "Failed to fetch the playlist.", RunResult.AUTH_INVALID)
    except (AuthError, TunebridgeError) as e:
        logger.error(f"Source playlist read failed: {e}")
        return _error(500, "Failed to fetch the playlist.", RunResult.FAILED)
    except Exception:
        logger.exception("Unexpected error while reading the source playlist")
        return _error(500, "Failed to fetch the playlist.", RunResult.FAILED)

    return ServiceResponse(status=200, body=playlist.as_dict())


# ------------------------------------------------------------
# Conversion
# ------------------------------------------------------------


def _parse_convert_payload(payload: Any) -> tuple[str, list[Track]]:
    if not isinstance(payload, dict):
        raise InvalidInput("Request body must be an object")

    pair = (payload.get("sourcePlatform"), payload.get("destinationPlatform"))
    if pair not in config.SUPPORTED_CONVERSIONS:
        raise UnsupportedConversion(f"Unsupported platform pair: {pair[0]} -> {pair[1]}")

    data = payload.get("playlistData")
    if not isinstance(data, dict):
        raise InvalidInput("playlistData is required")

    tracks = data.get("tracks")
    if not isinstance(tracks, list):
        raise InvalidInput("playlistData.tracks must be a list")

    name = str(data.get("name") or "").strip()
    if not name:
        raise InvalidInput("playlistData.name is required")

    return name, [Track.from_dict(t) if isinstance(t, dict) else Track("", "") for t in tracks]


def convert(runtime: Runtime, payload: Any) -> ServiceResponse:
    try:
        name, tracks = _parse_convert_payload(payload)
    except InvalidInput as e:
        logger.warning(f"Rejected conversion request: {e}")
        return _error(400, "Unsupported platform combination or malformed request.", RunResult.INVALID_INPUT)

    try:
        result = convert_playlist(runtime.destination, name, tracks)
    except NoMatchFound as e:
        logger.error(f"Playlist conversion failed: {e}")
        return _error(500, "An error occurred while converting the playlist.", RunResult.NO_MATCH)
    except AuthInvalid as e:
        logger.error(f"Playlist conversion failed, reauthentication required: {e}")
        return _error(500, "An error occurred while converting the playlist.", RunResult.AUTH_INVALID)
    except (AuthError, TunebridgeError) as e:
        logger.error(f"Playlist conversion failed: {e}")
        return _error(500, "An error occurred while converting the playlist.", RunResult.FAILED)
    except Exception:
        logger.exception("Unexpected error while converting the playlist")
        return _error(500, "An error occurred while converting the playlist.", RunResult.FAILED)

    return ServiceResponse(
        status=200,
        body={
            "playlistUrl": result.playlist_url,
            "matched": result.matched,
            "skipped": result.skipped,
        },
    )


# ------------------------------------------------------------
# Authorization hand-off
# ------------------------------------------------------------


def authorization_url(runtime: Runtime) -> ServiceResponse:
    url = runtime.oauth.authorization_url()
    return ServiceResponse(status=302, body="", location=url)


def oauth_callback(runtime: Runtime, code: Optional[str]) -> ServiceResponse:
    try:
        runtime.oauth.handle_callback(code or "")
    except AuthInvalid as e:
        logger.error(f"OAuth callback rejected: {e}")
        return ServiceResponse(status=400, body="Authentication failed.", result=RunResult.INVALID_INPUT)
    except AuthError as e:
        logger.error(f"OAuth token handling failed: {e}")
        return ServiceResponse(status=500, body="Authentication failed.", result=RunResult.FAILED)

    return ServiceResponse(
        status=200, body="Authentication successful! You can close this window."
    )
