from __future__ import annotations


class TunebridgeError(Exception):
    """Base error for conversion failures."""


class InvalidInput(TunebridgeError):
    """Malformed track, request body or missing parameter."""


class QuotaExhaustedError(TunebridgeError):
    """Raised when the active project's search quota is exhausted."""


class NoMatchFound(TunebridgeError):
    """No usable video for a track (or for any track of a playlist)."""


class UnsupportedConversion(InvalidInput):
    """Source/destination platform pair is not supported."""


class SourceReadError(TunebridgeError):
    """Reading the source playlist failed upstream."""


class PlaylistCreateError(TunebridgeError):
    """Creating the destination playlist failed."""
