from __future__ import annotations


class AuthError(Exception):
    """Base auth error for source and destination tokens."""


class AuthInvalid(AuthError):
    """Credentials are missing/invalid or the consent flow must be re-run."""


class AuthFailed(AuthError):
    """Token exchange or refresh failed unexpectedly."""
