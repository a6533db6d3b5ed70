from __future__ import annotations

from auth.base import AuthHealthResult, AuthHealthStatus, TokenState
from auth.errors import AuthError, AuthFailed, AuthInvalid

__all__ = [
    "AuthHealthResult",
    "AuthHealthStatus",
    "TokenState",
    "AuthError",
    "AuthFailed",
    "AuthInvalid",
]
