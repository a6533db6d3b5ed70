from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Protocol


class TokenState(str, Enum):
    ABSENT = "absent"
    VALID = "valid"
    EXPIRED = "expired"


class AuthHealthStatus(str, Enum):
    OK = "ok"
    OK_API_QUOTA = "ok_api_quota"
    AUTH_INVALID = "auth_invalid"
    FAILED = "failed"


@dataclass(frozen=True)
class AuthHealthResult:
    provider: str
    status: AuthHealthStatus
    message: str


class TokenCache(Protocol):
    """
    A cached access token with a single transition function.

    - state() classifies the cached token without side effects
    - ensure() refreshes when the state is not VALID and returns the token holder
    """

    def state(self) -> TokenState: ...

    def ensure(self) -> Any: ...


def utcnow() -> datetime:
    """Naive UTC now, matching google.oauth2.credentials.Credentials.expiry."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def classify_token(
    token: Optional[str], expiry: Optional[datetime], now: datetime
) -> TokenState:
    if not token:
        return TokenState.ABSENT
    if expiry is not None and now >= expiry:
        return TokenState.EXPIRED
    return TokenState.VALID
