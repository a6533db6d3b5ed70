"""
store.py

Refresh-token persistence.

Tokens are keyed by project index; ``None`` addresses the default identity
used before any rotation. The file backend stores each token as a JSON string
in its own file under the auth directory.
"""

from __future__ import annotations

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from env.paths import default_refresh_token_file, project_refresh_token_file
from logger import get_logger

logger = get_logger(__name__)


class RefreshTokenStore(ABC):
    @abstractmethod
    def load(self, index: Optional[int]) -> Optional[str]:
        """Return the persisted refresh token, or None when absent."""
        raise NotImplementedError

    @abstractmethod
    def save(self, index: Optional[int], refresh_token: str) -> None:
        raise NotImplementedError


class FileRefreshTokenStore(RefreshTokenStore):
    def path_for(self, index: Optional[int]) -> Path:
        if index is None:
            return default_refresh_token_file()
        return project_refresh_token_file(index)

    def load(self, index: Optional[int]) -> Optional[str]:
        path = self.path_for(index)
        if not path.exists():
            return None

        try:
            value = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to read refresh token {path.name}: {e}")
            return None

        if not isinstance(value, str) or not value:
            logger.warning(f"Ignoring malformed refresh token file {path.name}")
            return None

        logger.debug(f"Loaded refresh token from {path.name}")
        return value

    def save(self, index: Optional[int], refresh_token: str) -> None:
        path = self.path_for(index)
        path.write_text(json.dumps(refresh_token), encoding="utf-8")

        # Best-effort permission tightening (POSIX only)
        try:
            os.chmod(path, 0o600)
        except OSError as e:
            logger.debug(f"Could not set restrictive permissions: {e}")

        logger.info(f"Saved refresh token to {path.name}")


class MemoryRefreshTokenStore(RefreshTokenStore):
    """Non-persistent store, used when no auth directory should be touched."""

    def __init__(self, tokens: Optional[Dict[Optional[int], str]] = None):
        self.tokens: Dict[Optional[int], str] = dict(tokens or {})

    def load(self, index: Optional[int]) -> Optional[str]:
        return self.tokens.get(index)

    def save(self, index: Optional[int], refresh_token: str) -> None:
        self.tokens[index] = refresh_token
