from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import List, Optional

import config
from models import Project

# ------------------------------------------------------------
# Errors / helpers
# ------------------------------------------------------------


class ConfigError(RuntimeError):
    pass


def _require(name: str) -> str:
    v = os.environ.get(name)
    if not v:
        raise ConfigError(f"Missing required environment variable: {name}")
    return v


def _as_bool(v: str) -> bool:
    return v.strip().lower() in {"1", "true", "yes", "on"}


def _as_int(v: str, default: int) -> int:
    try:
        return int(v)
    except (TypeError, ValueError):
        return default


def _as_float(v: str, default: float) -> float:
    try:
        return float(v)
    except (TypeError, ValueError):
        return default


def mask_secret(value: Optional[str], keep: int = 4) -> str:
    if not value:
        return "<unset>"
    if len(value) <= keep:
        return "*" * len(value)
    return f"{value[:keep]}…({len(value)} chars)"


def _parse_projects(raw: str) -> List[Project]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"PROJECT_KEYS_AND_CLIENTS is not valid JSON: {e}") from e

    if not isinstance(data, list) or not data:
        raise ConfigError("PROJECT_KEYS_AND_CLIENTS must be a non-empty JSON list")

    projects: List[Project] = []
    for i, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ConfigError(f"PROJECT_KEYS_AND_CLIENTS[{i}] must be an object")
        project = Project.from_dict(entry)
        if not project.search_api_key:
            raise ConfigError(f"PROJECT_KEYS_AND_CLIENTS[{i}] is missing apiKey")
        projects.append(project)

    return projects


# ------------------------------------------------------------
# Logging environment (SAFE ANYWHERE)
# ------------------------------------------------------------


@dataclass(frozen=True)
class LoggingEnvironment:
    log_level: str
    log_retention: int
    verbose: bool
    quiet: bool


def get_logging_env() -> LoggingEnvironment:
    return LoggingEnvironment(
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
        log_retention=_as_int(os.environ.get("LOG_RETENTION", "30"), 30),
        verbose=_as_bool(os.environ.get("TUNEBRIDGE_VERBOSE", "0")),
        quiet=_as_bool(os.environ.get("TUNEBRIDGE_QUIET", "0")),
    )


# ------------------------------------------------------------
# Full runtime environment
# ------------------------------------------------------------


class Environment:
    def __init__(self):
        # Logging snapshot (immutable)
        self._logging = get_logging_env()

        # ---- REQUIRED: YouTube projects (search key + OAuth identity) ----
        self.projects = _parse_projects(_require("PROJECT_KEYS_AND_CLIENTS"))

        # ---- Default OAuth identity used before any rotation ----
        self.client_id = os.environ.get("CLIENT_ID", "")
        self.client_secret = os.environ.get("CLIENT_SECRET", "")
        self.redirect_uri = os.environ.get("REDIRECT_URI", "")

        # ---- Source (Spotify) client credentials ----
        self.spotify_client_id = os.environ.get("SPOTIFY_CLIENT_ID", "")
        self.spotify_client_secret = os.environ.get("SPOTIFY_CLIENT_SECRET", "")

        # ---- Behavior ----
        self.request_timeout = _as_int(
            os.environ.get("TUNEBRIDGE_REQUEST_TIMEOUT", ""),
            config.DEFAULT_REQUEST_TIMEOUT_SEC,
        )
        self.insert_sleep_sec = _as_float(
            os.environ.get("TUNEBRIDGE_INSERT_SLEEP_SEC", ""),
            config.DEFAULT_PLAYLIST_INSERT_SLEEP_SEC,
        )

        self.command = os.environ.get("TUNEBRIDGE_COMMAND", "bootstrap")

    @property
    def default_project(self) -> Project:
        """
        Top-level OAuth identity. Falls back to project 0 when CLIENT_ID
        is not configured.
        """
        first = self.projects[0]
        if not self.client_id:
            return first
        return Project(
            search_api_key=first.search_api_key,
            oauth_client_id=self.client_id,
            oauth_client_secret=self.client_secret,
            oauth_redirect_uri=self.redirect_uri or first.oauth_redirect_uri,
        )

    def as_dict(self) -> dict:
        return {
            "Logging": {
                "log_level": self.log_level,
                "log_retention": self.log_retention,
                "verbose": self.verbose,
                "quiet": self.quiet,
            },
            "Behavior": {
                "command": self.command,
                "request_timeout": self.request_timeout,
                "insert_sleep_sec": self.insert_sleep_sec,
            },
            "YouTube": {
                "projects": f"{len(self.projects)} projects loaded",
                "api_keys": ", ".join(
                    mask_secret(p.search_api_key) for p in self.projects
                ),
                "client_id": self.client_id or "<project 0>",
                "redirect_uri": self.redirect_uri or "<project 0>",
            },
            "Spotify": {
                "client_id": self.spotify_client_id or "<unset>",
                "client_secret": mask_secret(self.spotify_client_secret),
            },
        }

    # ---- logging passthrough ----
    @property
    def log_level(self) -> str:
        return self._logging.log_level

    @property
    def log_retention(self) -> int:
        return self._logging.log_retention

    @property
    def verbose(self) -> bool:
        return self._logging.verbose

    @property
    def quiet(self) -> bool:
        return self._logging.quiet


_ENV: Optional[Environment] = None


def reset_env_caches() -> None:
    """Invalidate cached views of environment variables."""
    global _ENV
    _ENV = None


def get_env() -> Environment:
    global _ENV
    if _ENV is None:
        _ENV = Environment()
    return _ENV
