from __future__ import annotations

import os
from pathlib import Path

import config

# ---------------------------------------------------------------------
# Project root
# ---------------------------------------------------------------------

# This file lives in src/env/, so project root is two levels up
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


# ---------------------------------------------------------------------
# Base directories (override-friendly)
# ---------------------------------------------------------------------


def _resolve_dir(env_var: str, default: Path) -> Path:
    """
    Resolve a directory path from an environment variable or default.
    Ensures the directory exists.
    """
    raw = os.environ.get(env_var)
    path = Path(raw).expanduser().resolve() if raw else default
    path.mkdir(parents=True, exist_ok=True)
    return path


def logs_dir() -> Path:
    return _resolve_dir("TUNEBRIDGE_LOGS_DIR", PROJECT_ROOT / "logs")


def auth_dir() -> Path:
    """
    Directory holding persisted refresh tokens.
    """
    return _resolve_dir("TUNEBRIDGE_AUTH_DIR", PROJECT_ROOT / "auth")


# ---------------------------------------------------------------------
# Refresh token files
# ---------------------------------------------------------------------


def default_refresh_token_file() -> Path:
    return auth_dir() / config.DEFAULT_REFRESH_TOKEN_BASENAME


def project_refresh_token_file(index: int) -> Path:
    return auth_dir() / config.PROJECT_REFRESH_TOKEN_BASENAME.format(index=index)


# ---------------------------------------------------------------------
# Log layout helpers (used by logger)
# ---------------------------------------------------------------------


def module_logs_dir(command: str) -> Path:
    """
    Base log directory for a CLI command (e.g. convert, auth).
    """
    path = logs_dir() / command
    path.mkdir(parents=True, exist_ok=True)
    return path
