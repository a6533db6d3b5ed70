"""bootstrap.py

Process bootstrap for Tunebridge.

This module is intentionally tiny and side-effectful.

Rules:
1) Only bootstrap is allowed to *mutate* os.environ for shared run context.
2) Call bootstrap_base_env() exactly once at the true entrypoint.
3) Call bootstrap_run_context() after argparse parsing, before init_logging().

Everything else should treat environment variables as the source of truth.
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from env import PROJECT_ROOT, reset_env_caches


_BOOTSTRAPPED = False


def bootstrap_base_env(env_file: Optional[Path] = None) -> None:
    """
    Load .env (if present) without overriding variables already set.
    """
    global _BOOTSTRAPPED
    if _BOOTSTRAPPED:
        return

    dotenv_path = env_file or Path(os.environ.get("TUNEBRIDGE_ENV_FILE", PROJECT_ROOT / ".env"))
    if dotenv_path.exists():
        load_dotenv(dotenv_path, override=False)

    os.environ.setdefault(
        "TUNEBRIDGE_RUN_ID",
        datetime.now().strftime("%Y-%m-%d_%H-%M-%S"),
    )

    reset_env_caches()
    _BOOTSTRAPPED = True


def bootstrap_run_context(
    *,
    command: str,
    verbose: bool | None = None,
    quiet: bool | None = None,
) -> None:
    """Establish run-scoped context used by logging."""

    os.environ["TUNEBRIDGE_COMMAND"] = command

    if verbose is not None:
        os.environ["TUNEBRIDGE_VERBOSE"] = "1" if verbose else "0"
    if quiet is not None:
        os.environ["TUNEBRIDGE_QUIET"] = "1" if quiet else "0"

    # Context changes must invalidate cached env views.
    reset_env_caches()
