from __future__ import annotations

import contextlib
from pathlib import Path


def enforce_retention(log_dir: Path, keep: int) -> None:
    """Delete all but the newest ``keep`` run logs in ``log_dir``."""
    if keep <= 0:
        return

    logs = sorted(
        log_dir.glob("*.log"),
        key=lambda p: p.stat().st_mtime,
        reverse=True,
    )

    for old in logs[keep:]:
        with contextlib.suppress(OSError):
            old.unlink()
