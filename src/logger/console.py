from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from env import get_logging_env

# Console used by RichHandler (stdout so piped output keeps log lines)
LOG_CONSOLE = Console(
    file=sys.stdout,
    soft_wrap=True,
)


class QuietGateFilter(logging.Filter):
    """
    Drop console output when quiet mode is switched on after init.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return not get_logging_env().quiet


def build_console_handler(level: int = logging.INFO) -> logging.Handler:
    handler = RichHandler(
        console=LOG_CONSOLE,
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setLevel(level)

    # RichHandler renders the level column itself.
    handler.setFormatter(logging.Formatter("%(message)s"))

    handler.addFilter(QuietGateFilter())
    return handler
