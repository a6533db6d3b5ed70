from __future__ import annotations

import argparse
import json
from typing import Optional

from rich.console import Console
from rich.text import Text

from env import ConfigError
from logger import get_logger
from runtime import Runtime, build_runtime
from service import RunResult, ServiceResponse

CONSOLE = Console()

logger = get_logger(__name__)


# ----------------------------
# Help dispatch (subparser-local)
# ----------------------------


def dispatch_subparser_help(
    parser: argparse.ArgumentParser, path: list[str] | None
) -> int:
    """
    Implements consistent `X help [subcmd ...]` behavior for a subtree parser.
    """
    if not path:
        parser.print_help()
        return 0

    try:
        parser.parse_args(path + ["--help"])
    except SystemExit:
        pass
    return 0


def add_output_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--verbose", action="store_true", help="Verbose console output")
    parser.add_argument("--quiet", action="store_true", help="Suppress console output")


# ----------------------------
# Runtime
# ----------------------------


def load_runtime() -> Optional[Runtime]:
    """Build the runtime, reporting configuration errors instead of raising."""
    try:
        return build_runtime()
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        CONSOLE.print(Text(f"Configuration error: {e}", style="red"))
        return None


# ----------------------------
# Output
# ----------------------------


def print_response(resp: ServiceResponse, quiet: bool = False) -> int:
    if not quiet:
        if isinstance(resp.body, dict) and "error" in resp.body:
            CONSOLE.print(Text(str(resp.body["error"]), style="red"))
        elif isinstance(resp.body, dict):
            CONSOLE.print_json(json.dumps(resp.body, ensure_ascii=False))
        elif resp.body:
            style = "green" if resp.ok else "red"
            CONSOLE.print(Text(resp.body, style=style))

    return resp.result.exit_code


CONFIG_ERROR_EXIT = RunResult.INVALID_INPUT.exit_code
