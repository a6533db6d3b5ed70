from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Optional

from rich.text import Text

import config
from cli.common import CONFIG_ERROR_EXIT, CONSOLE, add_output_flags, load_runtime, print_response
from logger import get_logger
from runtime import Runtime
from service import RunResult, convert, get_source_playlist

logger = get_logger(__name__)


# ------------------------------------------------------------
# Parser
# ------------------------------------------------------------


def build_convert_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "convert", help="Convert a Spotify playlist into a private YouTube playlist"
    )

    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--playlist", help="Spotify playlist id, URI or URL")
    src.add_argument(
        "--input",
        help="JSON file with {name, tracks: [{name, artist}]} (as written by `playlist --out`)",
    )

    p.add_argument("--name", help="Destination playlist name (default: source name)")
    p.add_argument("--source", default=config.SOURCE_PLATFORM, help="Source platform")
    p.add_argument("--dest", default=config.DESTINATION_PLATFORM, help="Destination platform")
    add_output_flags(p)


# ------------------------------------------------------------
# Helpers
# ------------------------------------------------------------


def _load_input(path: str) -> Optional[dict[str, Any]]:
    try:
        data = json.loads(Path(path).expanduser().read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read {path}: {e}")
        return None
    return data if isinstance(data, dict) else None


def _playlist_data(runtime: Runtime, args: argparse.Namespace) -> tuple[Optional[dict], int]:
    if args.input:
        data = _load_input(args.input)
        if data is None:
            CONSOLE.print(Text(f"Invalid playlist file: {args.input}", style="red"))
            return None, RunResult.INVALID_INPUT.exit_code
        return data, 0

    resp = get_source_playlist(runtime, args.playlist)
    if not resp.ok:
        return None, print_response(resp, quiet=args.quiet)
    return dict(resp.body), 0


# ------------------------------------------------------------
# Handler
# ------------------------------------------------------------


def handle_convert(args: argparse.Namespace) -> int:
    runtime = load_runtime()
    if runtime is None:
        return CONFIG_ERROR_EXIT

    data, code = _playlist_data(runtime, args)
    if data is None:
        return code

    if args.name:
        data["name"] = args.name

    payload = {
        "sourcePlatform": args.source,
        "destinationPlatform": args.dest,
        "playlistData": data,
    }

    resp = convert(runtime, payload)
    if resp.ok and not args.quiet:
        msg = Text("Playlist created: ", style="green")
        msg.append(resp.body["playlistUrl"], style="bold")
        msg.append(f"  ({resp.body['matched']} matched, {resp.body['skipped']} skipped)", style="dim")
        CONSOLE.print(msg)
        return 0

    return print_response(resp, quiet=args.quiet)
