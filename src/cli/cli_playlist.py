from __future__ import annotations

import argparse
import json
from pathlib import Path

from cli.common import CONFIG_ERROR_EXIT, CONSOLE, add_output_flags, load_runtime, print_response
from service import get_source_playlist


def build_playlist_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser("playlist", help="Read a Spotify playlist as JSON")
    p.add_argument("id", help="Spotify playlist id, URI or URL")
    p.add_argument("--out", help="Write the playlist JSON to this file")
    add_output_flags(p)


def handle_playlist(args: argparse.Namespace) -> int:
    runtime = load_runtime()
    if runtime is None:
        return CONFIG_ERROR_EXIT

    resp = get_source_playlist(runtime, args.id)

    if resp.ok and args.out:
        out = Path(args.out).expanduser()
        out.write_text(json.dumps(resp.body, ensure_ascii=False, indent=2), encoding="utf-8")
        if not args.quiet:
            CONSOLE.print(f"Wrote {len(resp.body['tracks'])} tracks to {out}")
        return 0

    return print_response(resp, quiet=args.quiet)
