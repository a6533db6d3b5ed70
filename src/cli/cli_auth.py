from __future__ import annotations

import argparse

from rich.text import Text

from auth import AuthHealthStatus
from auth.errors import AuthError
from cli.common import (
    CONFIG_ERROR_EXIT,
    CONSOLE,
    add_output_flags,
    load_runtime,
    print_response,
)
from logger import get_logger
from service import RunResult, authorization_url, oauth_callback


# ------------------------------------------------------------
# Parser
# ------------------------------------------------------------


def build_auth_parser(subparsers: argparse._SubParsersAction) -> None:
    auth = subparsers.add_parser(
        "auth",
        help="Authorize YouTube access and check OAuth health",
    )
    sub = auth.add_subparsers(dest="auth_cmd", required=True)

    url_p = sub.add_parser("url", help="Print the consent URL for the active project")
    add_output_flags(url_p)
    url_p.set_defaults(action="url")

    cb_p = sub.add_parser(
        "callback", help="Exchange an authorization code and store the refresh token"
    )
    cb_p.add_argument("code", help="Value of the ?code= parameter from the redirect")
    add_output_flags(cb_p)
    cb_p.set_defaults(action="callback")

    login_p = sub.add_parser(
        "login", help="Run the consent flow through a local redirect server"
    )
    add_output_flags(login_p)
    login_p.set_defaults(action="login")

    check_p = sub.add_parser("check", help="Check OAuth health for the active project")
    add_output_flags(check_p)
    check_p.set_defaults(action="check")


# ------------------------------------------------------------
# Handler
# ------------------------------------------------------------


def handle_auth(args: argparse.Namespace) -> int:
    logger = get_logger("auth")

    runtime = load_runtime()
    if runtime is None:
        return CONFIG_ERROR_EXIT

    quiet = bool(getattr(args, "quiet", False))

    if args.action == "url":
        resp = authorization_url(runtime)
        if not quiet:
            CONSOLE.print("Open this URL to authorize YouTube access:")
            CONSOLE.print(resp.location, markup=False, soft_wrap=True)
        return 0

    if args.action == "callback":
        return print_response(oauth_callback(runtime, args.code), quiet=quiet)

    if args.action == "login":
        try:
            runtime.oauth.login()
        except AuthError as e:
            logger.error(f"Login failed: {e}")
            if not quiet:
                CONSOLE.print(Text("Authentication failed.", style="red"))
            return RunResult.AUTH_INVALID.exit_code
        if not quiet:
            CONSOLE.print(Text("Authentication successful.", style="green"))
        return 0

    if args.action == "check":
        return _handle_check(runtime, quiet, bool(getattr(args, "verbose", False)))

    raise RuntimeError(f"Unknown auth action: {args.action}")


def _handle_check(runtime, quiet: bool, verbose: bool) -> int:
    result = runtime.oauth.health_check()

    if result.status == AuthHealthStatus.OK:
        if not quiet:
            msg = Text("OAuth OK", style="green")
            if verbose:
                msg.append(" (token valid and usable)", style="dim")
            CONSOLE.print(msg)
        return 0

    if result.status == AuthHealthStatus.OK_API_QUOTA:
        if not quiet:
            msg = Text("OAuth OK", style="green")
            msg.append(" (API quota exhausted)", style="yellow")
            CONSOLE.print(msg)
        return 0

    if result.status == AuthHealthStatus.AUTH_INVALID:
        if not quiet:
            CONSOLE.print(Text("OAuth INVALID - reauthentication required", style="red"))
        return RunResult.AUTH_INVALID.exit_code

    # FAILED
    if not quiet:
        CONSOLE.print(Text("OAuth check failed (unexpected error)", style="red"))
    return RunResult.FAILED.exit_code
