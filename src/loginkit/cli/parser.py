"""CLI parser construction."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version


def _package_version() -> str:
    try:
        return version("loginkit")
    except PackageNotFoundError:
        return "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="loginkit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    login_parser = subparsers.add_parser(
        "login",
        aliases=["auth", "hello", "hi"],
        help="Retrieve credentials to access the artifact repository",
    )
    login_parser.set_defaults(command="login")
    login_parser.add_argument(
        "identity",
        nargs="*",
        help="Identity to log in as, 'username@domain.com' or just '@domain.com'",
    )
    login_parser.add_argument("--config", default=None, help="Path to config.json")
    login_parser.add_argument("--identity", dest="configured_identity", default=None, help="Identity to use")
    login_parser.add_argument("--server", default=None, help="Authentication service URL")
    login_parser.add_argument("--default-domain", default=None, help="Domain used when the identity has none")
    login_parser.add_argument("--identity-store", default=None, help="Path to the identity store file")
    login_parser.add_argument(
        "--login-attempts",
        type=int,
        default=None,
        help="Maximum number of login attempts while waiting for approval",
    )
    login_parser.add_argument("--login-wait", type=float, default=None, help="Seconds between login attempts")
    login_parser.add_argument("--login-jitter", type=float, default=None, help="Random spread of the wait, in seconds")
    login_parser.add_argument(
        "--request-timeout",
        type=float,
        default=None,
        help="Timeout of a single login request, in seconds",
    )
    login_parser.add_argument(
        "--deadline",
        type=float,
        default=None,
        help="Give up waiting for approval after this many seconds",
    )
    login_parser.add_argument("--agent-socket", default=None, help="ssh-agent socket (defaults to SSH_AUTH_SOCK)")
    login_parser.add_argument("--agent-lifetime", type=int, default=None, help="Lifetime of the agent key, in seconds")
    login_parser.add_argument(
        "--side-channel-address",
        default=None,
        help=argparse.SUPPRESS,
    )
    login_parser.add_argument(
        "--no-side-channel",
        action="store_true",
        help="Do not seed the local proxy daemon with the new credentials",
    )
    login_parser.add_argument(
        "--debug",
        "-d",
        action="store_true",
        help="Print extra debugging information. Mostly useful for development",
    )
    login_parser.add_argument(
        "--no-default",
        "-n",
        action="store_true",
        help="Do not mark this identity as the default identity to use",
    )
    login_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


__all__ = ["build_parser"]
