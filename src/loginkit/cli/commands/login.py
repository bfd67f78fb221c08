"""Login command."""

from __future__ import annotations

import argparse
import asyncio
import signal
from typing import Any

from loginkit import LoginConfig, LoginResult, UsageError
from loginkit.cli.progress.rich import RichLoginProgress
from loginkit.config import apply_overrides, load_config


def config_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Map explicitly given flags to config keys. Unset flags map to ``None``."""
    return {
        "identity": args.configured_identity,
        "server": args.server,
        "default_domain": args.default_domain,
        "identity_store_path": args.identity_store,
        "request_timeout": args.request_timeout,
        "no_default": True if args.no_default else None,
        "side_channel_address": args.side_channel_address,
        "side_channel_enabled": False if args.no_side_channel else None,
        "retry.max_attempts": args.login_attempts,
        "retry.wait": args.login_wait,
        "retry.jitter": args.login_jitter,
        "agent.socket": args.agent_socket,
        "agent.lifetime": args.agent_lifetime,
    }


def build_config(args: argparse.Namespace) -> tuple[LoginConfig, frozenset[str]]:
    overrides = config_overrides(args)
    config = apply_overrides(load_config(args.config), overrides)
    pinned = frozenset(key for key, value in overrides.items() if value is not None)
    return config, pinned


def format_login_summary(result: LoginResult) -> str:
    if result.side_channel_ok is None:
        side_channel = "skipped"
    elif result.side_channel_ok:
        side_channel = "ok"
    else:
        side_channel = "failed (ignored)"

    lines = [
        "",
        "loginkit - login complete",
        "",
        f"  Identity:      {result.identity.key}",
        f"  Default:       {'yes' if result.default_set else 'no'}",
        f"  Side channel:  {side_channel}",
        "",
    ]
    return "\n".join(lines)


async def run_login(args: argparse.Namespace) -> LoginResult:
    import loginkit.cli as cli

    if len(args.identity) > 1:
        raise UsageError("use as 'loginkit login username@domain.com' or just '@domain.com' - exactly one argument")
    argument = args.identity[0] if args.identity else None

    config, pinned = build_config(args)

    cancel = asyncio.Event()
    loop = asyncio.get_running_loop()
    installed = _install_signal_handlers(loop, cancel)
    deadline = loop.call_later(args.deadline, cancel.set) if args.deadline else None
    try:
        if not args.verbose:
            with RichLoginProgress() as progress:
                flow = cli.LoginFlow(config=config, progress=progress, cancel=cancel, pinned=pinned, debug=args.debug)
                result = await flow.run(argument)
        else:
            flow = cli.LoginFlow(config=config, cancel=cancel, pinned=pinned, debug=args.debug)
            result = await flow.run(argument)
    finally:
        if deadline is not None:
            deadline.cancel()
        for signum in installed:
            loop.remove_signal_handler(signum)

    print(format_login_summary(result))
    return result


def _install_signal_handlers(loop: asyncio.AbstractEventLoop, cancel: asyncio.Event) -> list[int]:
    installed: list[int] = []
    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(signum, cancel.set)
        except (NotImplementedError, RuntimeError):
            # Not supported on this platform or outside the main thread.
            continue
        installed.append(signum)
    return installed


__all__ = ["build_config", "config_overrides", "format_login_summary", "run_login"]
