"""CLI app entrypoint and error mapping."""

from __future__ import annotations

import sys

from loginkit import (
    ConfigError,
    ConnectError,
    FatalAuthError,
    LoginCancelledError,
    PersistenceError,
    RetryExhaustedError,
    UsageError,
)

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_USAGE = 2
EXIT_CONNECT = 3
EXIT_REJECTED = 4
EXIT_TIMED_OUT = 5
EXIT_PERSISTENCE = 6
EXIT_CANCELLED = 130


def main(argv: list[str] | None = None) -> int:
    import loginkit.cli as cli

    parser = cli.build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        cli.logging.basicConfig(level=cli.logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)
    elif args.debug:
        # Side-channel transport loggers raise their own level while tracing.
        cli.logging.basicConfig(level=cli.logging.WARNING, format="%(name)s %(message)s", stream=sys.stderr)

    try:
        cli.asyncio.run(cli._run_login(args))
        return EXIT_OK
    except (UsageError, ConfigError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_USAGE
    except ConnectError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_CONNECT
    except FatalAuthError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_REJECTED
    except RetryExhaustedError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_TIMED_OUT
    except PersistenceError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_PERSISTENCE
    except (LoginCancelledError, KeyboardInterrupt) as exc:
        print(f"error: {exc or 'login cancelled'}", file=sys.stderr)
        return EXIT_CANCELLED
    except Exception as exc:  # pragma: no cover
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_UNEXPECTED


__all__ = ["main"]
