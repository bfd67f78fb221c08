"""Module entrypoint for ``python -m loginkit``."""

from loginkit.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
