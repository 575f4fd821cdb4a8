"""Entry point for running launchdeck as a module."""

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
