"""CLI - main entry point."""

import locale
import sys
from contextlib import suppress


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    import click
    import typer

    from launchdeck import __version__
    from launchdeck.cli._create_app import _create_app

    if argv is None:
        argv = sys.argv[1:]

    # Display-name ordering collates with the user's locale
    with suppress(locale.Error):
        locale.setlocale(locale.LC_COLLATE, "")

    if "--version" in argv:
        print(f"ldeck {__version__}")
        return 0

    app = _create_app()
    try:
        app(argv)
        return 0
    except SystemExit as e:
        code = e.code
        return code if isinstance(code, int) else (0 if code is None else 1)
    except typer.Exit as e:
        return e.exit_code
    except click.exceptions.UsageError as e:
        typer.echo(f"Usage error: {e}", err=True)
        return 1
    except Exception as e:
        typer.echo(f"Unhandled error: {e}", err=True)
        return 1
