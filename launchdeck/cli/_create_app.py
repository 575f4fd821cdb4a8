"""Create the main Typer CLI app."""

import typer

from launchdeck.api.config.LaunchdeckConfig import LaunchdeckConfig
from launchdeck.cli.config import config
from launchdeck.cli.document import document
from launchdeck.cli.item import item
from launchdeck.logging_config import level_from_name, setup_logging


def _configure_logging() -> None:
    try:
        cfg = LaunchdeckConfig.load()
    except ValueError as e:
        # Commands report the invalid configuration themselves
        setup_logging()
        typer.echo(f"Warning: {e}", err=True)
        return
    setup_logging(level=level_from_name(cfg.log.level), log_file=cfg.get_log_path())


def _create_app() -> typer.Typer:
    """Create and configure the main CLI Typer app."""
    app = typer.Typer(
        pretty_exceptions_show_locals=False,
        pretty_exceptions_enable=False,
        help="Launchdeck - inspect, edit and control launchd items",
        context_settings={"help_option_names": ["-h", "--help"]},
        invoke_without_command=True,
    )

    app.add_typer(item(), name="item")
    app.add_typer(document(), name="document")
    app.add_typer(config(), name="config")

    @app.callback(invoke_without_command=True)
    def main_callback(
        ctx: typer.Context,
        display: str = typer.Option("yaml", "--display", "-d", help="Output format: json or yaml"),
    ) -> None:
        if display not in ("json", "yaml"):
            typer.echo(f"Error: --display must be 'json' or 'yaml', got '{display}'", err=True)
            raise typer.Exit(1)

        ctx.ensure_object(dict)
        ctx.obj["display_format"] = display

        if ctx.invoked_subcommand is None:
            typer.echo(ctx.get_help())
            raise typer.Exit()

        _configure_logging()

    return app
