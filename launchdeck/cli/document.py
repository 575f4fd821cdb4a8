"""Document Typer app factory."""

from pathlib import Path

import typer

from launchdeck.api.document.cmd_show import cmd_show
from launchdeck.cli._handle_stage_result import _handle_stage_result


def document() -> typer.Typer:
    """Create and configure the document Typer app."""
    app = typer.Typer(
        name="document",
        help="Definition files",
        pretty_exceptions_show_locals=False,
        pretty_exceptions_enable=False,
        context_settings={"help_option_names": ["-h", "--help"]},
        invoke_without_command=True,
    )

    @app.callback(invoke_without_command=True)
    def callback(ctx: typer.Context) -> None:
        """Show help when no subcommand is provided."""
        if ctx.invoked_subcommand is None:
            typer.echo(ctx.get_help(), err=True)
            raise typer.Exit()

    @app.command(name="show")
    def show_cmd(
        path: Path = typer.Argument(..., help="Definition file"),  # noqa: B008
        raw: bool = typer.Option(False, "--raw", help="Include the original file text"),
    ) -> None:
        """Parse a definition file and show its fields."""
        _handle_stage_result(cmd_show)(path, raw=raw)

    return app
