"""Item Typer app factory."""

from pathlib import Path
from typing import Any

import typer

from launchdeck.api.document.CalendarInterval import CalendarInterval
from launchdeck.api.item.cmd_delete import cmd_delete
from launchdeck.api.item.cmd_diagnose import cmd_diagnose
from launchdeck.api.item.cmd_disable import cmd_disable
from launchdeck.api.item.cmd_edit import cmd_edit
from launchdeck.api.item.cmd_enable import cmd_enable
from launchdeck.api.item.cmd_install import cmd_install
from launchdeck.api.item.cmd_list import cmd_list
from launchdeck.api.item.cmd_load import cmd_load
from launchdeck.api.item.cmd_unload import cmd_unload
from launchdeck.cli._handle_stage_result import _handle_stage_result


def _parse_environment(pairs: list[str]) -> dict[str, str]:
    environment: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="--env")
        environment[key] = value
    return environment


def _switch(on: bool, off: bool, name: str) -> bool | None:
    if on and off:
        raise typer.BadParameter(f"--{name} and --no-{name} are mutually exclusive", param_hint=f"--{name}")
    if on or off:
        return on
    return None


def _parse_calendar(specs: list[str]) -> list[CalendarInterval]:
    try:
        return [CalendarInterval.parse_spec(spec) for spec in specs]
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--calendar") from e


def item() -> typer.Typer:
    """Create and configure the item Typer app."""
    app = typer.Typer(
        name="item",
        help="Launch agents and daemons",
        pretty_exceptions_show_locals=False,
        pretty_exceptions_enable=False,
        context_settings={"help_option_names": ["-h", "--help"]},
        invoke_without_command=True,
    )

    @app.callback(invoke_without_command=True)
    def callback(ctx: typer.Context) -> None:
        """Launch item operations - shows available commands."""
        if ctx.invoked_subcommand is None:
            typer.echo(ctx.get_help(), err=True)
            raise typer.Exit()

    @app.command(name="list")
    def list_cmd(
        scope: str = typer.Option("", "--scope", "-s", help="user_agent, system_agent or system_daemon"),
        search: str = typer.Option("", "--search", "-q", help="Match name, label or path (case-insensitive)"),
    ) -> None:
        """List launch items with their status."""
        _handle_stage_result(cmd_list)(scope=scope, search=search)

    @app.command(name="load")
    def load_cmd(label: str = typer.Argument(..., help="Label, name or path of the item")) -> None:
        """Load (bootstrap) an item."""
        _handle_stage_result(cmd_load)(label)

    @app.command(name="unload")
    def unload_cmd(label: str = typer.Argument(..., help="Label, name or path of the item")) -> None:
        """Unload (bootout) an item."""
        _handle_stage_result(cmd_unload)(label)

    @app.command(name="enable")
    def enable_cmd(label: str = typer.Argument(..., help="Label, name or path of the item")) -> None:
        """Enable an item."""
        _handle_stage_result(cmd_enable)(label)

    @app.command(name="disable")
    def disable_cmd(label: str = typer.Argument(..., help="Label, name or path of the item")) -> None:
        """Disable an item."""
        _handle_stage_result(cmd_disable)(label)

    @app.command(name="delete")
    def delete_cmd(label: str = typer.Argument(..., help="Label, name or path of the item")) -> None:
        """Unload an item and remove its definition file."""
        _handle_stage_result(cmd_delete)(label)

    @app.command(name="install")
    def install_cmd(
        source: Path = typer.Argument(..., help="Definition file to copy into the user agents directory"),  # noqa: B008
        replace: bool = typer.Option(False, "--replace", help="Overwrite an existing file of the same name"),
        start: bool = typer.Option(False, "--start", help="Enable and load the agent after copying"),
    ) -> None:
        """Install a user agent from a definition file."""
        _handle_stage_result(cmd_install)(source, replace=replace, start=start)

    @app.command(name="edit")
    def edit_cmd(
        label: str = typer.Argument(..., help="Label, name or path of the item"),
        program: str | None = typer.Option(None, "--program", help="Program path, empty string to clear"),
        arguments: list[str] | None = typer.Option(None, "--arg", help="Program argument (repeat for each)"),  # noqa: B008
        run_at_load: bool = typer.Option(False, "--run-at-load", help="Start when loaded"),
        no_run_at_load: bool = typer.Option(False, "--no-run-at-load", help="Do not start when loaded"),
        keep_alive: bool = typer.Option(False, "--keep-alive", help="Restart when it exits"),
        no_keep_alive: bool = typer.Option(False, "--no-keep-alive", help="Do not restart when it exits"),
        start_interval: int | None = typer.Option(None, "--start-interval", help="Seconds between starts"),
        calendar: list[str] | None = typer.Option(  # noqa: B008
            None, "--calendar", help="Calendar entry such as Hour=9,Minute=15 (repeat for each)"
        ),
        watch_paths: list[str] | None = typer.Option(None, "--watch-path", help="Watched path (repeat for each)"),  # noqa: B008
        env: list[str] | None = typer.Option(None, "--env", help="Environment variable KEY=VALUE (repeat for each)"),  # noqa: B008
        working_directory: str | None = typer.Option(None, "--working-directory", help="Working directory"),
        standard_out_path: str | None = typer.Option(None, "--stdout", help="Standard output file"),
        standard_error_path: str | None = typer.Option(None, "--stderr", help="Standard error file"),
        throttle_interval: int | None = typer.Option(None, "--throttle-interval", help="Minimum seconds between spawns"),
        nice: int | None = typer.Option(None, "--nice", help="Scheduling priority"),
        process_type: str | None = typer.Option(None, "--process-type", help="Background, Standard, Adaptive or Interactive"),
        reload: bool = typer.Option(False, "--reload", help="Unload and load the item after saving"),
    ) -> None:
        """Edit structured fields of a user agent definition.

        List options replace the whole field.
        """
        changes: dict[str, Any] = {
            "program": program,
            "program_arguments": arguments or None,
            "run_at_load": _switch(run_at_load, no_run_at_load, "run-at-load"),
            "keep_alive": _switch(keep_alive, no_keep_alive, "keep-alive"),
            "start_interval": start_interval,
            "start_calendar_interval": _parse_calendar(calendar) if calendar else None,
            "watch_paths": watch_paths or None,
            "environment_variables": _parse_environment(env) if env else None,
            "working_directory": working_directory,
            "standard_out_path": standard_out_path,
            "standard_error_path": standard_error_path,
            "throttle_interval": throttle_interval,
            "nice": nice,
            "process_type": process_type,
        }
        changes = {name: value for name, value in changes.items() if value is not None}
        _handle_stage_result(cmd_edit)(label, changes, reload=reload)

    @app.command(name="diagnose")
    def diagnose_cmd() -> None:
        """Report on each scope directory."""
        _handle_stage_result(cmd_diagnose)()

    return app
