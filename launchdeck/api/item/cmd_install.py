"""Install command - copy a definition into the user agents directory."""

import asyncio
from collections.abc import Iterator
from pathlib import Path

from ..StageResult import StageResult
from ..document.DocumentError import DocumentError
from . import _build_engine as build_module
from .EngineError import EngineError


def cmd_install(source: Path, replace: bool = False, start: bool = False) -> StageResult:
    """Install ``source`` as a user agent.

    Args:
        source: Definition file to copy
        replace: Overwrite an existing file of the same name
        start: Enable and load the agent after copying (best effort)
    """
    source = Path(source).expanduser()

    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        def finish(message: str, success: bool, errors: list[str], warnings: list[str], **fields) -> None:
            result_obj.finish(
                message,
                {
                    "errors": errors,
                    "warnings": warnings,
                    "source": str(source),
                    "label": fields.get("label", ""),
                    "path": fields.get("path", ""),
                    "installed": success,
                    "replaced": fields.get("replaced", False),
                    "started": fields.get("started", False),
                },
                success,
            )

        yield (0.1, "Loading configuration...")
        try:
            engine = build_module._build_engine()
        except ValueError as e:
            yield (1.0, "Complete")
            finish(f"Error: {e}", False, [str(e)], [])
            return
        engine.auto_refresh_after_install = False

        yield (0.4, f"Installing {source.name}...")
        try:
            installed = asyncio.run(engine.install_user_agent(source, enable_and_start=start, replace=replace))
        except (DocumentError, EngineError) as e:
            yield (1.0, "Complete")
            finish(f"Error installing {source.name}: {e}", False, [str(e)], [])
            return

        yield (1.0, "Complete")
        finish(
            f"Installed {installed.label} to {installed.path}",
            True,
            [],
            installed.warnings,
            label=installed.label,
            path=str(installed.path),
            replaced=installed.replaced,
            started=installed.started,
        )

    return StageResult(announce=f"Installing user agent from {source}...", progress_callback=do_work)
