"""Delete command - unload a launch item and remove its definition file."""

import asyncio
from collections.abc import Iterator

from ..StageResult import StageResult
from . import _build_engine as build_module


def cmd_delete(label: str) -> StageResult:
    """Delete the launch item identified by label, name or path."""

    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        def finish(message: str, deleted: bool, path: str, errors: list[str]) -> None:
            result_obj.finish(
                message,
                {
                    "errors": errors,
                    "warnings": [],
                    "label": label,
                    "path": path,
                    "deleted": deleted,
                },
                deleted,
            )

        yield (0.1, "Loading configuration...")
        try:
            engine = build_module._build_engine()
        except ValueError as e:
            yield (1.0, "Complete")
            finish(f"Error: {e}", False, "", [str(e)])
            return

        yield (0.3, "Scanning launch items...")
        asyncio.run(engine.refresh())
        item = engine.find(label)
        if item is None:
            yield (1.0, "Complete")
            message = f"No launch item matches {label!r}"
            finish(message, False, "", [message])
            return

        yield (0.6, f"Deleting {item.path}...")
        deleted = asyncio.run(engine.delete(item))

        yield (1.0, "Complete")
        if deleted:
            finish(f"Deleted {item.display_name}", True, str(item.path), [])
        else:
            error = engine.error_message or f"Failed to delete {item.display_name}"
            finish(error, False, str(item.path), [error])

    return StageResult(announce=f"Deleting launch item {label}...", progress_callback=do_work)
