"""Shared body of the load, unload, enable and disable commands."""

import asyncio
from collections.abc import Iterator

from ..StageResult import StageResult
from . import _build_engine as build_module

_PROGRESS = {
    "load": "Loading",
    "unload": "Unloading",
    "enable": "Enabling",
    "disable": "Disabling",
}


def _run_transition(action: str, key: str) -> StageResult:
    """Refresh, find ``key`` and apply ``action`` to it."""

    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        def finish(message: str, success: bool, errors: list[str], item: dict) -> None:
            result_obj.finish(
                message,
                {
                    "errors": errors,
                    "warnings": [],
                    "label": key,
                    "action": action,
                    "item": item,
                },
                success,
            )

        yield (0.1, "Loading configuration...")
        try:
            engine = build_module._build_engine()
        except ValueError as e:
            yield (1.0, "Complete")
            finish(f"Error: {e}", False, [str(e)], {})
            return

        yield (0.3, "Scanning launch items...")
        asyncio.run(engine.refresh())
        item = engine.find(key)
        if item is None:
            yield (1.0, "Complete")
            message = f"No launch item matches {key!r}"
            finish(message, False, [message], {})
            return

        yield (0.6, f"{_PROGRESS[action]} {item.label}...")
        ok = asyncio.run(getattr(engine, action)(item))

        yield (1.0, "Complete")
        if ok:
            finish(f"{_PROGRESS[action]} {item.display_name} succeeded ({item.status.value})", True, [], item.to_dict())
        else:
            error = engine.error_message or f"Failed to {action} {item.display_name}"
            finish(error, False, [error], item.to_dict())

    return StageResult(announce=f"{_PROGRESS[action]} launch item {key}...", progress_callback=do_work)
