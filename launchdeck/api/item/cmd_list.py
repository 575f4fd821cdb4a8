"""List command - scan every scope and show the matching launch items."""

import asyncio
from collections.abc import Iterator

from ..StageResult import StageResult
from . import _build_engine as build_module
from .Scope import Scope


def cmd_list(scope: str = "", search: str = "") -> StageResult:
    """List launch items.

    Args:
        scope: Scope name (user_agent, system_agent, system_daemon); empty for all scopes
        search: Case-insensitive text matched against display name and label
    """

    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        def finish(message: str, success: bool, items: list[dict], errors: list[str], warnings: list[str]) -> None:
            result_obj.finish(
                message,
                {
                    "errors": errors,
                    "warnings": warnings,
                    "scope": scope,
                    "search": search,
                    "count": len(items),
                    "items": items,
                },
                success,
            )

        yield (0.1, "Validating scope...")
        selected: Scope | None = None
        if scope:
            try:
                selected = Scope(scope)
            except ValueError:
                yield (1.0, "Complete")
                error = f"Unknown scope: {scope!r} (supported: {[s.value for s in Scope]})"
                finish(error, False, [], [error], [])
                return

        yield (0.2, "Loading configuration...")
        try:
            engine = build_module._build_engine()
        except ValueError as e:
            yield (1.0, "Complete")
            finish(f"Error: {e}", False, [], [str(e)], [])
            return

        yield (0.4, "Scanning launch items...")
        asyncio.run(engine.refresh())

        yield (0.9, "Filtering...")
        items = [item.to_dict() for item in engine.filtered(scope=selected, search=search)]
        errors = [engine.error_message] if engine.error_message else []

        yield (1.0, "Complete")
        finish(f"Found {len(items)} launch item(s)", not errors, items, errors, list(engine.scan_errors))

    return StageResult(announce="Listing launch items...", progress_callback=do_work)
