"""Edit command - change structured fields of a user agent definition."""

import asyncio
from collections.abc import Iterator
from typing import Any

from ..StageResult import StageResult
from ..document.DocumentError import DocumentError
from ..document.apply_changes import apply_changes
from . import _build_engine as build_module


def cmd_edit(label: str, changes: dict[str, Any], reload: bool = False) -> StageResult:
    """Apply ``changes`` to the item's definition and save it if anything changed.

    Args:
        label: Label, name or path of the item
        changes: Structured field values keyed by attribute name (e.g. ``run_at_load``)
        reload: Unload and load the item afterwards when it is loaded
    """

    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        state: dict[str, Any] = {"path": "", "changed": False, "saved": False, "reloaded": False, "fields": {}}

        def finish(message: str, success: bool, errors: list[str], warnings: list[str]) -> None:
            result_obj.finish(
                message,
                {"errors": errors, "warnings": warnings, "label": label, **state},
                success,
            )

        yield (0.1, "Loading configuration...")
        try:
            engine = build_module._build_engine()
        except ValueError as e:
            yield (1.0, "Complete")
            finish(f"Error: {e}", False, [str(e)], [])
            return

        yield (0.2, "Scanning launch items...")
        asyncio.run(engine.refresh())
        item = engine.find(label)
        if item is None:
            yield (1.0, "Complete")
            message = f"No launch item matches {label!r}"
            finish(message, False, [message], [])
            return
        state["path"] = str(item.path)

        yield (0.4, f"Opening {item.path}...")
        try:
            session = engine.open_editor(item)
            apply_changes(session.document, changes)
        except (OSError, DocumentError, ValueError) as e:
            yield (1.0, "Complete")
            finish(f"Error editing {item.display_name}: {e}", False, [str(e)], [])
            return
        state["fields"] = session.document.structured_fields()
        state["changed"] = session.is_dirty

        if not session.is_dirty:
            yield (1.0, "Complete")
            finish(f"No changes to {item.display_name}", True, [], [])
            return

        yield (0.6, "Saving...")
        try:
            session.save()
        except (OSError, DocumentError) as e:
            yield (1.0, "Complete")
            finish(f"Save failed: {e}", False, [str(e)], [])
            return
        state["saved"] = True

        warnings: list[str] = []
        if item.is_loaded and reload:
            yield (0.8, f"Reloading {item.label}...")
            state["reloaded"] = asyncio.run(engine.reload(item))
            if not state["reloaded"]:
                yield (1.0, "Complete")
                error = engine.error_message or f"Failed to reload {item.display_name}"
                finish(f"Saved {item.display_name} but reload failed", False, [error], [])
                return
        elif item.is_loaded:
            warnings.append(f"{item.display_name} is loaded; reload it to apply the changes")

        yield (1.0, "Complete")
        finish(f"Saved {item.display_name}", True, [], warnings)

    return StageResult(announce=f"Editing launch item {label}...", progress_callback=do_work)
