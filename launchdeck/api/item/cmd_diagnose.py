"""Diagnose command - report on each scope directory."""

from collections.abc import Iterator

from ..StageResult import StageResult
from . import _build_engine as build_module


def cmd_diagnose() -> StageResult:
    """Check that each scope directory exists and count its definitions."""

    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        yield (0.2, "Loading configuration...")
        try:
            engine = build_module._build_engine()
        except ValueError as e:
            yield (1.0, "Complete")
            result_obj.finish(
                f"Error: {e}",
                {"errors": [str(e)], "warnings": [], "scopes": []},
                False,
            )
            return

        yield (0.5, "Inspecting scope directories...")
        diagnostics = engine.diagnose()
        warnings = [f"{d.scope.title}: {d.error} ({d.directory})" for d in diagnostics if d.error]

        yield (1.0, "Complete")
        total = sum(d.definition_count for d in diagnostics)
        result_obj.finish(
            f"Found {total} definition file(s) in {sum(d.exists for d in diagnostics)} director(ies)",
            {
                "errors": [],
                "warnings": warnings,
                "scopes": [d.to_dict() for d in diagnostics],
            },
            True,
        )

    return StageResult(announce="Inspecting launch item directories...", progress_callback=do_work)
