"""Show command - parse a definition file and report its fields."""

from collections.abc import Iterator
from pathlib import Path

from ..StageResult import StageResult
from .DocumentError import DocumentError
from .PlistDocument import PlistDocument


def cmd_show(path: Path, raw: bool = False) -> StageResult:
    """Parse ``path`` and show its structured fields and opaque key names.

    Args:
        path: Definition file
        raw: Include the file's original text
    """
    path = Path(path).expanduser()

    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        def finish(message: str, success: bool, errors: list[str], label: str = "", fields: dict | None = None,
                   opaque_keys: list[str] | None = None, raw_text: str = "") -> None:
            result_obj.finish(
                message,
                {
                    "errors": errors,
                    "warnings": [],
                    "path": str(path),
                    "valid": success,
                    "label": label,
                    "fields": fields or {},
                    "opaque_keys": opaque_keys or [],
                    "raw": raw_text,
                },
                success,
            )

        yield (0.3, f"Reading {path}...")
        try:
            data = path.read_bytes()
        except OSError as e:
            yield (1.0, "Complete")
            finish(f"Error reading {path}: {e}", False, [str(e)])
            return

        yield (0.6, "Parsing...")
        try:
            document = PlistDocument.parse(data)
        except DocumentError as e:
            yield (1.0, "Complete")
            finish(f"{path.name}: {e}", False, [str(e)])
            return

        yield (1.0, "Complete")
        finish(
            f"Parsed {document.label}",
            True,
            [],
            label=document.label,
            fields=document.structured_fields(),
            opaque_keys=list(document.opaque),
            raw_text=document.raw_text if raw else "",
        )

    return StageResult(announce=f"Reading definition {path}...", progress_callback=do_work)
