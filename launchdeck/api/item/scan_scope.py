"""Discover launch item definitions in a scope directory."""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ...logging_config import get_logger
from ..document.DocumentError import DocumentError
from ..document.PlistDocument import PlistDocument
from .ItemStatus import ItemStatus
from .Scope import Scope
from .ServiceItem import DEFINITION_SUFFIX, ServiceItem
from .StatusProber import StatusProber

logger = get_logger("scanner")


@dataclass
class ScanResult:
    """Items found in one scope, plus the files that could not be used."""

    scope: Scope
    directory: Path
    items: list[ServiceItem] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


@dataclass
class ScopeDiagnostic:
    """State of one scope directory, independent of launchctl."""

    scope: Scope
    directory: Path
    exists: bool
    definition_count: int = 0
    error: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "scope": self.scope.value,
            "directory": str(self.directory),
            "exists": self.exists,
            "definition_count": self.definition_count,
            "error": self.error,
        }


def list_definition_files(directory: Path) -> list[Path]:
    """Definition files directly inside ``directory``, sorted by name.

    Returns an empty list when the directory is missing or not a directory.

    Raises:
        OSError: If the directory exists but cannot be listed
    """
    if not directory.is_dir():
        return []
    return sorted(
        (entry for entry in directory.iterdir() if entry.name.endswith(DEFINITION_SUFFIX)),
        key=lambda entry: entry.name,
    )


def inspect_scope_directory(scope: Scope, directory: Path) -> ScopeDiagnostic:
    if not directory.is_dir():
        return ScopeDiagnostic(scope, directory, exists=False, error="Directory does not exist")
    try:
        count = len(list_definition_files(directory))
    except OSError as e:
        return ScopeDiagnostic(scope, directory, exists=True, error=str(e))
    return ScopeDiagnostic(scope, directory, exists=True, definition_count=count)


async def probe_item(prober: StatusProber, label: str, scope: Scope) -> tuple[ItemStatus, bool, bool]:
    """Run both probes for a label concurrently, off the event loop.

    Returns:
        (status, is_loaded, is_enabled)
    """
    (status, loaded), enabled = await asyncio.gather(
        asyncio.to_thread(prober.probe, label, scope),
        asyncio.to_thread(prober.probe_enabled, label, scope),
    )
    return status, loaded, enabled


def _read_label(path: Path) -> str:
    return PlistDocument.parse(path.read_bytes()).label


async def scan_scope(scope: Scope, directory: Path, prober: StatusProber) -> ScanResult:
    """Parse every definition in ``directory`` and probe the ones that parse.

    A file that cannot be read or parsed is logged and recorded in
    ``ScanResult.errors``; the rest of the scan continues.

    Raises:
        OSError: If the directory exists but cannot be listed
    """
    result = ScanResult(scope=scope, directory=directory)
    files = await asyncio.to_thread(list_definition_files, directory)
    if not files:
        logger.debug("No definitions for %s in %s", scope.title, directory)
        return result

    candidates: list[tuple[Path, str]] = []
    for path in files:
        try:
            label = await asyncio.to_thread(_read_label, path)
        except (OSError, DocumentError) as e:
            logger.warning("Skipping %s: %s", path, e)
            result.errors.append(f"{path.name}: {e}")
            continue
        candidates.append((path, label))

    probes = await asyncio.gather(*(probe_item(prober, label, scope) for _, label in candidates))
    for (path, label), (status, loaded, enabled) in zip(candidates, probes):
        item = ServiceItem(name=path.name, label=label, scope=scope, path=path)
        item.apply_probe(status, loaded, enabled)
        result.items.append(item)
        logger.debug("Found %s (%s, loaded=%s, enabled=%s)", label, status.value, loaded, enabled)

    logger.info("Loaded %d item(s) from %s", len(result.items), scope.title)
    return result
