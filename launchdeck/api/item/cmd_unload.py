"""Unload command - remove a launch item from launchctl by label or name."""

from ..StageResult import StageResult
from ._run_transition import _run_transition


def cmd_unload(label: str) -> StageResult:
    """Unload the launch item identified by label (label, name or path)."""
    return _run_transition("unload", label)
