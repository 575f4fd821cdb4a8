"""Load command - register a launch item with launchctl by label or name."""

from ..StageResult import StageResult
from ._run_transition import _run_transition


def cmd_load(label: str) -> StageResult:
    """Load the launch item identified by label (label, name or path)."""
    return _run_transition("load", label)
