"""Disable command - disable a launch item by label or name."""

from ..StageResult import StageResult
from ._run_transition import _run_transition


def cmd_disable(label: str) -> StageResult:
    """Disable the launch item identified by label (label, name or path)."""
    return _run_transition("disable", label)
