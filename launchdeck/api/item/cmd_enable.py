"""Enable command - enable a launch item by label or name."""

from ..StageResult import StageResult
from ._run_transition import _run_transition


def cmd_enable(label: str) -> StageResult:
    """Enable the launch item identified by label (label, name or path)."""
    return _run_transition("enable", label)
