"""StageResult dataclass for the announce/progress/result/output command pattern."""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any


@dataclass
class StageResult:
    """What a ``cmd_*`` function hands to its caller.

    ``announce`` is shown before any work starts. ``progress_callback`` is a
    generator that does the work, yields ``(fraction, message)`` pairs and
    must end by calling :meth:`finish`.
    """

    announce: str
    progress_callback: Callable[["StageResult"], Iterator[tuple[float, str]]]
    result: str = ""
    output: dict[str, Any] = field(default_factory=dict)
    success: bool = False

    def finish(self, message: str, output: dict[str, Any], success: bool) -> None:
        """Record the one-line result, the structured output and the outcome."""
        self.result = message
        self.output = output
        self.success = success

    def drain(self) -> "StageResult":
        """Run the progress generator to completion without displaying it."""
        for _ in self.progress_callback(self):
            pass
        return self
