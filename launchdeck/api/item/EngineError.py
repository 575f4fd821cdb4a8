"""Failures of engine operations."""

from pathlib import Path


class EngineError(Exception):
    """Base class for reconciliation engine failures."""


class CommandFailure(EngineError):
    """An external command exited non-zero or could not be started."""

    def __init__(self, command: str, arguments: list[str], output: str):
        self.command = command
        self.arguments = arguments
        self.output = output
        detail = output.strip() or "command failed"
        super().__init__(detail)


class IOFailure(EngineError):
    """A local filesystem operation failed."""


class CopyFailed(IOFailure):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Copy failed: {reason}")


class ReplaceConfirmationRequired(EngineError):
    """The install destination exists and replacement was not confirmed."""

    def __init__(self, destination: Path):
        self.destination = destination
        super().__init__(f"{destination.name} already exists in {destination.parent}; confirm replacement to overwrite")
