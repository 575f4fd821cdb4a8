"""Outcome of installing a user agent."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class InstallResult:
    label: str
    path: Path
    replaced: bool = False
    started: bool = False
    warnings: list[str] = field(default_factory=list)
