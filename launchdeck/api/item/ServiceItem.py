"""A discovered definition file bound to its live status."""

import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .ItemStatus import ItemStatus
from .Scope import Scope

DEFINITION_SUFFIX = ".plist"


@dataclass
class ServiceItem:
    """One launch item as last probed.

    ``id`` is ephemeral and only identifies the item within one engine's list;
    ``label`` is the identifier the definition declares for itself.
    """

    name: str
    label: str
    scope: Scope
    path: Path
    status: ItemStatus = ItemStatus.UNKNOWN
    is_loaded: bool = False
    is_enabled: bool = True
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self) -> None:
        if not self.is_loaded and self.status is ItemStatus.RUNNING:
            raise ValueError(f"{self.label}: an item that is not loaded cannot be running")

    @property
    def display_name(self) -> str:
        return self.name.removesuffix(DEFINITION_SUFFIX)

    @property
    def requires_privilege(self) -> bool:
        return self.scope.requires_privilege

    def apply_probe(self, status: ItemStatus, is_loaded: bool, is_enabled: bool) -> None:
        """Record a probe result, keeping unloaded items out of the running state."""
        self.status = status if is_loaded else ItemStatus.STOPPED
        self.is_loaded = is_loaded
        self.is_enabled = is_enabled

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "name": self.display_name,
            "scope": self.scope.value,
            "path": str(self.path),
            "status": self.status.value,
            "loaded": self.is_loaded,
            "enabled": self.is_enabled,
            "requires_privilege": self.requires_privilege,
        }
