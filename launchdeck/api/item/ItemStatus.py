"""Live status of a launch item."""

from enum import Enum


class ItemStatus(str, Enum):
    RUNNING = "running"
    STOPPED = "stopped"
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()
