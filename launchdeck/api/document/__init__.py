"""Document module - launchd property list model and edit sessions."""

from .CalendarInterval import CalendarInterval
from .DocumentError import DocumentError, InvalidFormat, MissingIdentifier, ReadOnlyDocument
from .EditSession import EditSession
from .apply_changes import apply_changes
from .PlistDocument import STRUCTURED_KEYS, PlistDocument

__all__ = [
    "STRUCTURED_KEYS",
    "apply_changes",
    "CalendarInterval",
    "DocumentError",
    "EditSession",
    "InvalidFormat",
    "MissingIdentifier",
    "PlistDocument",
    "ReadOnlyDocument",
]
