"""Apply field edits to a document."""

from typing import Any

from .CalendarInterval import CalendarInterval
from .PlistDocument import STRUCTURED_KEYS, PlistDocument

_OPTIONAL_STRINGS = {"program", "working_directory", "standard_out_path", "standard_error_path", "process_type"}
_OPTIONAL_INTS = {"start_interval", "throttle_interval", "nice"}
_BOOLS = {"run_at_load", "keep_alive"}
_STRING_LISTS = {"program_arguments", "watch_paths"}


def apply_changes(document: PlistDocument, changes: dict[str, Any]) -> list[str]:
    """Set structured fields on ``document`` by attribute name.

    An empty string clears an optional string field. The label cannot be changed.
    Assigning a field drops any value of another type that parsing kept in
    ``opaque`` under the same plist key, so the assignment is what gets saved.

    Returns:
        Names of the fields that were assigned

    Raises:
        ValueError: If a name is unknown or a value has the wrong type
    """
    plist_keys = {attr: key for key, attr in STRUCTURED_KEYS.items()}
    editable = set(plist_keys) - {"label"}
    assigned: list[str] = []
    for name, value in changes.items():
        if name not in editable:
            raise ValueError(f"Unknown or read-only field: {name!r}")
        if name in _OPTIONAL_STRINGS:
            if value is not None and not isinstance(value, str):
                raise ValueError(f"{name} must be a string")
            value = value or None
        elif name in _OPTIONAL_INTS:
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                raise ValueError(f"{name} must be an integer")
        elif name in _BOOLS:
            if not isinstance(value, bool):
                raise ValueError(f"{name} must be a boolean")
        elif name in _STRING_LISTS:
            if not all(isinstance(v, str) for v in value):
                raise ValueError(f"{name} must be a list of strings")
            value = list(value)
        elif name == "environment_variables":
            if not all(isinstance(k, str) and isinstance(v, str) for k, v in dict(value).items()):
                raise ValueError(f"{name} must map strings to strings")
            value = dict(value)
        elif name == "start_calendar_interval":
            value = [entry if isinstance(entry, CalendarInterval) else CalendarInterval.from_dict(entry) for entry in value]
        setattr(document, name, value)
        document.opaque.pop(plist_keys[name], None)
        assigned.append(name)
    return assigned
