"""Editable projection of a launchd property list.

Known keys become typed attributes; every other top-level key is kept in
``opaque`` exactly as read and written back unchanged on save.
"""

import plistlib
from dataclasses import dataclass, field
from typing import Any
from xml.parsers.expat import ExpatError

from .CalendarInterval import CalendarInterval
from .DocumentError import InvalidFormat, MissingIdentifier

# Plist key -> attribute name, in emission order
STRUCTURED_KEYS: dict[str, str] = {
    "Label": "label",
    "Program": "program",
    "ProgramArguments": "program_arguments",
    "RunAtLoad": "run_at_load",
    "KeepAlive": "keep_alive",
    "StartInterval": "start_interval",
    "StartCalendarInterval": "start_calendar_interval",
    "WatchPaths": "watch_paths",
    "EnvironmentVariables": "environment_variables",
    "WorkingDirectory": "working_directory",
    "StandardOutPath": "standard_out_path",
    "StandardErrorPath": "standard_error_path",
    "ThrottleInterval": "throttle_interval",
    "Nice": "nice",
    "ProcessType": "process_type",
}

_MISSING = object()


def _str(value: Any) -> Any:
    return value if isinstance(value, str) else _MISSING


def _int(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return _MISSING


def _bool(value: Any) -> Any:
    return value if isinstance(value, bool) else _MISSING


def _str_list(value: Any) -> Any:
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    return _MISSING


def _str_map(value: Any) -> Any:
    if isinstance(value, dict) and all(isinstance(k, str) and isinstance(v, str) for k, v in value.items()):
        return dict(value)
    return _MISSING


def _calendar(value: Any) -> Any:
    if isinstance(value, dict):
        return [CalendarInterval.from_dict(value)]
    if isinstance(value, list) and all(isinstance(v, dict) for v in value):
        return [CalendarInterval.from_dict(v) for v in value]
    return _MISSING


_READERS = {
    "Program": _str,
    "ProgramArguments": _str_list,
    "RunAtLoad": _bool,
    "KeepAlive": _bool,
    "StartInterval": _int,
    "StartCalendarInterval": _calendar,
    "WatchPaths": _str_list,
    "EnvironmentVariables": _str_map,
    "WorkingDirectory": _str,
    "StandardOutPath": _str,
    "StandardErrorPath": _str,
    "ThrottleInterval": _int,
    "Nice": _int,
    "ProcessType": _str,
}


def _load_dict(data: bytes) -> dict[str, Any]:
    try:
        parsed = plistlib.loads(data)
    except (ValueError, TypeError, KeyError, IndexError, OverflowError, ExpatError) as e:
        # plistlib.InvalidFileException is a ValueError
        raise InvalidFormat(str(e)) from e
    if not isinstance(parsed, dict):
        raise InvalidFormat(f"top level is {type(parsed).__name__}, expected a dictionary")
    return parsed


def _raw_text(data: bytes, parsed: dict[str, Any]) -> str:
    if not data.startswith(b"bplist"):
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            pass
    try:
        return plistlib.dumps(parsed, fmt=plistlib.FMT_XML, sort_keys=False).decode("utf-8")
    except (TypeError, ValueError, OverflowError):
        return ""


@dataclass
class PlistDocument:
    """A launch item definition split into typed fields and opaque passthrough keys."""

    label: str
    program: str | None = None
    program_arguments: list[str] = field(default_factory=list)
    run_at_load: bool = False
    keep_alive: bool = False
    start_interval: int | None = None
    start_calendar_interval: list[CalendarInterval] = field(default_factory=list)
    watch_paths: list[str] = field(default_factory=list)
    environment_variables: dict[str, str] = field(default_factory=dict)
    working_directory: str | None = None
    standard_out_path: str | None = None
    standard_error_path: str | None = None
    throttle_interval: int | None = None
    nice: int | None = None
    process_type: str | None = None
    opaque: dict[str, Any] = field(default_factory=dict)
    raw_text: str = field(default="", compare=False)

    @classmethod
    def parse(cls, data: bytes) -> "PlistDocument":
        """Parse XML or binary plist bytes.

        Structured keys holding a value of the wrong type are not fatal: the
        typed attribute stays at its default and the value is kept in
        ``opaque`` so that saving does not drop it.

        Raises:
            InvalidFormat: If the bytes are not a property list dictionary
            MissingIdentifier: If there is no non-empty string Label
        """
        parsed = _load_dict(data)

        label = parsed.get("Label")
        if not isinstance(label, str) or not label:
            raise MissingIdentifier()

        values: dict[str, Any] = {}
        opaque: dict[str, Any] = {}
        for key, value in parsed.items():
            if key == "Label":
                continue
            reader = _READERS.get(key)
            if reader is None:
                opaque[key] = value
                continue
            typed = reader(value)
            if typed is _MISSING:
                opaque[key] = value
            else:
                values[STRUCTURED_KEYS[key]] = typed

        return cls(label=label, opaque=opaque, raw_text=_raw_text(data, parsed), **values)

    def to_dict(self) -> dict[str, Any]:
        """Merge opaque and typed fields; typed fields win by key.

        Empty collections, None and False are omitted, so an explicit
        ``<false/>`` in the source is not written back.
        """
        result: dict[str, Any] = dict(self.opaque)
        result["Label"] = self.label
        if self.program is not None:
            result["Program"] = self.program
        if self.program_arguments:
            result["ProgramArguments"] = list(self.program_arguments)
        if self.run_at_load:
            result["RunAtLoad"] = True
        if self.keep_alive:
            result["KeepAlive"] = True
        if self.start_interval is not None:
            result["StartInterval"] = self.start_interval
        if self.start_calendar_interval:
            result["StartCalendarInterval"] = [entry.to_dict() for entry in self.start_calendar_interval]
        if self.watch_paths:
            result["WatchPaths"] = list(self.watch_paths)
        if self.environment_variables:
            result["EnvironmentVariables"] = dict(self.environment_variables)
        if self.working_directory is not None:
            result["WorkingDirectory"] = self.working_directory
        if self.standard_out_path is not None:
            result["StandardOutPath"] = self.standard_out_path
        if self.standard_error_path is not None:
            result["StandardErrorPath"] = self.standard_error_path
        if self.throttle_interval is not None:
            result["ThrottleInterval"] = self.throttle_interval
        if self.nice is not None:
            result["Nice"] = self.nice
        if self.process_type is not None:
            result["ProcessType"] = self.process_type
        return result

    def serialize(self) -> bytes:
        """Serialize to XML plist bytes, keeping key order deterministic."""
        return plistlib.dumps(self.to_dict(), fmt=plistlib.FMT_XML, sort_keys=False)

    def same_serialization(self, other: "PlistDocument") -> bool:
        """Byte comparison of the two serializations, used for dirtiness."""
        return self.serialize() == other.serialize()

    def structured_fields(self) -> dict[str, Any]:
        """Typed fields as plain data, keyed by attribute name."""
        result: dict[str, Any] = {}
        for attr in STRUCTURED_KEYS.values():
            value = getattr(self, attr)
            if attr == "start_calendar_interval":
                value = [entry.to_dict() for entry in value]
            elif isinstance(value, (list, dict)):
                value = type(value)(value)
            result[attr] = value
        return result
