"""One StartCalendarInterval entry."""

from dataclasses import dataclass
from typing import Any

# Plist key for each field, in emission order
_KEYS = (
    ("month", "Month"),
    ("day", "Day"),
    ("weekday", "Weekday"),
    ("hour", "Hour"),
    ("minute", "Minute"),
)


def _as_int(value: Any) -> int | None:
    # plistlib yields bool for <true/>/<false/>; those are not calendar values
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


@dataclass
class CalendarInterval:
    """A calendar schedule entry. A field left as None matches any value."""

    month: int | None = None
    day: int | None = None
    weekday: int | None = None
    hour: int | None = None
    minute: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CalendarInterval":
        return cls(**{attr: _as_int(data.get(key)) for attr, key in _KEYS})

    def to_dict(self) -> dict[str, int]:
        """Plist form of the entry; absent fields are left out."""
        result: dict[str, int] = {}
        for attr, key in _KEYS:
            value = getattr(self, attr)
            if value is not None:
                result[key] = value
        return result

    @classmethod
    def parse_spec(cls, spec: str) -> "CalendarInterval":
        """Build an entry from text such as ``Hour=9,Minute=15``.

        Keys are matched case-insensitively against the plist key names.

        Raises:
            ValueError: If a part is not ``Key=integer`` or names an unknown key
        """
        names = {key.lower(): attr for attr, key in _KEYS}
        values: dict[str, int] = {}
        for part in filter(None, (p.strip() for p in spec.split(","))):
            key, sep, raw = part.partition("=")
            if not sep:
                raise ValueError(f"Calendar entry part {part!r} must look like Key=value")
            attr = names.get(key.strip().lower())
            if attr is None:
                raise ValueError(f"Unknown calendar key {key.strip()!r} (supported: {[k for _, k in _KEYS]})")
            try:
                values[attr] = int(raw.strip())
            except ValueError:
                raise ValueError(f"Calendar value for {key.strip()} must be an integer, got {raw.strip()!r}") from None
        return cls(**values)
