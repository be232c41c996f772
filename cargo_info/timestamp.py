"""Timestamp parsing and rendering for registry dates."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

import humanize
from dateutil import parser


class TimeFormat(Enum):
    """How a timestamp is rendered."""

    ABSOLUTE = "absolute"
    RELATIVE = "relative"


def humanize_delta(delta: timedelta) -> str:
    """Phrase a time difference roughly, the way people say it.

    Args:
        delta: Instant minus now; negative values lie in the past.

    Returns:
        Text such as "now", "3 days ago" or "an hour from now", or ""
        when the difference is too large to place on the calendar.

    Examples:
        >>> humanize_delta(timedelta(days=-3))
        '3 days ago'
        >>> humanize_delta(timedelta(minutes=70))
        'an hour from now'
    """
    try:
        # naturaltime reads a positive timedelta as time already passed
        return humanize.naturaltime(-delta)
    except (OverflowError, ValueError):
        return ""


@dataclass(frozen=True)
class Timestamp:
    """An optional local-time instant; ``None`` means no usable value."""

    value: datetime | None = None

    @classmethod
    def parse(cls, raw: Any) -> "Timestamp":
        """Parse an ISO-8601 string into local time.

        Strings without an offset are taken as local time already. Anything
        that is not a parseable string gives the empty Timestamp.
        """
        if not isinstance(raw, str) or not raw.strip():
            return cls()

        try:
            parsed = parser.isoparse(raw.strip()).astimezone()
        except (ValueError, OverflowError, OSError):
            return cls()

        return cls(parsed)

    def __bool__(self) -> bool:
        return self.value is not None

    def render(self, mode: TimeFormat = TimeFormat.ABSOLUTE, now: datetime | None = None) -> str:
        """Render the timestamp; the empty Timestamp renders as ``""``."""
        if self.value is None:
            return ""

        if mode is TimeFormat.RELATIVE:
            reference = now.astimezone() if now else datetime.now().astimezone()
            return humanize_delta(self.value - reference)

        return str(self.value.replace(tzinfo=None))

    def __str__(self) -> str:
        return self.render()
