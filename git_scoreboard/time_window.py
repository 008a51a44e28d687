"""UTC time window and timestamp parsing."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from .errors import ConfigurationError, ParseError

DEFAULT_DAYS = 7
LABEL_FORMAT = '%b %d'

# GitHub sends either whole seconds or a fractional part before the Z
TIMESTAMP_FORMATS = ('%Y-%m-%dT%H:%M:%SZ', '%Y-%m-%dT%H:%M:%S.%fZ')


@dataclass(frozen=True)
class TimeWindow:
    """Eligible merge window: everything merged at or after ``since``."""
    days: int
    since: datetime
    until: datetime

    @property
    def start_label(self) -> str:
        return self.since.strftime(LABEL_FORMAT)

    @property
    def end_label(self) -> str:
        return self.until.strftime(LABEL_FORMAT)

    @property
    def since_iso(self) -> str:
        return self.since.strftime('%Y-%m-%dT%H:%M:%SZ')


def parse_days(raw: Union[str, int, None]) -> int:
    """Validate the "days back" argument.

    Args:
        raw: Value from the command line, or None for the default

    Returns:
        Number of days as a non-negative integer

    Raises:
        ConfigurationError: If the value is not a non-negative integer
    """
    if raw is None:
        return DEFAULT_DAYS
    if isinstance(raw, bool):
        raise ConfigurationError(f"Invalid days value: {raw!r}")
    if isinstance(raw, int):
        days = raw
    else:
        try:
            days = int(str(raw).strip())
        except ValueError:
            raise ConfigurationError(
                f"Invalid days value '{raw}': expected a non-negative integer"
            ) from None
    if days < 0:
        raise ConfigurationError(f"Invalid days value '{raw}': must not be negative")
    return days


def compute_time_window(days: int = DEFAULT_DAYS, now: Optional[datetime] = None) -> TimeWindow:
    """Compute the window starting at 00:00:00Z, ``days`` days before ``now``.

    Args:
        days: Number of days to look back
        now: Current instant (defaults to the current UTC time)

    Returns:
        TimeWindow covering [since, now]
    """
    days = parse_days(days)
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)

    start = now - timedelta(days=days)
    since = start.replace(hour=0, minute=0, second=0, microsecond=0)
    return TimeWindow(days=days, since=since, until=now)


def parse_timestamp(value: Optional[str]) -> datetime:
    """Parse a GitHub UTC timestamp, dropping sub-second precision.

    Args:
        value: Timestamp such as ``2024-03-01T12:00:00Z`` or ``2024-03-01T12:00:00.123Z``

    Returns:
        Timezone-aware UTC datetime with microsecond set to 0

    Raises:
        ParseError: If the value is missing or not in a supported format
    """
    if not isinstance(value, str) or not value:
        raise ParseError(f"Missing timestamp: {value!r}")

    for fmt in TIMESTAMP_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        return parsed.replace(microsecond=0, tzinfo=timezone.utc)

    raise ParseError(f"Malformed timestamp: {value!r}")
