"""
Time conversions for bookmark URL rewriting.

Analyst input comes from date/time pickers (``2024-01-01T00:00``) or is
typed by hand, so it is parsed leniently with python-dateutil. Naive values
are pinned to a time zone before conversion; the default is the host's
local zone, the same rule a browser applies to ``datetime-local`` inputs.
"""
import math
import logging
from datetime import datetime, tzinfo, timezone
from typing import Optional, Union

from dateutil import parser as dateutil_parser
from dateutil import tz as dateutil_tz

logger = logging.getLogger(__name__)

TimezoneLike = Union[str, tzinfo, None]

# Two defaults that share a time of day but no date field
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


class DateParseError(ValueError):
    """Time input does not describe a valid instant."""

    def __init__(self, value, reason: Optional[str] = None):
        self.value = value
        message = f"Cannot parse time value {value!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class UnknownTimezoneError(ValueError):
    """Time zone name could not be resolved."""
    pass


def resolve_timezone(tz: TimezoneLike = None) -> tzinfo:
    """
    Resolve a time zone argument to a tzinfo.

    Args:
        tz: IANA name ("UTC", "Europe/Berlin"), a tzinfo, or None for the
            host's local zone

    Returns:
        tzinfo instance
    """
    if tz is None:
        return dateutil_tz.tzlocal()
    if isinstance(tz, tzinfo):
        return tz

    name = tz.strip()
    if name.upper() in ("UTC", "Z"):
        return timezone.utc
    if name.lower() == "local":
        return dateutil_tz.tzlocal()

    resolved = dateutil_tz.gettz(name)
    if resolved is None:
        raise UnknownTimezoneError(f"Unknown time zone: {tz}")
    return resolved


def parse_local_time(value: str, tz: TimezoneLike = None) -> datetime:
    """
    Parse a date/time string into an aware datetime.

    Args:
        value: Date/time text; naive values are read in ``tz``
        tz: Zone for naive values (see resolve_timezone)

    Returns:
        Timezone-aware datetime

    Raises:
        DateParseError: If the value is empty or not a valid date/time
    """
    if not isinstance(value, str) or not value.strip():
        raise DateParseError(value, "empty value")

    try:
        parsed = dateutil_parser.parse(value.strip(), default=_DEFAULT_A)
        check = dateutil_parser.parse(value.strip(), default=_DEFAULT_B)
    except (ValueError, OverflowError) as e:
        raise DateParseError(value, str(e)) from e

    # Fields missing from the input come from the default
    if parsed != check:
        raise DateParseError(value, "incomplete date")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=resolve_timezone(tz))
    return parsed


def to_epoch_seconds(value: str, tz: TimezoneLike = None) -> int:
    """Whole-second Unix timestamp, rounded down."""
    parsed = parse_local_time(value, tz)
    try:
        return math.floor(parsed.timestamp())
    except (OverflowError, OSError) as e:
        raise DateParseError(value, str(e)) from e


def to_iso8601(value: str, tz: TimezoneLike = None) -> str:
    """UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
    parsed = parse_local_time(value, tz)
    try:
        utc = parsed.astimezone(timezone.utc)
    except (OverflowError, OSError) as e:
        raise DateParseError(value, str(e)) from e
    return utc.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"


def check_order(start: str, end: str, tz: TimezoneLike = None) -> None:
    """Parse both ends of a range and warn when it starts after it ends."""
    if parse_local_time(start, tz) > parse_local_time(end, tz):
        logger.warning(f"Time range starts after it ends: {start} > {end}")
