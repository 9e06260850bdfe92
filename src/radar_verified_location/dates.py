"""
ISO-8601 timestamp rendering and parsing shared by all models.
"""

import re
from datetime import datetime, timedelta, timezone

# Fractional seconds of any length, e.g. ".5" in "00:00:00.5Z"
_FRACTION = re.compile(r"(\d{2}:\d{2}:\d{2})[.,](\d+)")


def format_timestamp(value: datetime) -> str:
    """
    Render an absolute instant as ISO-8601 UTC text with a trailing "Z".

    Naive datetimes are taken to be UTC. Whole seconds are rendered without
    a fraction, anything finer is rendered to the millisecond. Instants that
    fall outside the datetime range once shifted to UTC are clamped to
    datetime.min or datetime.max.

    Args:
        value: The instant to render

    Returns:
        ISO-8601 text in UTC

    Examples:
        >>> format_timestamp(datetime(2024, 1, 1, tzinfo=timezone.utc))
        '2024-01-01T00:00:00Z'
        >>> format_timestamp(datetime(2024, 1, 1, 0, 0, 0, 250000))
        '2024-01-01T00:00:00.250Z'
    """
    offset = value.utcoffset()
    if offset is None:
        value = value.replace(tzinfo=None)
    else:
        try:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        except OverflowError:
            value = datetime.max if offset < timedelta(0) else datetime.min

    timespec = "milliseconds" if value.microsecond else "seconds"
    return value.isoformat(timespec=timespec) + "Z"


def parse_timestamp(value: str) -> datetime | None:
    """
    Parse ISO-8601 text into an aware UTC datetime.

    Accepts a trailing "Z" or a numeric offset, and fractional seconds of
    any length (truncated to microseconds). Text without an offset is taken
    to be UTC.

    Args:
        value: ISO-8601 text, e.g. "2024-01-01T00:00:00.000Z"

    Returns:
        The parsed instant in UTC, or None if the text cannot be parsed

    Examples:
        >>> parse_timestamp("2024-01-01T00:00:00Z")
        datetime.datetime(2024, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
        >>> parse_timestamp("not a date") is None
        True
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(_six_digit_fraction, text, count=1)

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        return None


def _six_digit_fraction(match: re.Match) -> str:
    # fromisoformat on 3.10 only takes 3 or 6 digits
    return f"{match.group(1)}.{match.group(2)[:6].ljust(6, '0')}"
