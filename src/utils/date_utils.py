"""
Date helpers for Graph timestamps.

Graph returns ISO 8601 strings with up to seven fractional digits
("2024-05-01T09:30:00.0000000"). The fraction is normalised to six digits
before datetime.fromisoformat sees it.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Optional

GRAPH_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S"
DISPLAY_FORMAT = "%Y-%m-%d %H:%M"

_FRACTION_RE = re.compile(r"\.(\d+)")


def get_current_timestamp() -> str:
    """Return the current UTC time as an ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


def to_graph_datetime(value: datetime) -> str:
    """Format a datetime as a Graph query parameter (UTC, no fraction)."""
    return value.astimezone(timezone.utc).strftime(GRAPH_DATETIME_FORMAT) + "Z"


def parse_graph_datetime(value: str) -> datetime:
    """Parse a Graph timestamp, keeping its UTC offset.

    Timestamps without an offset are treated as UTC.

    Raises:
        ValueError: If the string is not an ISO 8601 date-time.
    """
    text = value.strip().replace("Z", "+00:00")
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def _format_offset(offset: timedelta) -> str:
    minutes = int(offset.total_seconds() // 60)
    sign = "+" if minutes >= 0 else "-"
    hours, minutes = divmod(abs(minutes), 60)
    return f"UTC{sign}{hours:02d}:{minutes:02d}"


def format_date_for_user(value: Optional[str], time_zone: Optional[str] = None) -> str:
    """Render a Graph timestamp for display.

    The wall-clock time is shown as Graph sent it. A non-UTC offset in the
    value is appended when no zone name is given.

    Args:
        value: Graph timestamp string.
        time_zone: Optional zone name reported by Graph (e.g. "UTC").

    Returns:
        "YYYY-MM-DD HH:MM[ zone]", the raw value if it cannot be parsed,
        or "N/A" when missing.
    """
    if not value:
        return "N/A"
    try:
        parsed = parse_graph_datetime(value)
    except ValueError:
        return value
    rendered = parsed.strftime(DISPLAY_FORMAT)
    if time_zone:
        return f"{rendered} {time_zone}"
    offset = parsed.utcoffset()
    if offset:
        return f"{rendered} {_format_offset(offset)}"
    return rendered
