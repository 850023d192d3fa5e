"""Text rendering of log entries for terminal output."""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import datetime

_RFC3339 = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})[Tt ]"
    r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.\d+)?"
    r"(?:[Zz]|[+-]\d{2}:?\d{2})$"
)


def format_timestamp(timestamp: str) -> str:
    """Render an RFC 3339 timestamp as ``YYYY-MM-DD HH:MM``.

    The wall-clock time written in the string is kept as is; the offset is
    not applied. Anything that does not parse is returned unchanged.
    """
    match = _RFC3339.match(timestamp)
    if match is None:
        return timestamp
    # Leap seconds are valid in RFC 3339 but not in datetime.
    second = min(int(match["second"]), 59)
    try:
        moment = datetime.strptime(
            f"{match['date']} {match['hour']}:{match['minute']}:{second:02d}",
            "%Y-%m-%d %H:%M:%S",
        )
    except ValueError:
        return timestamp
    return moment.strftime("%Y-%m-%d %H:%M")


def format_tags(tags: Iterable[str]) -> str:
    """Join tags as space-separated ``#tag`` words."""
    return " ".join(f"#{tag}" for tag in tags)


def format_log_entry(
    log_id: int,
    timestamp: str,
    category: str,
    message: str,
    tags: Iterable[str],
) -> str:
    """Render one log entry as a single line."""
    tag_text = format_tags(tags)
    suffix = f" {tag_text}" if tag_text else ""
    return f"[{log_id}] {format_timestamp(timestamp)} {category}: {message}{suffix}"