"""Adding, querying, exporting and importing log entries."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from qlg.formatting import format_tags, format_timestamp
from qlg.store import Store

_RFC3339 = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})[Tt ]"
    r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.\d+)?"
    r"(?:[Zz]|[+-](?P<off_hour>\d{2}):(?P<off_minute>\d{2}))$"
)

_SELECT = "SELECT id, timestamp, category, message FROM logs"


class ImportFormatError(ValueError):
    """Raised when an import file does not hold valid log entries."""


@dataclass
class LogEntry:
    """One logged note."""

    category: str
    message: str
    timestamp: str
    tags: list[str] = field(default_factory=list)
    log_id: int | None = None


def _is_rfc3339(text: str) -> bool:
    match = _RFC3339.match(text)
    if match is None:
        return False
    second = int(match["second"])
    if second > 60:
        return False
    try:
        datetime(
            int(match["year"]),
            int(match["month"]),
            int(match["day"]),
            int(match["hour"]),
            int(match["minute"]),
            min(second, 59),
        )
    except ValueError:
        return False
    if match["off_hour"] is not None:
        if int(match["off_hour"]) > 23 or int(match["off_minute"]) > 59:
            return False
    return True


def _insert(store: Store, project_id: int, entry: LogEntry) -> int:
    cursor = store.connection.execute(
        "INSERT INTO logs (category, message, timestamp, project_id) "
        "VALUES (?, ?, ?, ?)",
        (entry.category, entry.message, entry.timestamp, project_id),
    )
    log_id = cursor.lastrowid
    store.connection.executemany(
        "INSERT INTO tags (log_id, name) VALUES (?, ?)",
        [(log_id, tag) for tag in entry.tags],
    )
    return log_id


def _entries(store: Store, rows) -> list[LogEntry]:
    return [
        LogEntry(
            category=category,
            message=message,
            timestamp=timestamp,
            tags=store.get_tags(log_id),
            log_id=log_id,
        )
        for log_id, timestamp, category, message in rows
    ]


def add_log(
    store: Store, category: str, message: str, tags: list[str] | None = None
) -> int:
    """Log a message in the current project and return its id."""
    project_id = store.require_project_id()
    entry = LogEntry(
        category=category,
        message=message,
        timestamp=datetime.now(timezone.utc).isoformat(),
        tags=list(tags or []),
    )
    return _insert(store, project_id, entry)


def fetch_logs(store: Store, category: str | None = None) -> list[LogEntry]:
    """Return the current project's logs, newest first, optionally by category."""
    project_id = store.require_project_id()
    if category is None:
        rows = store.connection.execute(
            f"{_SELECT} WHERE project_id = ? ORDER BY timestamp DESC",
            (project_id,),
        ).fetchall()
    else:
        rows = store.connection.execute(
            f"{_SELECT} WHERE project_id = ? AND category = ? "
            "ORDER BY timestamp DESC",
            (project_id, category),
        ).fetchall()
    return _entries(store, rows)


def search_logs(store: Store, query: str, tag: str | None = None) -> list[LogEntry]:
    """Return logs whose message contains ``query``, optionally carrying ``tag``."""
    project_id = store.require_project_id()
    pattern = f"%{query}%"
    if tag is None:
        rows = store.connection.execute(
            f"{_SELECT} WHERE project_id = ? AND message LIKE ? "
            "ORDER BY timestamp DESC",
            (project_id, pattern),
        ).fetchall()
    else:
        rows = store.connection.execute(
            f"{_SELECT} WHERE project_id = ? AND message LIKE ? AND EXISTS ("
            "SELECT 1 FROM tags WHERE tags.log_id = logs.id AND tags.name = ?"
            ") ORDER BY timestamp DESC",
            (project_id, pattern, tag),
        ).fetchall()
    return _entries(store, rows)


def delete_log(store: Store, log_id: int) -> None:
    """Delete a log and its tags."""
    store.connection.execute("DELETE FROM logs WHERE id = ?", (log_id,))
    store.connection.execute("DELETE FROM tags WHERE log_id = ?", (log_id,))


def export_entries(store: Store) -> list[LogEntry]:
    """Return the current project's logs, oldest first."""
    project_id = store.require_project_id()
    rows = store.connection.execute(
        f"{_SELECT} WHERE project_id = ? ORDER BY timestamp ASC",
        (project_id,),
    ).fetchall()
    return _entries(store, rows)


def render_json(entries: list[LogEntry]) -> str:
    """Render entries as a pretty-printed JSON array."""
    documents = [
        {
            "category": entry.category,
            "message": entry.message,
            "timestamp": entry.timestamp,
            "tags": list(entry.tags),
        }
        for entry in entries
    ]
    return json.dumps(documents, indent=2, ensure_ascii=False)


def render_markdown(entries: list[LogEntry]) -> str:
    """Render entries as Markdown sections."""
    return "".join(
        f"### [{format_timestamp(entry.timestamp)}] {entry.category} "
        f"{format_tags(entry.tags)}\n{entry.message}\n\n"
        for entry in entries
    )


def export_json(store: Store, path: str | Path) -> None:
    """Write the current project's logs to ``path`` as JSON."""
    Path(path).write_text(render_json(export_entries(store)), encoding="utf-8")


def export_markdown(store: Store, path: str | Path) -> None:
    """Write the current project's logs to ``path`` as Markdown."""
    Path(path).write_text(render_markdown(export_entries(store)), encoding="utf-8")


def _parse_imported(data: Any) -> list[LogEntry]:
    if not isinstance(data, list):
        raise ImportFormatError("invalid JSON format: expected a list of logs")
    entries = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ImportFormatError(f"invalid JSON format: log {index} is not an object")
        values = {}
        for key in ("category", "message", "timestamp"):
            if key not in item:
                raise ImportFormatError(
                    f"invalid JSON format: log {index} is missing {key!r}"
                )
            if not isinstance(item[key], str):
                raise ImportFormatError(
                    f"invalid JSON format: {key!r} of log {index} is not a string"
                )
            values[key] = item[key]
        tags = item.get("tags", [])
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise ImportFormatError(
                f"invalid JSON format: 'tags' of log {index} is not a list of strings"
            )
        if not _is_rfc3339(values["timestamp"]):
            raise ImportFormatError(
                f"invalid timestamp format in import: {values['timestamp']}"
            )
        entries.append(LogEntry(tags=list(tags), **values))
    return entries


def import_json(store: Store, path: str | Path) -> int:
    """Add the logs in a JSON file to the current project; return how many."""
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ImportFormatError(f"invalid JSON format: {exc}") from exc
    entries = _parse_imported(data)
    project_id = store.require_project_id()
    for entry in entries:
        _insert(store, project_id, entry)
    return len(entries)