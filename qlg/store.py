"""SQLite-backed storage for projects, persistent state and tags."""

from __future__ import annotations

import sqlite3
from pathlib import Path

import platformdirs

_SCHEMA = """
CREATE TABLE IF NOT EXISTS projects (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT UNIQUE NOT NULL
);

CREATE TABLE IF NOT EXISTS logs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    category TEXT NOT NULL,
    message TEXT NOT NULL,
    timestamp TEXT NOT NULL,
    project_id INTEGER NOT NULL,
    FOREIGN KEY(project_id) REFERENCES projects(id)
);

CREATE TABLE IF NOT EXISTS tags (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    log_id INTEGER NOT NULL,
    name TEXT NOT NULL,
    FOREIGN KEY(log_id) REFERENCES logs(id)
);

CREATE TABLE IF NOT EXISTS state (
    key TEXT PRIMARY KEY,
    value TEXT
);
"""

CURRENT_PROJECT_KEY = "current_project"


class NoActiveProjectError(RuntimeError):
    """Raised when an operation needs a current project and none is set."""


def default_db_path() -> Path:
    """Return the database location in the user data directory, creating the directory."""
    directory = Path(platformdirs.user_data_path("qlg", appauthor=False))
    directory.mkdir(parents=True, exist_ok=True)
    return directory / "qlg.db"


class Store:
    """An open qlg database."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else default_db_path()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.connection = sqlite3.connect(self.path, isolation_level=None)
        self.connection.executescript(_SCHEMA)

    def close(self) -> None:
        self.connection.close()

    def __enter__(self) -> Store:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    # Key/value state

    def get_state(self, key: str) -> str | None:
        row = self.connection.execute(
            "SELECT value FROM state WHERE key = ?", (key,)
        ).fetchone()
        return row[0] if row else None

    def set_state(self, key: str, value: str) -> None:
        self.connection.execute(
            "INSERT INTO state (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
            (key, value),
        )

    def clear_state_if(self, key: str, expected_value: str) -> None:
        """Remove ``key`` only when it currently holds ``expected_value``."""
        self.connection.execute(
            "DELETE FROM state WHERE key = ? AND value = ?", (key, expected_value)
        )

    # Projects

    def current_project_id(self) -> int | None:
        name = self.get_state(CURRENT_PROJECT_KEY)
        if name is None:
            return None
        row = self.connection.execute(
            "SELECT id FROM projects WHERE name = ?", (name,)
        ).fetchone()
        return row[0] if row else None

    def require_project_id(self) -> int:
        project_id = self.current_project_id()
        if project_id is None:
            raise NoActiveProjectError("no active project set")
        return project_id

    def set_current_project(self, name: str) -> None:
        """Create the project if needed and make it current."""
        self.connection.execute(
            "INSERT OR IGNORE INTO projects (name) VALUES (?)", (name,)
        )
        self.set_state(CURRENT_PROJECT_KEY, name)

    def delete_project(self, name: str) -> None:
        """Delete a project and its logs; clear it as current if it was."""
        self.connection.execute(
            "DELETE FROM logs WHERE project_id = "
            "(SELECT id FROM projects WHERE name = ?)",
            (name,),
        )
        self.connection.execute("DELETE FROM projects WHERE name = ?", (name,))
        self.clear_state_if(CURRENT_PROJECT_KEY, name)

    def list_projects(self) -> list[str]:
        rows = self.connection.execute("SELECT name FROM projects ORDER BY name")
        return [name for (name,) in rows]

    # Tags

    def get_tags(self, log_id: int) -> list[str]:
        rows = self.connection.execute(
            "SELECT name FROM tags WHERE log_id = ? ORDER BY id", (log_id,)
        )
        return [name for (name,) in rows]