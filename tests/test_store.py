import sqlite3

import platformdirs
import pytest

from qlg.store import NoActiveProjectError, Store, default_db_path


@pytest.fixture
def store(tmp_path):
    with Store(tmp_path / "data" / "qlg.db") as opened:
        yield opened


def _insert_log(store, project_id, message="m"):
    cursor = store.connection.execute(
        "INSERT INTO logs (category, message, timestamp, project_id) VALUES (?, ?, ?, ?)",
        ("cat", message, "2024-01-01T00:00:00+00:00", project_id),
    )
    return cursor.lastrowid


def test_creates_parent_directory_and_file(tmp_path):
    path = tmp_path / "nested" / "dir" / "qlg.db"
    with Store(path):
        pass
    assert path.is_file()


def test_schema_tables_exist(store):
    names = {
        row[0]
        for row in store.connection.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table'"
        )
    }
    assert {"projects", "logs", "tags", "state"} <= names


def test_close_via_context_manager(tmp_path):
    with Store(tmp_path / "qlg.db") as opened:
        connection = opened.connection
    with pytest.raises(sqlite3.ProgrammingError):
        connection.execute("SELECT 1")


def test_state_missing_key(store):
    assert store.get_state("absent") is None


def test_state_set_and_overwrite(store):
    store.set_state("k", "first")
    assert store.get_state("k") == "first"
    store.set_state("k", "second")
    assert store.get_state("k") == "second"


def test_clear_state_if_matching_value(store):
    store.set_state("k", "v")
    store.clear_state_if("k", "v")
    assert store.get_state("k") is None


def test_clear_state_if_other_value_keeps_state(store):
    store.set_state("k", "v")
    store.clear_state_if("k", "other")
    assert store.get_state("k") == "v"


def test_no_current_project_initially(store):
    assert store.current_project_id() is None
    with pytest.raises(NoActiveProjectError):
        store.require_project_id()


def test_set_current_project(store):
    store.set_current_project("alpha")
    assert store.get_state("current_project") == "alpha"
    project_id = store.require_project_id()
    assert project_id == store.current_project_id()
    assert store.list_projects() == ["alpha"]


def test_set_current_project_is_idempotent(store):
    store.set_current_project("alpha")
    first = store.current_project_id()
    store.set_current_project("beta")
    store.set_current_project("alpha")
    assert store.current_project_id() == first
    assert store.list_projects() == ["alpha", "beta"]


def test_list_projects_sorted(store):
    for name in ["zeta", "alpha", "mid"]:
        store.set_current_project(name)
    assert store.list_projects() == sorted(["zeta", "alpha", "mid"])


def test_current_project_pointing_to_missing_project(store):
    store.set_state("current_project", "ghost")
    assert store.current_project_id() is None


def test_delete_current_project_clears_state_and_logs(store):
    store.set_current_project("alpha")
    project_id = store.require_project_id()
    _insert_log(store, project_id)
    store.delete_project("alpha")
    assert store.list_projects() == []
    assert store.get_state("current_project") is None
    count = store.connection.execute(
        "SELECT COUNT(*) FROM logs WHERE project_id = ?", (project_id,)
    ).fetchone()[0]
    assert count == 0


def test_delete_other_project_keeps_current(store):
    store.set_current_project("alpha")
    alpha_id = store.current_project_id()
    _insert_log(store, alpha_id)
    store.set_current_project("beta")
    store.delete_project("alpha")
    assert store.get_state("current_project") == "beta"
    assert store.list_projects() == ["beta"]
    remaining = store.connection.execute("SELECT COUNT(*) FROM logs").fetchone()[0]
    assert remaining == 0


def test_get_tags_in_insertion_order(store):
    store.set_current_project("alpha")
    log_id = _insert_log(store, store.require_project_id())
    for tag in ["b", "a", "c"]:
        store.connection.execute(
            "INSERT INTO tags (log_id, name) VALUES (?, ?)", (log_id, tag)
        )
    assert store.get_tags(log_id) == ["b", "a", "c"]
    assert store.get_tags(log_id + 100) == []


def test_data_persists_across_reopen(tmp_path):
    path = tmp_path / "qlg.db"
    with Store(path) as first:
        first.set_current_project("alpha")
    with Store(path) as second:
        assert second.list_projects() == ["alpha"]
        assert second.get_state("current_project") == "alpha"


def test_default_db_path(tmp_path, monkeypatch):
    base = tmp_path / "userdata" / "qlg"
    monkeypatch.setattr(platformdirs, "user_data_path", lambda *a, **k: base)
    path = default_db_path()
    assert path == base / "qlg.db"
    assert base.is_dir()