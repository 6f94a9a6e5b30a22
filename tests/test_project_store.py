# tests/test_project_store.py

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import pytest

from tasktree.core.models import Project, Task, TaskList
from tasktree.errors import StorageError
from tasktree.storage import codec
from tasktree.storage.paths import PlatformPaths
from tasktree.storage.project_store import JsonProjectStore, sanitize_key


def _project(title: str = "Launch") -> Project:
    return Project(
        title,
        description="demo",
        lists=(TaskList("Backlog", tasks=(Task("Design", children=(Task("Wireframe"),)),)),),
    )


@pytest.mark.parametrize(
    "title,key",
    [
        ("Launch", "Launch"),
        ("my project v1.2-final", "my_project_v1.2-final"),
        ("A/B", "A_B"),
        ("A?B", "A_B"),
        ("Ünïcode", "_n_code"),
        ("../escape", ".._escape"),
    ],
)
def test_sanitize_key(title: str, key: str) -> None:
    assert sanitize_key(title) == key


def test_save_find_exists_delete(store: JsonProjectStore) -> None:
    p = _project()
    assert store.exists_by_key("Launch") is False
    assert store.find_by_key("Launch") is None

    assert store.save(p) is p
    assert store.exists_by_key("Launch") is True
    assert store.find_by_key("Launch") == p
    assert store.path_for("Launch").name == "Launch.json"

    assert store.delete_by_key("Launch") is True
    assert store.delete_by_key("Launch") is False
    assert store.find_by_key("Launch") is None


def test_blank_keys_are_absent(store: JsonProjectStore) -> None:
    assert store.find_by_key("  ") is None
    assert store.exists_by_key("") is False
    assert store.delete_by_key("") is False


def test_save_overwrites_whole_document(store: JsonProjectStore) -> None:
    store.save(_project())
    smaller = Project("Launch", created_at=datetime(2020, 1, 1))
    store.save(smaller)

    assert store.find_by_key("Launch") == smaller
    doc = json.loads(store.path_for("Launch").read_text("utf-8"))
    assert doc["lists"] == []
    assert not list(store.storage_dir().glob("*.tmp"))


def test_save_creates_storage_directory(store: JsonProjectStore) -> None:
    assert not store.storage_dir().exists()
    store.save(_project())
    assert store.storage_dir().is_dir()


def test_find_all_walks_subdirectories(store: JsonProjectStore) -> None:
    store.save(_project("One"))
    store.save(_project("Two"))
    nested = store.storage_dir() / "archive"
    nested.mkdir()
    one_doc = store.path_for("One").read_text("utf-8")
    (nested / "Three.json").write_text(one_doc.replace('"One"', '"Three"'), "utf-8")
    (store.storage_dir() / "readme.txt").write_text("ignored", "utf-8")

    titles = sorted(p.title for p in store.find_all())
    assert titles == ["One", "Three", "Two"]
    assert store.count_projects() == 3


def test_find_all_on_missing_directory_is_empty(store: JsonProjectStore) -> None:
    assert store.find_all() == []
    assert store.count_projects() == 0


def test_bad_document_aborts_scan(store: JsonProjectStore) -> None:
    store.save(_project("Good"))
    (store.storage_dir() / "Broken.json").write_text("{not json", "utf-8")

    with pytest.raises(StorageError):
        store.find_all()
    with pytest.raises(StorageError):
        store.find_by_key("Broken")
    # the good document is still readable on its own
    assert store.find_by_key("Good") is not None


def test_sanitized_title_collision_last_writer_wins(store: JsonProjectStore) -> None:
    store.save(_project("A/B"))
    store.save(Project("A?B"))

    found = store.find_all()
    assert [p.title for p in found] == ["A?B"]
    assert store.find_by_key("A/B") == found[0]
    assert store.exists_by_key("A/B")


def test_legacy_directory_is_used_when_populated(tmp_path: Path) -> None:
    legacy = tmp_path / "data" / "projects"
    paths = PlatformPaths("t", data_dir=tmp_path / "app", legacy_dir=legacy)
    store = JsonProjectStore(paths)

    legacy.mkdir(parents=True)
    (legacy / "Old.json").write_text(codec.dumps(_project("Old")), "utf-8")

    assert store.storage_dir() == legacy
    assert [p.title for p in store.find_all()] == ["Old"]
    store.save(_project("New"))
    assert (legacy / "New.json").is_file()
    assert not (tmp_path / "app").exists()


def test_save_failure_raises_storage_error(tmp_path: Path) -> None:
    blocker = tmp_path / "file-not-dir"
    blocker.write_text("x", "utf-8")
    store = JsonProjectStore(PlatformPaths("t", data_dir=blocker, legacy_dir=tmp_path / "none"))

    with pytest.raises(StorageError):
        store.save(_project())
    with pytest.raises(OSError):
        store.save(_project())
