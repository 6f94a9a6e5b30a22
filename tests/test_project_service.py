# tests/test_project_service.py

from __future__ import annotations

import pytest

from tasktree.core.models import Project, Task, TaskList
from tasktree.errors import DuplicateKeyError, NotFoundError, ValidationError
from tasktree.service.project_service import ProjectService
from tasktree.storage.project_store import JsonProjectStore

from .fakes import InMemoryProjectRepo


def _seed(service: ProjectService) -> Project:
    service.create_project("Launch", "ship it")
    service.add_task_list("Launch", TaskList("Backlog"))
    service.add_task("Launch", "Backlog", Task("A"))
    service.add_subtask("Launch", "Backlog", ["A"], Task("A1"))
    return service.add_task("Launch", "Backlog", Task("B"))


def test_create_then_get_round_trips(service: ProjectService) -> None:
    created = service.create_project("Launch", "ship it")
    assert created.lists == ()
    assert service.get_project("Launch") == created
    assert service.get_all_projects() == [created]


def test_create_duplicate_title_fails(service: ProjectService) -> None:
    service.create_project("Launch")
    with pytest.raises(DuplicateKeyError):
        service.create_project("Launch", "again")


def test_blank_arguments(service: ProjectService) -> None:
    with pytest.raises(ValidationError):
        service.create_project("  ")
    assert service.get_project("") is None
    assert service.get_project(None) is None
    assert service.delete_project(" ") is False
    with pytest.raises(ValidationError):
        service.add_task_list("", TaskList("L"))


def test_update_project_requires_existing(service: ProjectService) -> None:
    with pytest.raises(NotFoundError):
        service.update_project(Project("Ghost"))

    created = service.create_project("Launch")
    changed = Project("Launch", "new text", (TaskList("L"),), created_at=created.created_at)
    assert service.update_project(changed) == changed
    assert service.get_project("Launch") == changed


def test_delete_project(service: ProjectService) -> None:
    service.create_project("Launch")
    assert service.delete_project("Launch") is True
    assert service.delete_project("Launch") is False
    assert service.get_project("Launch") is None


def test_created_at_survives_mutations(service: ProjectService) -> None:
    _seed(service)
    created_at = service.get_project("Launch").created_at

    after = service.remove_task("Launch", "Backlog", "B")
    assert after.created_at == created_at
    assert service.get_project("Launch").created_at == created_at


def test_duplicate_list_fails_and_leaves_document_unchanged(
    service: ProjectService, store: JsonProjectStore
) -> None:
    _seed(service)
    before = store.path_for("Launch").read_text("utf-8")

    with pytest.raises(DuplicateKeyError):
        service.add_task_list("Launch", TaskList("Backlog", description="other"))
    assert store.path_for("Launch").read_text("utf-8") == before


def test_remove_list(service: ProjectService) -> None:
    _seed(service)
    service.add_task_list("Launch", TaskList("Later"))
    p = service.remove_task_list("Launch", "Backlog")
    assert [tl.name for tl in p.lists] == ["Later"]
    with pytest.raises(NotFoundError):
        service.remove_task_list("Launch", "Backlog")
    with pytest.raises(NotFoundError):
        service.remove_task_list("Ghost", "Later")


def test_remove_task_removes_subtree_and_keeps_siblings(service: ProjectService) -> None:
    before = _seed(service)
    p = service.remove_task("Launch", "Backlog", "A")

    backlog = p.task_list("Backlog")
    assert [t.title for t in backlog.tasks] == ["B"]
    assert backlog.tasks[0] == before.task_list("Backlog").task("B")


def test_remove_task_is_top_level_only(service: ProjectService) -> None:
    _seed(service)
    with pytest.raises(NotFoundError):
        service.remove_task("Launch", "Backlog", "A1")
    p = service.remove_task_at("Launch", "Backlog", ["A", "A1"])
    assert p.task_list("Backlog").task("A").children == ()


def test_add_task_twice_fails_and_remove_absent_fails(service: ProjectService) -> None:
    _seed(service)
    with pytest.raises(DuplicateKeyError):
        service.add_task("Launch", "Backlog", Task("A"))
    with pytest.raises(NotFoundError):
        service.remove_task("Launch", "Backlog", "Zed")
    with pytest.raises(NotFoundError):
        service.remove_task("Launch", "Backlog", "Zed")
    with pytest.raises(NotFoundError):
        service.add_task("Launch", "Nope", Task("x"))


def test_launch_scenario(service: ProjectService) -> None:
    service.create_project("Launch")
    service.add_task_list("Launch", TaskList("Backlog"))
    service.add_task("Launch", "Backlog", Task("Design"))
    service.add_subtask("Launch", "Backlog", ["Design"], Task("Wireframe"))

    p = service.get_project("Launch")
    backlog = p.task_list("Backlog")
    assert [t.title for t in backlog.tasks] == ["Design"]
    design = backlog.tasks[0]
    assert design.children == (Task("Wireframe"),)
    assert design.children[0].completed is False


def test_add_subtask_under_missing_parent(service: ProjectService) -> None:
    _seed(service)
    with pytest.raises(NotFoundError):
        service.add_subtask("Launch", "Backlog", ["A", "missing"], Task("x"))


def test_update_task_at_depth(service: ProjectService) -> None:
    _seed(service)
    p = service.update_task("Launch", "Backlog", ["A", "A1"], Task("A1", "notes", completed=True))
    a1 = p.task_list("Backlog").task("A").children[0]
    assert a1.description == "notes"
    assert a1.completed

    with pytest.raises(DuplicateKeyError):
        service.update_task("Launch", "Backlog", ["A"], Task("B"))


def test_set_task_completed_cascades(service: ProjectService) -> None:
    _seed(service)
    p = service.set_task_completed("Launch", "Backlog", ["A"], True)
    a = p.task_list("Backlog").task("A")
    assert a.completed and a.children[0].completed
    assert not p.task_list("Backlog").task("B").completed

    p = service.set_task_completed("Launch", "Backlog", ["A"], False, cascade=False)
    a = p.task_list("Backlog").task("A")
    assert not a.completed and a.children[0].completed

    with pytest.raises(NotFoundError):
        service.set_task_completed("Launch", "Backlog", ["nope"], True)


def test_move_task(service: ProjectService) -> None:
    _seed(service)
    service.add_task_list("Launch", TaskList("Done"))
    p = service.move_task("Launch", "Backlog", ["A"], "Done")
    assert [t.title for t in p.task_list("Backlog").tasks] == ["B"]
    assert p.task_list("Done").task("A").children == (Task("A1"),)

    p = service.move_task("Launch", "Done", ["A", "A1"], "Backlog", ["B"])
    assert p.task_list("Backlog").task("B").children == (Task("A1"),)
    assert service.get_project("Launch") == p


def test_failed_mutation_never_saves() -> None:
    repo = InMemoryProjectRepo([Project("P", lists=(TaskList("L", tasks=(Task("t"),)),))])
    service = ProjectService(repo)

    for call in (
        lambda: service.add_task("P", "L", Task("t")),
        lambda: service.remove_task("P", "L", "x"),
        lambda: service.add_task_list("P", TaskList("L")),
        lambda: service.move_task("P", "L", ["t"], "L", ["t"]),
    ):
        with pytest.raises((DuplicateKeyError, NotFoundError, ValidationError)):
            call()
    assert repo.saves == []


def test_read_modify_write_is_last_writer_wins() -> None:
    repo = InMemoryProjectRepo([Project("P", lists=(TaskList("L"),))])
    service = ProjectService(repo)

    stale = repo.find_by_key("P")
    service.add_task("P", "L", Task("from-service"))
    # a second writer holding the stale value overwrites without any conflict check
    service.update_project(stale)
    assert repo.find_by_key("P").task_list("L").tasks == ()
