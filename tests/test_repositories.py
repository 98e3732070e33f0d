# Integration tests for the SQLAlchemy repositories against in-memory SQLite

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from app.exceptions import ConflictError
from app.models import Project, Status, Task, User, UserRole
from app.repositories import (
    ProjectRepository,
    StatusRepository,
    TaskRepository,
    UserRepository,
)


@pytest.fixture()
def seeded(db):
    users = UserRepository(db)
    projects = ProjectRepository(db)
    statuses = StatusRepository(db)

    user_id = users.create(User(name="user", password="hashed", role=UserRole.ADMIN))
    user = users.get_by_id(user_id)
    project_id = projects.create(Project(name="project", members=[user]))
    todo_id = statuses.create(Status(name="todo", project_id=project_id))
    done_id = statuses.create(Status(name="done", project_id=project_id))
    return {
        "user_id": user_id,
        "project_id": project_id,
        "todo_id": todo_id,
        "done_id": done_id,
    }


def _task(seeded, title="task") -> Task:
    start = datetime(2024, 1, 1, 9, 0)
    return Task(
        title=title,
        description="task description",
        start_date=start,
        end_date=start + timedelta(hours=2),
        status_id=seeded["todo_id"],
        project_id=seeded["project_id"],
        assigner_id=seeded["user_id"],
    )


# --- Users -----------------------------------------------------------------

def test_user_lookup_by_unique_name(db, seeded):
    repo = UserRepository(db)
    user = repo.get_by_key("user")
    assert user is not None
    assert user.id == seeded["user_id"]
    assert repo.get_by_key("nobody") is None


def test_duplicate_user_name_is_a_conflict(db, seeded):
    repo = UserRepository(db)
    with pytest.raises(ConflictError):
        repo.create(User(name="user", password="other", role=UserRole.USER))
    # session is usable after the rollback
    assert repo.count() == 1


def test_user_role_is_fixed_at_creation(db, seeded):
    repo = UserRepository(db)

    updated = repo.update(
        seeded["user_id"],
        User(name="renamed", password="rehashed", role=UserRole.USER),
    )
    assert updated.name == "renamed"
    assert updated.password == "rehashed"
    assert updated.role == UserRole.ADMIN

    db.expire_all()
    assert repo.get_by_id(seeded["user_id"]).role == UserRole.ADMIN


# --- Projects --------------------------------------------------------------

def test_project_create_and_get(db, seeded):
    repo = ProjectRepository(db)
    project = repo.get_by_id(seeded["project_id"])
    assert project is not None
    assert project.name == "project"
    assert [member.name for member in project.members] == ["user"]
    assert [status.name for status in project.statuses] == ["todo", "done"]


def test_project_by_member_name(db, seeded):
    repo = ProjectRepository(db)
    repo.create(Project(name="lonely", members=[]))

    projects = repo.get_by_foreign_key("members.name", "user")
    assert [project.id for project in projects] == [seeded["project_id"]]
    assert repo.get_by_foreign_key("members.name", "nobody") == []
    assert len(repo.get_all()) == 2


def test_project_unknown_foreign_key(db, seeded):
    with pytest.raises(ValueError):
        ProjectRepository(db).get_by_foreign_key("owner", "user")


def test_project_update_replaces_name(db, seeded):
    repo = ProjectRepository(db)
    user = UserRepository(db).get_by_id(seeded["user_id"])

    updated = repo.update(seeded["project_id"], Project(name="updated project", members=[user]))
    assert updated is not None
    assert updated.name == "updated project"
    assert [member.id for member in updated.members] == [seeded["user_id"]]

    assert repo.update(999, Project(name="ghost", members=[])) is None


def test_project_delete_cascades_statuses_and_tasks(db, seeded):
    TaskRepository(db).create(_task(seeded))
    repo = ProjectRepository(db)

    assert repo.delete(seeded["project_id"]) is not None
    assert repo.delete(seeded["project_id"]) is None
    assert StatusRepository(db).get_all() == []
    assert TaskRepository(db).get_all() == []
    # members survive
    assert UserRepository(db).get_by_id(seeded["user_id"]) is not None


# --- Statuses --------------------------------------------------------------

def test_status_key_is_scoped_to_project(db, seeded):
    projects = ProjectRepository(db)
    statuses = StatusRepository(db)
    other_id = projects.create(Project(name="other", members=[]))
    statuses.create(Status(name="review", project_id=other_id))

    assert statuses.get_by_key("todo", seeded["project_id"]).id == seeded["todo_id"]
    assert statuses.get_by_key("review", seeded["project_id"]) is None
    assert statuses.get_by_key("review", other_id) is not None

    # the same name may live in another project
    statuses.create(Status(name="todo", project_id=other_id))
    names = [status.name for status in statuses.get_by_foreign_key("project.id", other_id)]
    assert names == ["review", "todo"]


def test_duplicate_status_in_project_is_a_conflict(db, seeded):
    with pytest.raises(ConflictError):
        StatusRepository(db).create(Status(name="todo", project_id=seeded["project_id"]))


# --- Tasks -----------------------------------------------------------------

def test_task_crud_cycle(db, seeded):
    repo = TaskRepository(db)

    task_id = repo.create(_task(seeded))
    assert task_id > 0

    stored = repo.get_by_id(task_id)
    assert stored.title == "task"
    assert stored.description == "task description"
    assert stored.status.name == "todo"
    assert stored.assigner.name == "user"

    changes = _task(seeded, title="updated task")
    changes.status_id = seeded["done_id"]
    updated = repo.update(task_id, changes)
    assert updated.title == "updated task"
    assert updated.status.name == "done"

    assert [task.id for task in repo.get_by_foreign_key("project.id", seeded["project_id"])] == [task_id]
    assert [task.id for task in repo.get_by_foreign_key("status.id", seeded["done_id"])] == [task_id]
    assert repo.get_by_foreign_key("assigner.id", 999) == []

    assert repo.delete(task_id) is not None
    assert repo.delete(task_id) is None
    assert repo.get_by_id(task_id) is None


def test_task_update_missing_id(db, seeded):
    assert TaskRepository(db).update(42, _task(seeded)) is None
