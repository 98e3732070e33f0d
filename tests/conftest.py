"""Pytest fixtures for the task tracker."""
from __future__ import annotations

import os

# Must be set before the app modules build their engine and settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["APP_ENV"] = "test"

from types import SimpleNamespace
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db import build_engine, get_db
from app.models import Base, Project, Status, Task, User
from app.repositories import (
    ProjectRepository,
    Repository,
    StatusRepository,
    TaskRepository,
    UserRepository,
)


# --- SQLite-backed fixtures ------------------------------------------------

@pytest.fixture()
def engine():
    test_engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=test_engine)
    try:
        yield test_engine
    finally:
        Base.metadata.drop_all(bind=test_engine)
        test_engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    from main import app

    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


# --- In-memory stub repositories for service unit tests --------------------

class _StubRepo(Repository):
    """Keeps transient entities in a dict; ids are assigned on create."""

    fields: tuple = ()

    def __init__(self):
        self.rows: Dict[int, object] = {}
        self.next_id = 1
        self.calls: List[str] = []

    def get_all(self) -> List:
        return [self.rows[key] for key in sorted(self.rows)]

    def get_by_id(self, item_id: int) -> Optional[object]:
        self.calls.append(f"get_by_id:{item_id}")
        return self.rows.get(item_id)

    def create(self, item) -> int:
        self.calls.append("create")
        item.id = self.next_id
        self.rows[item.id] = item
        self.next_id += 1
        return item.id

    def update(self, item_id: int, item) -> Optional[object]:
        self.calls.append(f"update:{item_id}")
        stored = self.rows.get(item_id)
        if stored is None:
            return None
        for field in self.fields:
            setattr(stored, field, getattr(item, field))
        return stored

    def delete(self, item_id: int) -> Optional[object]:
        self.calls.append(f"delete:{item_id}")
        return self.rows.pop(item_id, None)

    def add(self, item):
        """Seed a row without recording a call."""
        self.rows[item.id] = item
        self.next_id = max(self.next_id, item.id + 1)
        return item


class StubUserRepo(_StubRepo):
    fields = UserRepository.updatable_fields

    def get_by_key(self, name: str) -> Optional[User]:
        return next((user for user in self.rows.values() if user.name == name), None)

    def count(self) -> int:
        return len(self.rows)


class StubProjectRepo(_StubRepo):
    fields = ProjectRepository.updatable_fields

    def get_by_foreign_key(self, key: str, value) -> List[Project]:
        assert key == "members.name"
        return [
            project for project in self.get_all()
            if any(member.name == value for member in project.members)
        ]


class StubStatusRepo(_StubRepo):
    fields = StatusRepository.updatable_fields

    def get_by_key(self, name: str, project_id: int) -> Optional[Status]:
        self.calls.append(f"get_by_key:{name}:{project_id}")
        return next(
            (s for s in self.rows.values() if s.name == name and s.project_id == project_id),
            None,
        )

    def get_by_foreign_key(self, key: str, value) -> List[Status]:
        return [s for s in self.get_all() if s.project_id == value]


class StubTaskRepo(_StubRepo):
    # The ORM reloads relationships from the ids; the stub copies them directly
    fields = TaskRepository.updatable_fields + ("status", "assigner")

    def get_by_foreign_key(self, key: str, value) -> List[Task]:
        attribute = {
            "project.id": "project_id",
            "status.id": "status_id",
            "assigner.id": "assigner_id",
        }[key]
        return [task for task in self.get_all() if getattr(task, attribute) == value]


@pytest.fixture()
def stubs() -> SimpleNamespace:
    """
    Stub repositories seeded with two users, two projects and
    statuses "todo"/"done" in project 1 and "todo" in project 2.
    """
    users = StubUserRepo()
    projects = StubProjectRepo()
    statuses = StubStatusRepo()
    tasks = StubTaskRepo()

    alice = users.add(User(id=1, name="alice", password="x"))
    bob = users.add(User(id=2, name="bob", password="x"))

    projects.add(Project(id=1, name="board", members=[alice]))
    projects.add(Project(id=2, name="other", members=[bob]))

    statuses.add(Status(id=1, name="todo", project_id=1))
    statuses.add(Status(id=2, name="done", project_id=1))
    statuses.add(Status(id=3, name="todo", project_id=2))
    statuses.add(Status(id=4, name="review", project_id=2))

    return SimpleNamespace(users=users, projects=projects, statuses=statuses, tasks=tasks)
