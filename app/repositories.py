"""
Repository layer over the SQLAlchemy session.

Every repository exposes the same core contract (get_all, get_by_id,
create, update, delete). Lookups by natural key or by foreign key are
declared only on the repositories that support them.
"""
from abc import ABC, abstractmethod
from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError
from app.logger import get_logger
from app.models import Project, Status, Task, User

logger = get_logger(__name__)

T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """Abstract persistence contract for one entity type."""

    @abstractmethod
    def get_all(self) -> List[T]:
        ...

    @abstractmethod
    def get_by_id(self, item_id: int) -> Optional[T]:
        ...

    @abstractmethod
    def create(self, item: T) -> int:
        """Persist ``item`` and return its generated id."""

    @abstractmethod
    def update(self, item_id: int, item: T) -> Optional[T]:
        """Copy the fields of ``item`` onto the stored row; None if missing."""

    @abstractmethod
    def delete(self, item_id: int) -> Optional[T]:
        """Remove the row and return it; None if missing."""


class SqlAlchemyRepository(Repository[T]):
    """
    Shared implementation for ORM-mapped entities.

    Subclasses set ``model`` and list the attributes copied by ``update``
    in ``updatable_fields``.
    """

    model: Type[T]
    updatable_fields: tuple = ()

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[T]:
        return self.db.query(self.model).order_by(self.model.id).all()

    def get_by_id(self, item_id: int) -> Optional[T]:
        return self.db.get(self.model, item_id)

    def create(self, item: T) -> int:
        self.db.add(item)
        self._commit(f"create {self.model.__name__}")
        self.db.refresh(item)
        return item.id

    def update(self, item_id: int, item: T) -> Optional[T]:
        stored = self.get_by_id(item_id)
        if stored is None:
            return None

        for field in self.updatable_fields:
            value = getattr(item, field)
            if isinstance(value, list):
                # detach from the source object's instrumented collection
                value = list(value)
            setattr(stored, field, value)

        self._commit(f"update {self.model.__name__} {item_id}")
        self.db.refresh(stored)
        return stored

    def delete(self, item_id: int) -> Optional[T]:
        stored = self.get_by_id(item_id)
        if stored is None:
            return None

        self.db.delete(stored)
        self._commit(f"delete {self.model.__name__} {item_id}")
        return stored

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Constraint violation on {action}: {e.orig}")
            raise ConflictError(f"Cannot {action}: conflicting data") from e


class UserRepository(SqlAlchemyRepository[User]):
    model = User
    # role is fixed at creation
    updatable_fields = ("name", "password")

    def get_by_key(self, name: str) -> Optional[User]:
        """Fetch a user by unique name."""
        return self.db.query(User).filter(User.name == name).first()

    def count(self) -> int:
        return self.db.query(User).count()


class ProjectRepository(SqlAlchemyRepository[Project]):
    model = Project
    updatable_fields = ("name", "members")

    def get_by_foreign_key(self, key: str, value) -> List[Project]:
        """
        Fetch projects through a membership attribute.

        Args:
            key: ``"members.name"`` or ``"members.id"``
            value: Value the member attribute must equal

        Returns:
            Matching projects ordered by id
        """
        columns = {
            "members.name": User.name,
            "members.id": User.id,
        }
        if key not in columns:
            raise ValueError(f"Unsupported project foreign key: {key}")

        return (
            self.db.query(Project)
            .join(Project.members)
            .filter(columns[key] == value)
            .order_by(Project.id)
            .all()
        )


class StatusRepository(SqlAlchemyRepository[Status]):
    model = Status
    updatable_fields = ("name",)

    def get_by_key(self, name: str, project_id: int) -> Optional[Status]:
        """Fetch a status by name; names are only unique inside a project."""
        return (
            self.db.query(Status)
            .filter(Status.name == name, Status.project_id == project_id)
            .first()
        )

    def get_by_foreign_key(self, key: str, value) -> List[Status]:
        if key != "project.id":
            raise ValueError(f"Unsupported status foreign key: {key}")
        return (
            self.db.query(Status)
            .filter(Status.project_id == value)
            .order_by(Status.id)
            .all()
        )


class TaskRepository(SqlAlchemyRepository[Task]):
    model = Task
    updatable_fields = (
        "title",
        "description",
        "start_date",
        "end_date",
        "status_id",
        "assigner_id",
    )

    def get_by_foreign_key(self, key: str, value) -> List[Task]:
        columns = {
            "project.id": Task.project_id,
            "status.id": Task.status_id,
            "assigner.id": Task.assigner_id,
        }
        if key not in columns:
            raise ValueError(f"Unsupported task foreign key: {key}")

        return (
            self.db.query(Task)
            .filter(columns[key] == value)
            .order_by(Task.id)
            .all()
        )
