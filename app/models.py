"""
SQLAlchemy models for the task tracker.
Users belong to projects through the project_members table; every status
and task hangs off exactly one project.
"""
import enum

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Table,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class UserRole(str, enum.Enum):
    ADMIN = "ADMIN"
    USER = "USER"


project_members = Table(
    "project_members",
    Base.metadata,
    Column("project_id", Integer, ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    """
    Model for registered users.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.USER)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name={self.name}, role={self.role})>"


class Project(Base):
    """
    Model for projects. Owns its statuses and tasks.
    """
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)

    members = relationship(
        "User",
        secondary=project_members,
        order_by="User.id",
    )
    statuses = relationship(
        "Status",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="Status.id",
    )
    tasks = relationship(
        "Task",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="Task.id",
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, name={self.name})>"


class Status(Base):
    """
    Model for project-scoped task statuses ("todo", "done", ...).
    """
    __tablename__ = "statuses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    project_id = Column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False
    )

    project = relationship("Project", back_populates="statuses")

    __table_args__ = (
        UniqueConstraint("project_id", "name", name="uq_statuses_project_name"),
    )

    def __repr__(self) -> str:
        return f"<Status(id={self.id}, name={self.name}, project_id={self.project_id})>"


class Task(Base):
    """
    Model for tasks assigned to users.
    """
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    status_id = Column(
        Integer,
        ForeignKey("statuses.id"),
        nullable=False
    )
    project_id = Column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False
    )
    assigner_id = Column(
        Integer,
        ForeignKey("users.id"),
        nullable=False
    )

    status = relationship("Status")
    project = relationship("Project", back_populates="tasks")
    assigner = relationship("User")

    __table_args__ = (
        Index('ix_tasks_project', 'project_id'),
        Index('ix_tasks_assigner', 'assigner_id'),
    )

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, title={self.title}, project_id={self.project_id})>"
