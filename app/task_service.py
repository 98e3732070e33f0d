"""
Business logic for tasks.

A task request names its project by id, its status by name and its
assignee by id. Each reference is resolved through its own repository
before anything is written, and the status must belong to the task's
project.
"""
from datetime import datetime, timezone
from typing import List, Optional

from app.exceptions import NotFoundError, ValidationFailure
from app.logger import get_logger
from app.mappers import task_to_dto
from app.models import Project, Status, Task, User
from app.repositories import ProjectRepository, StatusRepository, TaskRepository, UserRepository
from schemas.task import TaskCreate, TaskRead, TaskUpdate

logger = get_logger(__name__)

# Fields that may not be explicitly set to null on update
REQUIRED_UPDATE_FIELDS = ("title", "start_date", "end_date", "status", "assigner_id")


def _as_naive_utc(value: datetime) -> datetime:
    """Store timestamps as naive UTC so aware and naive inputs compare."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _check_dates(start_date: datetime, end_date: datetime) -> None:
    if end_date < start_date:
        raise ValidationFailure("endDate must not be before startDate")


class TaskService:
    def __init__(
        self,
        task_repository: TaskRepository,
        project_repository: ProjectRepository,
        status_repository: StatusRepository,
        user_repository: UserRepository,
    ):
        self.task_repository = task_repository
        self.project_repository = project_repository
        self.status_repository = status_repository
        self.user_repository = user_repository

    # ------------------------------------------------------------------
    # Reference resolution
    # ------------------------------------------------------------------

    def _resolve_project(self, project_id: int) -> Project:
        project = self.project_repository.get_by_id(project_id)
        if project is None:
            raise NotFoundError(f"Project {project_id} not found")
        return project

    def _resolve_status(self, name: str, project_id: int) -> Status:
        status = self.status_repository.get_by_key(name, project_id)
        if status is None or status.project_id != project_id:
            raise NotFoundError(f"Status '{name}' not found in project {project_id}")
        return status

    def _resolve_assigner(self, user_id: int) -> User:
        user = self.user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    @staticmethod
    def _clean_title(title: Optional[str]) -> str:
        cleaned = (title or "").strip()
        if not cleaned:
            raise ValidationFailure("Task title is required")
        return cleaned

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def create(self, dto: TaskCreate) -> TaskRead:
        """
        Create a task after resolving its project, status and assignee.

        Args:
            dto: Incoming task payload

        Returns:
            The stored task

        Raises:
            NotFoundError: project, status (within that project) or assignee missing
            ValidationFailure: blank title or endDate before startDate
        """
        title = self._clean_title(dto.title)
        project = self._resolve_project(dto.project_id)
        status = self._resolve_status(dto.status, project.id)
        assigner = self._resolve_assigner(dto.assigner_id)

        start_date = _as_naive_utc(dto.start_date)
        end_date = _as_naive_utc(dto.end_date)
        _check_dates(start_date, end_date)

        task = Task(
            title=title,
            description=dto.description,
            start_date=start_date,
            end_date=end_date,
            project_id=project.id,
            status=status,
            status_id=status.id,
            assigner=assigner,
            assigner_id=assigner.id,
        )
        task_id = self.task_repository.create(task)
        logger.info(f"Created task {task_id} in project {project.id} with status '{status.name}'")

        return task_to_dto(self.task_repository.get_by_id(task_id))

    def get(self, task_id: int) -> Optional[TaskRead]:
        task = self.task_repository.get_by_id(task_id)
        if task is None:
            return None
        return task_to_dto(task)

    def get_for_project(self, project_id: int) -> List[TaskRead]:
        self._resolve_project(project_id)
        return [task_to_dto(task) for task in self.task_repository.get_by_foreign_key("project.id", project_id)]

    def update(self, task_id: int, dto: TaskUpdate) -> TaskRead:
        """
        Apply a partial update to a task.

        Keys missing from the request keep their stored value. ``null`` is
        accepted for ``description`` only. Status names are looked up in the
        task's own project.

        Raises:
            NotFoundError: the task or a newly referenced status/assignee is missing
            ValidationFailure: a required field set to null, or bad date order
        """
        existing = self.task_repository.get_by_id(task_id)
        if existing is None:
            raise NotFoundError(f"Task {task_id} not found")

        supplied = dto.model_fields_set
        for field in REQUIRED_UPDATE_FIELDS:
            if field in supplied and getattr(dto, field) is None:
                raise ValidationFailure(f"{field} cannot be null")

        title = self._clean_title(dto.title) if "title" in supplied else existing.title
        description = dto.description if "description" in supplied else existing.description
        start_date = _as_naive_utc(dto.start_date) if "start_date" in supplied else existing.start_date
        end_date = _as_naive_utc(dto.end_date) if "end_date" in supplied else existing.end_date
        status = self._resolve_status(dto.status, existing.project_id) if "status" in supplied else existing.status
        assigner = self._resolve_assigner(dto.assigner_id) if "assigner_id" in supplied else existing.assigner

        _check_dates(start_date, end_date)

        changes = Task(
            title=title,
            description=description,
            start_date=start_date,
            end_date=end_date,
            project_id=existing.project_id,
            status=status,
            status_id=status.id,
            assigner=assigner,
            assigner_id=assigner.id,
        )
        updated = self.task_repository.update(task_id, changes)
        if updated is None:
            raise NotFoundError(f"Task {task_id} not found")

        logger.info(f"Updated task {task_id} ({', '.join(sorted(supplied)) or 'no fields'})")
        return task_to_dto(updated)

    def remove(self, task_id: int) -> bool:
        removed = self.task_repository.delete(task_id) is not None
        if removed:
            logger.info(f"Deleted task {task_id}")
        return removed
