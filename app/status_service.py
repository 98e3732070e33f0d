"""
Project-scoped statuses. A status name is unique inside its project only.
"""
from typing import List

from app.exceptions import ConflictError, NotFoundError, ValidationFailure
from app.logger import get_logger
from app.mappers import status_to_dto
from app.models import Status
from app.repositories import ProjectRepository, StatusRepository, TaskRepository
from schemas.status import StatusCreate, StatusRead

logger = get_logger(__name__)


class StatusService:
    def __init__(
        self,
        status_repository: StatusRepository,
        project_repository: ProjectRepository,
        task_repository: TaskRepository,
    ):
        self.status_repository = status_repository
        self.project_repository = project_repository
        self.task_repository = task_repository

    def create(self, dto: StatusCreate) -> StatusRead:
        name = dto.name.strip()
        if not name:
            raise ValidationFailure("Status name is required")

        project = self.project_repository.get_by_id(dto.project_id)
        if project is None:
            raise NotFoundError(f"Project {dto.project_id} not found")

        if self.status_repository.get_by_key(name, project.id) is not None:
            raise ConflictError(f"Status '{name}' already exists in project {project.id}")

        status_id = self.status_repository.create(Status(name=name, project_id=project.id))
        logger.info(f"Created status {status_id} ({name}) in project {project.id}")
        return status_to_dto(self.status_repository.get_by_id(status_id))

    def get_for_project(self, project_id: int) -> List[StatusRead]:
        if self.project_repository.get_by_id(project_id) is None:
            raise NotFoundError(f"Project {project_id} not found")
        return [status_to_dto(status) for status in self.status_repository.get_by_foreign_key("project.id", project_id)]

    def remove(self, status_id: int) -> bool:
        """Delete a status; refused while any task still uses it."""
        if self.status_repository.get_by_id(status_id) is None:
            return False

        in_use = self.task_repository.get_by_foreign_key("status.id", status_id)
        if in_use:
            raise ConflictError(f"Status {status_id} is used by {len(in_use)} task(s)")

        removed = self.status_repository.delete(status_id) is not None
        if removed:
            logger.info(f"Deleted status {status_id}")
        return removed
