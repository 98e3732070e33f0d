"""
Entity -> DTO conversion shared by the services.
"""
from datetime import datetime, timezone

from app.models import Project, Status, Task
from schemas.project import MemberRead, ProjectRead
from schemas.status import StatusRead
from schemas.task import TaskRead


def _as_utc(value: datetime) -> datetime:
    """Stored timestamps are naive UTC; responses carry the offset."""
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


def task_to_dto(task: Task) -> TaskRead:
    return TaskRead(
        id=task.id,
        title=task.title,
        description=task.description,
        start_date=_as_utc(task.start_date),
        end_date=_as_utc(task.end_date),
        status=task.status.name,
        project_id=task.project_id,
        assigner_id=task.assigner_id,
    )


def status_to_dto(status: Status) -> StatusRead:
    return StatusRead(id=status.id, name=status.name, project_id=status.project_id)


def project_to_dto(project: Project) -> ProjectRead:
    return ProjectRead(
        id=project.id,
        name=project.name,
        members=[MemberRead(id=user.id, name=user.name) for user in project.members],
        statuses=[status_to_dto(status) for status in project.statuses],
        tasks=[task_to_dto(task) for task in project.tasks],
    )
