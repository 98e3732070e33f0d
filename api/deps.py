"""
Per-request wiring of repositories and services, and translation of
domain failures into HTTP errors.
"""
from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.db import get_db
from app.exceptions import ConflictError, NotFoundError, TrackerError, ValidationFailure
from app.project_service import ProjectService
from app.repositories import ProjectRepository, StatusRepository, TaskRepository, UserRepository
from app.status_service import StatusService
from app.task_service import TaskService
from app.user_service import UserService

ERROR_STATUS_CODES = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationFailure: status.HTTP_400_BAD_REQUEST,
    ConflictError: status.HTTP_409_CONFLICT,
}


def to_http_error(error: TrackerError) -> HTTPException:
    code = ERROR_STATUS_CODES.get(type(error), status.HTTP_400_BAD_REQUEST)
    return HTTPException(status_code=code, detail=str(error))


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(UserRepository(db))


def get_project_service(db: Session = Depends(get_db)) -> ProjectService:
    return ProjectService(ProjectRepository(db), UserRepository(db))


def get_status_service(db: Session = Depends(get_db)) -> StatusService:
    return StatusService(StatusRepository(db), ProjectRepository(db), TaskRepository(db))


def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    return TaskService(
        TaskRepository(db),
        ProjectRepository(db),
        StatusRepository(db),
        UserRepository(db),
    )
