"""
Project endpoints. Listing is scoped to projects the caller belongs to.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.deps import get_project_service, get_task_service, to_http_error
from app.exceptions import TrackerError
from app.models import User
from app.project_service import ProjectService
from app.task_service import TaskService
from auth.oauth2 import get_current_user
from schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from schemas.task import TaskRead

router = APIRouter(prefix="/api/project", tags=["Projects"])


@router.post("", response_model=ProjectRead)
def create_project(
    project: ProjectCreate,
    service: ProjectService = Depends(get_project_service),
    current_user: User = Depends(get_current_user),
):
    try:
        return service.create(project, creator=current_user)
    except TrackerError as e:
        raise to_http_error(e) from e


@router.get("", response_model=List[ProjectRead])
def list_projects(
    service: ProjectService = Depends(get_project_service),
    current_user: User = Depends(get_current_user),
):
    return service.get_all(member_name=current_user.name)


@router.get("/{project_id}", response_model=ProjectRead)
def get_project(
    project_id: int,
    service: ProjectService = Depends(get_project_service),
    current_user: User = Depends(get_current_user),
):
    project = service.get(project_id)
    if project is None:
        raise HTTPException(status_code=404, detail=f"Project {project_id} not found")
    return project


@router.put("/{project_id}", response_model=ProjectRead)
def update_project(
    project_id: int,
    changes: ProjectUpdate,
    service: ProjectService = Depends(get_project_service),
    current_user: User = Depends(get_current_user),
):
    try:
        project = service.update(project_id, changes)
    except TrackerError as e:
        raise to_http_error(e) from e

    if project is None:
        raise HTTPException(status_code=404, detail=f"Project {project_id} not found")
    return project


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: int,
    service: ProjectService = Depends(get_project_service),
    current_user: User = Depends(get_current_user),
):
    if not service.remove(project_id):
        raise HTTPException(status_code=404, detail=f"Project {project_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{project_id}/tasks", response_model=List[TaskRead])
def list_project_tasks(
    project_id: int,
    service: TaskService = Depends(get_task_service),
    current_user: User = Depends(get_current_user),
):
    try:
        return service.get_for_project(project_id)
    except TrackerError as e:
        raise to_http_error(e) from e
