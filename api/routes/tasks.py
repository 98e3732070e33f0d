"""
Task endpoints. Payloads name the status by its label and the project and
assignee by id.
"""
from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.deps import get_task_service, to_http_error
from app.exceptions import TrackerError
from app.models import User
from app.task_service import TaskService
from auth.oauth2 import get_current_user
from schemas.task import TaskCreate, TaskRead, TaskUpdate

router = APIRouter(prefix="/api/project/tasks", tags=["Tasks"])


@router.post("", response_model=TaskRead)
def create_task(
    task: TaskCreate,
    service: TaskService = Depends(get_task_service),
    current_user: User = Depends(get_current_user),
):
    try:
        return service.create(task)
    except TrackerError as e:
        raise to_http_error(e) from e


@router.get("/{task_id}", response_model=TaskRead)
def get_task(
    task_id: int,
    service: TaskService = Depends(get_task_service),
    current_user: User = Depends(get_current_user),
):
    task = service.get(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    return task


@router.put("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: int,
    changes: TaskUpdate,
    service: TaskService = Depends(get_task_service),
    current_user: User = Depends(get_current_user),
):
    """Apply only the keys present in the body; see TaskService.update."""
    try:
        return service.update(task_id, changes)
    except TrackerError as e:
        raise to_http_error(e) from e


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    service: TaskService = Depends(get_task_service),
    current_user: User = Depends(get_current_user),
):
    if not service.remove(task_id):
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
