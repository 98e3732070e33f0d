from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.deps import get_status_service, to_http_error
from app.exceptions import TrackerError
from app.models import User
from app.status_service import StatusService
from auth.oauth2 import get_current_user
from schemas.status import StatusCreate, StatusRead

router = APIRouter(prefix="/api/project", tags=["Statuses"])


@router.post("/statuses", response_model=StatusRead)
def create_status(
    body: StatusCreate,
    service: StatusService = Depends(get_status_service),
    current_user: User = Depends(get_current_user),
):
    try:
        return service.create(body)
    except TrackerError as e:
        raise to_http_error(e) from e


@router.get("/{project_id}/statuses", response_model=List[StatusRead])
def list_statuses(
    project_id: int,
    service: StatusService = Depends(get_status_service),
    current_user: User = Depends(get_current_user),
):
    try:
        return service.get_for_project(project_id)
    except TrackerError as e:
        raise to_http_error(e) from e


@router.delete("/statuses/{status_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_status(
    status_id: int,
    service: StatusService = Depends(get_status_service),
    current_user: User = Depends(get_current_user),
):
    try:
        removed = service.remove(status_id)
    except TrackerError as e:
        raise to_http_error(e) from e

    if not removed:
        raise HTTPException(status_code=404, detail=f"Status {status_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
