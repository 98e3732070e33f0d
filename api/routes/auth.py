from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_user_service, to_http_error
from app.exceptions import TrackerError
from app.models import User
from app.user_service import UserService
from auth.oauth2 import get_current_user
from schemas.auth import AuthResponse, LoginRequest, UserCreate, UserRead

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=AuthResponse)
def register(user: UserCreate, service: UserService = Depends(get_user_service)):
    try:
        user_id, token = service.register(user)
    except TrackerError as e:
        raise to_http_error(e) from e
    return {"id": user_id, "token": token}


@router.post("/login", response_model=AuthResponse)
def login(credentials: LoginRequest, service: UserService = Depends(get_user_service)):
    user = service.authenticate(credentials.name, credentials.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return {"id": user.id, "token": service.issue_token(user.id)}


@router.get("/me", response_model=UserRead)
def me(
    service: UserService = Depends(get_user_service),
    current_user: User = Depends(get_current_user),
):
    """Return the account behind the bearer token."""
    account = service.get(current_user.id)
    if account is None:
        raise HTTPException(status_code=404, detail=f"User {current_user.id} not found")
    return account
