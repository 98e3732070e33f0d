from pydantic import BaseModel

from app.models import UserRole


class UserCreate(BaseModel):
    name: str
    password: str


class LoginRequest(BaseModel):
    name: str
    password: str


class AuthResponse(BaseModel):
    id: int
    token: str


class UserRead(BaseModel):
    id: int
    name: str
    role: UserRole

    model_config = {
        "from_attributes": True,
    }
