"""
Registration and authentication of tracker users.
"""
from typing import Optional, Tuple

from app.exceptions import ConflictError, ValidationFailure
from app.logger import get_logger
from app.models import User, UserRole
from app.repositories import UserRepository
from auth.jwt_handler import create_access_token
from auth.security import hash_password, verify_password
from schemas.auth import UserCreate, UserRead

logger = get_logger(__name__)


class UserService:
    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    def register(self, dto: UserCreate) -> Tuple[int, str]:
        """
        Create a user and issue an access token for it.

        The very first account becomes ADMIN, every later one USER.

        Args:
            dto: Name and plain password

        Returns:
            Tuple of (user id, bearer token)

        Raises:
            ValidationFailure: name or password is blank
            ConflictError: name is already taken
        """
        name = dto.name.strip()
        if not name or not dto.password:
            raise ValidationFailure("Name and password are required")

        if self.user_repository.get_by_key(name) is not None:
            logger.warning(f"Registration rejected, name taken: {name}")
            raise ConflictError(f"User '{name}' already exists")

        role = UserRole.ADMIN if self.user_repository.count() == 0 else UserRole.USER
        user = User(name=name, password=hash_password(dto.password), role=role)
        user_id = self.user_repository.create(user)

        logger.info(f"Registered user {user_id} ({name}) as {role.value}")
        return user_id, self.issue_token(user_id)

    def authenticate(self, name: str, password: str) -> Optional[User]:
        user = self.user_repository.get_by_key(name.strip())
        if user is None or not verify_password(password, user.password):
            return None
        return user

    def issue_token(self, user_id: int) -> str:
        return create_access_token({"sub": str(user_id)})

    def get(self, user_id: int) -> Optional[UserRead]:
        user = self.user_repository.get_by_id(user_id)
        if user is None:
            return None
        return UserRead.model_validate(user)
