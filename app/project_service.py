"""
Business logic for projects: member resolution and DTO mapping.
"""
from typing import List, Optional

from app.exceptions import NotFoundError, ValidationFailure
from app.logger import get_logger
from app.mappers import project_to_dto
from app.models import Project, User
from app.repositories import ProjectRepository, UserRepository
from schemas.project import ProjectCreate, ProjectRead, ProjectUpdate

logger = get_logger(__name__)


class ProjectService:
    def __init__(self, project_repository: ProjectRepository, user_repository: UserRepository):
        self.project_repository = project_repository
        self.user_repository = user_repository

    def _resolve_members(self, member_ids: List[int]) -> List[User]:
        """Load every member id, failing on the first one that does not exist."""
        members: List[User] = []
        seen = set()
        for member_id in member_ids:
            if member_id in seen:
                continue
            seen.add(member_id)
            user = self.user_repository.get_by_id(member_id)
            if user is None:
                raise NotFoundError(f"User {member_id} not found")
            members.append(user)
        return members

    @staticmethod
    def _clean_name(name: Optional[str]) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationFailure("Project name is required")
        return cleaned

    def create(self, dto: ProjectCreate, creator: Optional[User] = None) -> ProjectRead:
        """
        Create a project from a name and a list of member ids.

        Args:
            dto: Project name and member ids
            creator: Authenticated user; added as a member when not listed

        Returns:
            The stored project

        Raises:
            ValidationFailure: blank name
            NotFoundError: a member id does not exist
        """
        name = self._clean_name(dto.name)
        members = self._resolve_members(dto.member_ids)
        if creator is not None and all(member.id != creator.id for member in members):
            members.append(creator)

        project_id = self.project_repository.create(Project(name=name, members=members))
        logger.info(f"Created project {project_id} ({name}) with {len(members)} member(s)")

        return project_to_dto(self.project_repository.get_by_id(project_id))

    def get(self, project_id: int) -> Optional[ProjectRead]:
        project = self.project_repository.get_by_id(project_id)
        if project is None:
            return None
        return project_to_dto(project)

    def get_all(self, member_name: Optional[str] = None) -> List[ProjectRead]:
        """List every project, or only those the named user belongs to."""
        if member_name is None:
            projects = self.project_repository.get_all()
        else:
            projects = self.project_repository.get_by_foreign_key("members.name", member_name)
        return [project_to_dto(project) for project in projects]

    def update(self, project_id: int, dto: ProjectUpdate) -> Optional[ProjectRead]:
        """
        Replace the supplied fields of a project.

        Returns None when the project does not exist.
        """
        existing = self.project_repository.get_by_id(project_id)
        if existing is None:
            return None

        supplied = dto.model_fields_set
        name = self._clean_name(dto.name) if "name" in supplied else existing.name
        if "member_ids" in supplied:
            members = self._resolve_members(dto.member_ids or [])
        else:
            members = list(existing.members)

        updated = self.project_repository.update(project_id, Project(name=name, members=members))
        if updated is None:
            return None

        logger.info(f"Updated project {project_id}")
        return project_to_dto(updated)

    def remove(self, project_id: int) -> bool:
        removed = self.project_repository.delete(project_id) is not None
        if removed:
            logger.info(f"Deleted project {project_id}")
        return removed
