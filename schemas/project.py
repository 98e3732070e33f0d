from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.status import StatusRead
from schemas.task import TaskRead


class MemberRead(BaseModel):
    id: int
    name: str


class ProjectCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    member_ids: List[int] = Field(default_factory=list, alias="memberIds")


class ProjectUpdate(BaseModel):
    """Omitted keys keep their stored value."""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    member_ids: Optional[List[int]] = Field(None, alias="memberIds")


class ProjectRead(BaseModel):
    id: int
    name: str
    members: List[MemberRead] = []
    statuses: List[StatusRead] = []
    tasks: List[TaskRead] = []
