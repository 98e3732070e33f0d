"""
Wire format for tasks. Keys are camelCase on the wire and snake_case in
Python; both spellings are accepted on input.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TaskCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: Optional[str] = None
    start_date: datetime = Field(..., alias="startDate")
    end_date: datetime = Field(..., alias="endDate")
    status: str
    project_id: int = Field(..., alias="projectId")
    assigner_id: int = Field(..., alias="assignerId")


class TaskUpdate(BaseModel):
    """
    Partial update. Only keys present in the request body are applied;
    see ``model_fields_set``.
    """
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[datetime] = Field(None, alias="startDate")
    end_date: Optional[datetime] = Field(None, alias="endDate")
    status: Optional[str] = None
    assigner_id: Optional[int] = Field(None, alias="assignerId")


class TaskRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    description: Optional[str] = None
    start_date: datetime = Field(..., alias="startDate")
    end_date: datetime = Field(..., alias="endDate")
    status: str
    project_id: int = Field(..., alias="projectId")
    assigner_id: int = Field(..., alias="assignerId")
