from pydantic import BaseModel, ConfigDict, Field


class StatusCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    project_id: int = Field(..., alias="projectId")


class StatusRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    project_id: int = Field(..., alias="projectId")
