"""Exercise schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ExerciseBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: str | None = Field(None, max_length=100)
    muscle_group: str | None = Field(None, max_length=100)
    equipment: str | None = Field(None, max_length=100)


class ExerciseCreate(ExerciseBase):
    pass


class ExerciseUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    category: str | None = None
    muscle_group: str | None = None
    equipment: str | None = None


class ExerciseRead(ExerciseBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    created_at: datetime | None = None


class ExerciseOptions(BaseModel):
    """Distinct values for the catalog filters."""

    categories: list[str] = []
    muscle_groups: list[str] = []
