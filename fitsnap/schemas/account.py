"""Account schemas: profile, settings and goals of the signed-in user."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from fitsnap.core.constants import DEFAULT_REST_SECONDS, DEFAULT_THEME

Theme = Literal["dark", "light"]


class ProfileRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str | None = None
    full_name: str | None = None
    avatar_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProfileUpdate(BaseModel):
    username: str | None = Field(None, min_length=1, max_length=50)
    full_name: str | None = Field(None, max_length=255)
    avatar_url: str | None = Field(None, max_length=1000)


class SettingsRead(BaseModel):
    """Stored settings, or the defaults (id None) when the user has never saved any."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID | None = None
    user_id: UUID
    default_rest_seconds: int = DEFAULT_REST_SECONDS
    theme: Theme = DEFAULT_THEME
    notifications_enabled: bool = True
    community_sharing_enabled: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SettingsUpdate(BaseModel):
    default_rest_seconds: int | None = Field(None, ge=0, le=3600)
    theme: Theme | None = None
    notifications_enabled: bool | None = None
    community_sharing_enabled: bool | None = None


class GoalsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID | None = None
    user_id: UUID
    monthly_workout_target: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class GoalsUpdate(BaseModel):
    monthly_workout_target: int = Field(..., ge=1, le=31)
