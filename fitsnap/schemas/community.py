"""Community schemas: comments, reactions, feed."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from fitsnap.core.constants import DEFAULT_REACTION_TYPE
from fitsnap.schemas.workout import WorkoutExerciseRead, WorkoutRead


class ProfileSummary(BaseModel):
    """Poster details embedded in comments."""

    model_config = ConfigDict(from_attributes=True)

    username: str | None = None
    avatar_url: str | None = None


class FeedProfile(ProfileSummary):
    full_name: str | None = None


# Request bodies keep the frontend's camelCase keys. Fields are optional so that
# the handlers can answer missing ones with a 400 and a readable message.


class CommentCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    workout_id: UUID | None = Field(None, alias="workoutId")
    content: str | None = None
    user_id: UUID | None = Field(None, alias="userId")


class ReactionCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    workout_id: UUID | None = Field(None, alias="workoutId")
    user_id: UUID | None = Field(None, alias="userId")
    reaction_type: str = Field(DEFAULT_REACTION_TYPE, alias="reactionType", min_length=1, max_length=20)


class ReactionDelete(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    workout_id: UUID | None = Field(None, alias="workoutId")
    user_id: UUID | None = Field(None, alias="userId")


class VisibilityUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_public: bool = Field(..., alias="isPublic")


class CommentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    workout_id: UUID
    user_id: UUID
    content: str
    created_at: datetime
    updated_at: datetime | None = None
    profiles: ProfileSummary | None = None


class CommentList(BaseModel):
    comments: list[CommentRead] = []


class CommentCreated(BaseModel):
    comment: CommentRead


class ReactionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    workout_id: UUID
    user_id: UUID
    reaction_type: str
    created_at: datetime | None = None


class ReactionAdded(BaseModel):
    success: bool = True
    reaction: ReactionRead
    message: str = "Reaction added successfully"


class ReactionRemoved(BaseModel):
    success: bool = True
    message: str = "Reaction removed successfully"


class ReactionList(BaseModel):
    reactions: list[ReactionRead] = []


class FeedCounts(BaseModel):
    community_reactions: int = 0
    community_comments: int = 0


class CommunityWorkoutRead(WorkoutRead):
    """Public workout as shown in the feed."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    profiles: FeedProfile
    workout_exercises: list[WorkoutExerciseRead] = []
    community_reactions: list[ReactionRead] = []
    counts: FeedCounts = Field(default_factory=FeedCounts, alias="_count")
