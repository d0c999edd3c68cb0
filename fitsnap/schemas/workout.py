"""Workout detail schemas (public read-through shapes)."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from fitsnap.core.enums import WorkoutType


class ExerciseSummary(BaseModel):
    """Catalog fields embedded in a workout exercise."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    category: str | None = None
    muscle_group: str | None = None
    equipment: str | None = None


class WorkoutSetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    workout_exercise_id: UUID
    reps: int = 0
    weight: float | None = None
    duration: int | None = None
    rest_time: int | None = None
    is_personal_record: bool = False


class WorkoutExerciseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    exercise_id: UUID
    order_index: int = 0
    notes: str | None = None
    exercises: ExerciseSummary | None = None
    workout_sets: list[WorkoutSetRead] = []


class WorkoutDetail(BaseModel):
    """Exercises of a public workout with their sets nested."""

    model_config = ConfigDict(populate_by_name=True)

    exercises: list[WorkoutExerciseRead] = []
    total_sets: int = Field(0, alias="totalSets")


class WorkoutRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    name: str
    type: WorkoutType
    duration: int | None = None
    completed_at: datetime
    notes: str | None = None
    photo_url: str | None = None
    is_public: bool = False


class WorkoutWithExercises(WorkoutRead):
    """A user's own workout with its exercises and sets."""

    workout_exercises: list[WorkoutExerciseRead] = []


class WorkoutSetCreate(BaseModel):
    reps: int = Field(0, ge=0)
    weight: float | None = Field(None, ge=0)
    duration: int | None = Field(None, ge=0)
    rest_time: int | None = Field(None, ge=0)


class WorkoutExerciseCreate(BaseModel):
    exercise_id: UUID
    notes: str | None = None
    sets: list[WorkoutSetCreate] = []


class WorkoutCreate(BaseModel):
    """A finished workout as logged by the client; exercises keep their list order."""

    name: str = Field(..., min_length=1, max_length=255)
    type: WorkoutType = WorkoutType.CUSTOM
    notes: str | None = None
    photo_url: str | None = Field(None, max_length=1000)
    duration: int | None = Field(None, ge=0)
    is_public: bool = False
    completed_at: datetime | None = None
    exercises: list[WorkoutExerciseCreate] = []


class WorkoutUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    type: WorkoutType | None = None
    notes: str | None = None
    photo_url: str | None = Field(None, max_length=1000)
    duration: int | None = Field(None, ge=0)
    is_public: bool | None = None


class WorkoutSaved(BaseModel):
    success: bool = True
    workout_id: UUID
    personal_records: int = 0
