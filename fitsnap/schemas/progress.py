"""Progress schemas: monthly goal, personal records, frequency, calendar."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class MonthlyProgress(BaseModel):
    current: int = 0
    target: int = 0
    percentage: float = 0


class PersonalRecordRead(BaseModel):
    id: UUID  # the set that holds the record
    exercise_name: str
    weight: float
    reps: int
    achieved_at: datetime


class WorkoutFrequency(BaseModel):
    this_week: int = 0
    last_week: int = 0
    this_month: int = 0
    last_month: int = 0


class WorkoutCalendar(BaseModel):
    year: int
    month: int
    days: list[int] = []
