"""Workout history schemas."""

from pydantic import BaseModel

from fitsnap.schemas.workout import WorkoutWithExercises


class HistoryItem(WorkoutWithExercises):
    exercise_count: int = 0
    total_sets: int = 0
    total_weight: float = 0  # heaviest set in the workout, kg
    total_exercise_duration: int = 0  # seconds, summed over timed sets


class HistoryPage(BaseModel):
    workouts: list[HistoryItem] = []
    total: int = 0
