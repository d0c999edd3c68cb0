import uuid
from datetime import datetime, timedelta, timezone

import pytest

from fitsnap.schemas.workout import ExerciseSummary, WorkoutExerciseRead, WorkoutSetRead
from fitsnap.services.community import (
    calculate_workout_volume,
    format_relative_time,
    generate_exercise_summary,
)

NOW = datetime(2026, 5, 20, 12, 0, tzinfo=timezone.utc)


def _entry(name: str | None, sets: list[tuple[int, float | None]] = ()) -> WorkoutExerciseRead:
    entry_id = uuid.uuid4()
    return WorkoutExerciseRead(
        id=entry_id,
        exercise_id=uuid.uuid4(),
        exercises=ExerciseSummary(id=uuid.uuid4(), name=name) if name else None,
        workout_sets=[
            WorkoutSetRead(id=uuid.uuid4(), workout_exercise_id=entry_id, reps=reps, weight=weight)
            for reps, weight in sets
        ],
    )


@pytest.mark.parametrize(
    "names,expected",
    [
        ([], "No exercises logged"),
        ([None], "Workout completed"),
        (["Squat"], "Squat"),
        (["Squat", "Bench Press"], "Squat, Bench Press"),
        (["Squat", "Bench Press", "Row", "Curl"], "Squat, Bench Press and 2 more"),
    ],
)
def test_generate_exercise_summary(names, expected):
    assert generate_exercise_summary([_entry(n) for n in names]) == expected


def test_calculate_workout_volume():
    entries = [_entry("Squat", [(5, 100.0), (5, 100.0)]), _entry("Plank", [(0, None)]), _entry("Curl", [(10, 12.5)])]

    assert calculate_workout_volume(entries) == 1125.0


def test_calculate_workout_volume_empty():
    assert calculate_workout_volume([]) == 0


@pytest.mark.parametrize(
    "delta,expected",
    [
        (timedelta(seconds=30), "Just now"),
        (timedelta(minutes=5), "5m ago"),
        (timedelta(hours=3, minutes=59), "3h ago"),
        (timedelta(days=2), "2d ago"),
        (timedelta(days=10), "5/10/2026"),
    ],
)
def test_format_relative_time(delta, expected):
    assert format_relative_time(NOW - delta, now=NOW) == expected


def test_format_relative_time_naive_is_utc():
    assert format_relative_time((NOW - timedelta(minutes=2)).replace(tzinfo=None), now=NOW) == "2m ago"
