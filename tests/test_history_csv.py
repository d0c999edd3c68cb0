import csv
import io
import uuid

from fitsnap.schemas.history import HistoryItem
from fitsnap.schemas.workout import ExerciseSummary, WorkoutExerciseRead
from fitsnap.services.history import history_csv
from tests.conftest import T0


def _item(**overrides) -> HistoryItem:
    fields = {
        "id": uuid.uuid4(),
        "user_id": uuid.uuid4(),
        "name": "Rest day",
        "type": "custom",
        "completed_at": T0,
        "notes": "easy, \"deload\" week",
    }
    fields.update(overrides)
    return HistoryItem(**fields)


def test_csv_row_for_workout_without_exercises():
    rows = list(csv.reader(io.StringIO(history_csv([_item(duration=1750)]))))

    assert rows[1] == ["2026-03-01", "Rest day", "custom", "29"] + [""] * 9 + ['easy, "deload" week']


def test_csv_row_for_exercise_without_sets():
    entry = WorkoutExerciseRead(
        id=uuid.uuid4(),
        exercise_id=uuid.uuid4(),
        notes="skipped",
        exercises=ExerciseSummary(id=uuid.uuid4(), name="Dips", muscle_group="Triceps"),
    )

    rows = list(csv.reader(io.StringIO(history_csv([_item(workout_exercises=[entry])]))))

    assert len(rows) == 2
    assert rows[1][4:6] == ["Dips", "Triceps"]
    assert rows[1][6:12] == [""] * 6
    assert rows[1][12:] == ["skipped", 'easy, "deload" week']
