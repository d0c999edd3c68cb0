"""Workout history: filtered listing, muscle groups used, CSV export."""

from __future__ import annotations

import csv
import io
import uuid
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fitsnap.db.filters import LIKE_ESCAPE, contains_pattern
from fitsnap.models.exercise import Exercise
from fitsnap.models.workout import Workout, WorkoutExercise
from fitsnap.schemas.history import HistoryItem
from fitsnap.services.community import build_exercise_entries, fetch_sets, fetch_workout_exercises, group_by

CSV_HEADER = [
    "Date",
    "Workout Name",
    "Type",
    "Duration (min)",
    "Exercise",
    "Muscle Group",
    "Set Number",
    "Reps",
    "Weight (kg)",
    "Duration (sec)",
    "Rest Time (sec)",
    "Personal Record",
    "Exercise Notes",
    "Workout Notes",
]


@dataclass
class HistoryFilters:
    search: str | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None
    muscle_group: str | None = None
    workout_type: str | None = None  # "all" means no filter


def _filtered(stmt: Select, user_id: uuid.UUID, filters: HistoryFilters) -> Select:
    stmt = stmt.where(Workout.user_id == user_id)
    if filters.search and filters.search.strip():
        stmt = stmt.where(Workout.name.ilike(contains_pattern(filters.search.strip()), escape=LIKE_ESCAPE))
    if filters.date_from:
        stmt = stmt.where(Workout.completed_at >= filters.date_from)
    if filters.date_to:
        stmt = stmt.where(Workout.completed_at <= filters.date_to)
    if filters.workout_type and filters.workout_type != "all":
        stmt = stmt.where(Workout.type == filters.workout_type)
    if filters.muscle_group and filters.muscle_group != "all":
        trained = (
            select(WorkoutExercise.workout_id)
            .join(Exercise, Exercise.id == WorkoutExercise.exercise_id)
            .where(func.lower(Exercise.muscle_group) == filters.muscle_group.lower())
        )
        stmt = stmt.where(Workout.id.in_(trained))
    return stmt


async def load_history(
    db: AsyncSession,
    user_id: uuid.UUID,
    filters: HistoryFilters,
    limit: int,
    offset: int,
) -> tuple[list[HistoryItem], int]:
    """The user's workouts matching `filters`, newest first, plus the total number of matches."""
    total = await db.scalar(_filtered(select(func.count(Workout.id)), user_id, filters))
    result = await db.execute(
        _filtered(select(Workout), user_id, filters)
        .order_by(Workout.completed_at.desc(), Workout.id)
        .offset(offset)
        .limit(limit)
    )
    workouts = result.scalars().all()
    if not workouts:
        return [], total or 0

    workout_exercises = await fetch_workout_exercises(db, [w.id for w in workouts])
    sets = await fetch_sets(db, [we.id for we in workout_exercises])
    sets_by_entry = group_by(sets, lambda s: s.workout_exercise_id)
    exercises_by_workout = group_by(workout_exercises, lambda we: we.workout_id)

    items = []
    for w in workouts:
        entries = build_exercise_entries(exercises_by_workout.get(w.id, []), sets_by_entry)
        all_sets = [s for e in entries for s in e.workout_sets]
        items.append(
            HistoryItem(
                id=w.id,
                user_id=w.user_id,
                name=w.name,
                type=w.type,
                duration=w.duration,
                completed_at=w.completed_at,
                notes=w.notes,
                photo_url=w.photo_url,
                is_public=w.is_public,
                workout_exercises=entries,
                exercise_count=len(entries),
                total_sets=len(all_sets),
                total_weight=max((s.weight or 0 for s in all_sets), default=0),
                total_exercise_duration=sum(s.duration or 0 for s in all_sets),
            )
        )
    return items, total or 0


async def user_muscle_groups(db: AsyncSession, user_id: uuid.UUID) -> list[str]:
    """Distinct muscle groups across everything the user has logged, sorted."""
    result = await db.execute(
        select(Exercise.muscle_group)
        .join(WorkoutExercise, WorkoutExercise.exercise_id == Exercise.id)
        .join(Workout, Workout.id == WorkoutExercise.workout_id)
        .where(Workout.user_id == user_id, Exercise.muscle_group.isnot(None))
        .distinct()
    )
    return sorted(result.scalars().all())


def history_csv(items: list[HistoryItem]) -> str:
    """One row per set; exercises without sets and workouts without exercises get one row each."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for w in items:
        head = [
            w.completed_at.date().isoformat(),
            w.name or "Untitled Workout",
            w.type.value,
            round((w.duration or 0) / 60),
        ]
        if not w.workout_exercises:
            writer.writerow(head + [""] * 9 + [w.notes or ""])
            continue
        for entry in w.workout_exercises:
            exercise = [
                entry.exercises.name if entry.exercises else "",
                (entry.exercises.muscle_group or "") if entry.exercises else "",
            ]
            if not entry.workout_sets:
                writer.writerow(head + exercise + [""] * 6 + [entry.notes or "", w.notes or ""])
                continue
            for number, s in enumerate(entry.workout_sets, start=1):
                writer.writerow(
                    head
                    + exercise
                    + [
                        number,
                        s.reps,
                        s.weight or 0,
                        s.duration or 0,
                        s.rest_time or 0,
                        "Yes" if s.is_personal_record else "No",
                        entry.notes or "",
                        w.notes or "",
                    ]
                )
    return buffer.getvalue()
