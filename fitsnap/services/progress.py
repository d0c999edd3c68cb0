"""Progress figures derived from a user's logged workouts."""

from __future__ import annotations

import calendar
import uuid
from datetime import date, datetime, timedelta, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fitsnap.core.constants import DEFAULT_MONTHLY_WORKOUT_TARGET, TOP_PERSONAL_RECORDS
from fitsnap.models.exercise import Exercise
from fitsnap.models.progress import UserGoals
from fitsnap.models.workout import Workout, WorkoutExercise, WorkoutSet
from fitsnap.schemas.progress import MonthlyProgress, PersonalRecordRead, WorkoutFrequency


def remaining_days_in_month(today: date) -> int:
    """Days left in the month, today included."""
    last_day = calendar.monthrange(today.year, today.month)[1]
    return last_day - today.day + 1


def month_start(year: int, month: int) -> datetime:
    return datetime(year, month, 1, tzinfo=timezone.utc)


def next_month_start(year: int, month: int) -> datetime:
    if month == 12:
        return month_start(year + 1, 1)
    return month_start(year, month + 1)


async def count_workouts(db: AsyncSession, user_id: uuid.UUID, start: datetime, end: datetime) -> int:
    """Workouts completed in [start, end)."""
    total = await db.scalar(
        select(func.count(Workout.id)).where(
            Workout.user_id == user_id,
            Workout.completed_at >= start,
            Workout.completed_at < end,
        )
    )
    return total or 0


async def monthly_progress(db: AsyncSession, user_id: uuid.UUID, now: datetime) -> MonthlyProgress:
    """This month's workout count against the goal, capped at the days left in the month."""
    stored = await db.scalar(select(UserGoals.monthly_workout_target).where(UserGoals.user_id == user_id))
    target = min(stored or DEFAULT_MONTHLY_WORKOUT_TARGET, remaining_days_in_month(now.date()))
    current = await count_workouts(
        db, user_id, month_start(now.year, now.month), next_month_start(now.year, now.month)
    )
    percentage = min(current / target * 100, 100) if target > 0 else 0
    return MonthlyProgress(current=current, target=target, percentage=percentage)


async def personal_records(
    db: AsyncSession, user_id: uuid.UUID, limit: int = TOP_PERSONAL_RECORDS
) -> list[PersonalRecordRead]:
    """
    Best weighted set per exercise across the user's history (heavier wins,
    then more reps), heaviest first.
    """
    result = await db.execute(
        select(WorkoutSet, Exercise.name, Workout.completed_at)
        .join(WorkoutExercise, WorkoutExercise.id == WorkoutSet.workout_exercise_id)
        .join(Exercise, Exercise.id == WorkoutExercise.exercise_id)
        .join(Workout, Workout.id == WorkoutExercise.workout_id)
        .where(Workout.user_id == user_id, WorkoutSet.weight > 0)
        .order_by(WorkoutSet.weight.desc(), WorkoutSet.id)
    )
    best: dict[str, PersonalRecordRead] = {}
    for s, exercise_name, completed_at in result.all():
        weight = float(s.weight)
        current = best.get(exercise_name)
        if current is None or weight > current.weight or (weight == current.weight and s.reps > current.reps):
            best[exercise_name] = PersonalRecordRead(
                id=s.id,
                exercise_name=exercise_name,
                weight=weight,
                reps=s.reps,
                achieved_at=completed_at or s.created_at,
            )
    return sorted(best.values(), key=lambda r: r.weight, reverse=True)[:limit]


async def workout_frequency(db: AsyncSession, user_id: uuid.UUID, now: datetime) -> WorkoutFrequency:
    """Workout counts for this and last week (weeks start Monday) and this and last month."""
    week_start = datetime.combine(now.date() - timedelta(days=now.weekday()), datetime.min.time(), timezone.utc)
    this_month = month_start(now.year, now.month)
    previous = this_month - timedelta(days=1)
    last_month = month_start(previous.year, previous.month)
    next_month = next_month_start(now.year, now.month)
    return WorkoutFrequency(
        this_week=await count_workouts(db, user_id, week_start, week_start + timedelta(days=7)),
        last_week=await count_workouts(db, user_id, week_start - timedelta(days=7), week_start),
        this_month=await count_workouts(db, user_id, this_month, next_month),
        last_month=await count_workouts(db, user_id, last_month, this_month),
    )


async def workout_days(db: AsyncSession, user_id: uuid.UUID, year: int, month: int) -> list[int]:
    """Distinct days of the month with at least one workout, ascending."""
    result = await db.execute(
        select(Workout.completed_at).where(
            Workout.user_id == user_id,
            Workout.completed_at >= month_start(year, month),
            Workout.completed_at < next_month_start(year, month),
        )
    )
    return sorted({completed_at.day for completed_at in result.scalars().all()})
