"""Workout logging: save a finished workout with its exercises and sets, load and delete it."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from fitsnap.models.community import CommunityComment, CommunityReaction
from fitsnap.models.workout import Workout, WorkoutExercise, WorkoutSet
from fitsnap.schemas.workout import WorkoutCreate, WorkoutWithExercises
from fitsnap.services.community import build_exercise_entries, fetch_sets, fetch_workout_exercises, group_by
from fitsnap.services.pr_detection import update_personal_record

logger = logging.getLogger(__name__)


async def save_workout(db: AsyncSession, user_id: uuid.UUID, payload: WorkoutCreate) -> tuple[Workout, int]:
    """
    Insert the workout, one workout_exercise per entry (order_index = position)
    and its sets. Sets with neither reps nor a timed duration are dropped; weighted sets are checked
    against the user's personal records and flagged when they beat them.
    Returns the workout and the number of sets flagged as records.
    """
    now = datetime.now(timezone.utc)
    workout = Workout(
        user_id=user_id,
        name=payload.name,
        type=payload.type.value,
        notes=payload.notes,
        photo_url=payload.photo_url,
        duration=payload.duration or 0,
        is_public=payload.is_public,
        completed_at=payload.completed_at or now,
    )
    db.add(workout)
    await db.flush()

    records = 0
    logged = 0
    for index, entry in enumerate(payload.exercises):
        workout_exercise = WorkoutExercise(
            workout_id=workout.id,
            exercise_id=entry.exercise_id,
            order_index=index,
            notes=entry.notes,
        )
        db.add(workout_exercise)
        await db.flush()

        for s in entry.sets:
            if s.reps <= 0 and not s.duration:
                continue
            weight = s.weight or 0
            is_record = False
            if weight > 0:
                is_record = await update_personal_record(db, user_id, entry.exercise_id, weight, s.reps)
            db.add(
                WorkoutSet(
                    workout_exercise_id=workout_exercise.id,
                    reps=s.reps,
                    weight=weight,
                    duration=s.duration,
                    rest_time=s.rest_time,
                    is_personal_record=is_record,
                    # sets are read back in created_at order
                    created_at=now + timedelta(microseconds=logged),
                )
            )
            records += int(is_record)
            logged += 1
    await db.flush()
    await db.refresh(workout)
    logger.info("Saved workout %s for %s (%d PRs)", workout.id, user_id, records)
    return workout, records


async def get_user_workout(db: AsyncSession, user_id: uuid.UUID, workout_id: uuid.UUID) -> Workout | None:
    result = await db.execute(select(Workout).where(Workout.id == workout_id, Workout.user_id == user_id))
    return result.scalar_one_or_none()


async def load_workout_with_exercises(db: AsyncSession, workout: Workout) -> WorkoutWithExercises:
    workout_exercises = await fetch_workout_exercises(db, [workout.id])
    sets = await fetch_sets(db, [we.id for we in workout_exercises])
    entries = build_exercise_entries(workout_exercises, group_by(sets, lambda s: s.workout_exercise_id))
    return WorkoutWithExercises(
        id=workout.id,
        user_id=workout.user_id,
        name=workout.name,
        type=workout.type,
        duration=workout.duration,
        completed_at=workout.completed_at,
        notes=workout.notes,
        photo_url=workout.photo_url,
        is_public=workout.is_public,
        workout_exercises=entries,
    )


async def delete_workout(db: AsyncSession, workout: Workout) -> None:
    """Delete the workout with its sets, exercises, reactions and comments, children first."""
    entry_ids = select(WorkoutExercise.id).where(WorkoutExercise.workout_id == workout.id)
    await db.execute(delete(WorkoutSet).where(WorkoutSet.workout_exercise_id.in_(entry_ids)))
    await db.execute(delete(WorkoutExercise).where(WorkoutExercise.workout_id == workout.id))
    await db.execute(delete(CommunityReaction).where(CommunityReaction.workout_id == workout.id))
    await db.execute(delete(CommunityComment).where(CommunityComment.workout_id == workout.id))
    await db.execute(delete(Workout).where(Workout.id == workout.id))
