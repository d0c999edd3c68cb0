"""Community assembly: fan-out queries for workouts, joined in memory.

Every loader fetches all related rows unconditionally (no partial results) and
groups them by id before building the response models.
"""

from __future__ import annotations

import uuid
from collections import defaultdict
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from typing import TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fitsnap.core.constants import ANONYMOUS_USERNAME
from fitsnap.models.community import CommunityComment, CommunityReaction
from fitsnap.models.profile import Profile
from fitsnap.models.workout import Workout, WorkoutExercise, WorkoutSet
from fitsnap.schemas.community import (
    CommentRead,
    CommunityWorkoutRead,
    FeedCounts,
    FeedProfile,
    ProfileSummary,
    ReactionRead,
)
from fitsnap.schemas.workout import (
    ExerciseSummary,
    WorkoutDetail,
    WorkoutExerciseRead,
    WorkoutSetRead,
)

T = TypeVar("T")


def group_by(rows: Iterable[T], key: Callable[[T], uuid.UUID]) -> dict[uuid.UUID, list[T]]:
    """Group rows by key, keeping the incoming order inside each group."""
    grouped: dict[uuid.UUID, list[T]] = defaultdict(list)
    for row in rows:
        grouped[key(row)].append(row)
    return grouped


async def fetch_profiles(db: AsyncSession, user_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, Profile]:
    ids = set(user_ids)
    if not ids:
        return {}
    result = await db.execute(select(Profile).where(Profile.id.in_(ids)))
    return {p.id: p for p in result.scalars().all()}


async def fetch_workout_exercises(db: AsyncSession, workout_ids: list[uuid.UUID]) -> list[WorkoutExercise]:
    if not workout_ids:
        return []
    result = await db.execute(
        select(WorkoutExercise)
        .where(WorkoutExercise.workout_id.in_(workout_ids))
        .options(selectinload(WorkoutExercise.exercise))
        .order_by(WorkoutExercise.order_index, WorkoutExercise.id)
    )
    return list(result.scalars().all())


async def fetch_sets(db: AsyncSession, workout_exercise_ids: list[uuid.UUID]) -> list[WorkoutSet]:
    if not workout_exercise_ids:
        return []
    result = await db.execute(
        select(WorkoutSet)
        .where(WorkoutSet.workout_exercise_id.in_(workout_exercise_ids))
        .order_by(WorkoutSet.created_at, WorkoutSet.id)
    )
    return list(result.scalars().all())


def build_exercise_entries(
    workout_exercises: list[WorkoutExercise],
    sets_by_entry: dict[uuid.UUID, list[WorkoutSet]],
) -> list[WorkoutExerciseRead]:
    return [
        WorkoutExerciseRead(
            id=we.id,
            exercise_id=we.exercise_id,
            order_index=we.order_index,
            notes=we.notes,
            exercises=ExerciseSummary.model_validate(we.exercise) if we.exercise else None,
            workout_sets=[WorkoutSetRead.model_validate(s) for s in sets_by_entry.get(we.id, [])],
        )
        for we in workout_exercises
    ]


# ── comments ─────────────────────────────────────────────────────────────


def comment_with_profile(comment: CommunityComment, profile: Profile | None) -> CommentRead:
    return CommentRead(
        id=comment.id,
        workout_id=comment.workout_id,
        user_id=comment.user_id,
        content=comment.content,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
        profiles=ProfileSummary.model_validate(profile) if profile else None,
    )


async def load_comments(db: AsyncSession, workout_id: uuid.UUID) -> list[CommentRead]:
    """Comments on a workout, oldest first, each with the poster's profile summary."""
    result = await db.execute(
        select(CommunityComment)
        .where(CommunityComment.workout_id == workout_id)
        .order_by(CommunityComment.created_at.asc(), CommunityComment.id)
    )
    comments = result.scalars().all()
    profiles = await fetch_profiles(db, (c.user_id for c in comments))
    return [comment_with_profile(c, profiles.get(c.user_id)) for c in comments]


# ── workout detail ───────────────────────────────────────────────────────


async def load_public_workout_detail(db: AsyncSession, workout_id: uuid.UUID) -> WorkoutDetail | None:
    """
    Exercises (ordered by order_index) with nested sets for a public workout.
    Returns None when the workout does not exist or is not public, before any
    exercise or set is read.
    """
    result = await db.execute(
        select(Workout.id).where(Workout.id == workout_id, Workout.is_public.is_(True))
    )
    if result.scalar_one_or_none() is None:
        return None

    workout_exercises = await fetch_workout_exercises(db, [workout_id])
    if not workout_exercises:
        return WorkoutDetail(exercises=[], total_sets=0)

    sets = await fetch_sets(db, [we.id for we in workout_exercises])
    sets_by_entry = group_by(sets, lambda s: s.workout_exercise_id)
    return WorkoutDetail(
        exercises=build_exercise_entries(workout_exercises, sets_by_entry),
        total_sets=len(sets),
    )


# ── feed ─────────────────────────────────────────────────────────────────


async def load_community_feed(db: AsyncSession, limit: int, offset: int) -> list[CommunityWorkoutRead]:
    """Public workouts, newest first, with profile, exercises, reactions and counts."""
    result = await db.execute(
        select(Workout)
        .where(Workout.is_public.is_(True))
        .order_by(Workout.completed_at.desc(), Workout.id)
        .offset(offset)
        .limit(limit)
    )
    workouts = result.scalars().all()
    if not workouts:
        return []
    workout_ids = [w.id for w in workouts]

    profiles = await fetch_profiles(db, (w.user_id for w in workouts))
    workout_exercises = await fetch_workout_exercises(db, workout_ids)
    sets = await fetch_sets(db, [we.id for we in workout_exercises])
    sets_by_entry = group_by(sets, lambda s: s.workout_exercise_id)
    exercises_by_workout = group_by(workout_exercises, lambda we: we.workout_id)

    result = await db.execute(
        select(CommunityReaction)
        .where(CommunityReaction.workout_id.in_(workout_ids))
        .order_by(CommunityReaction.created_at)
    )
    reactions_by_workout = group_by(result.scalars().all(), lambda r: r.workout_id)

    result = await db.execute(
        select(CommunityComment.workout_id, func.count(CommunityComment.id))
        .where(CommunityComment.workout_id.in_(workout_ids))
        .group_by(CommunityComment.workout_id)
    )
    comment_counts = {workout_id: count for workout_id, count in result.all()}

    feed = []
    for w in workouts:
        profile = profiles.get(w.user_id)
        reactions = reactions_by_workout.get(w.id, [])
        feed.append(
            CommunityWorkoutRead(
                id=w.id,
                user_id=w.user_id,
                name=w.name,
                type=w.type,
                duration=w.duration,
                completed_at=w.completed_at,
                notes=w.notes,
                photo_url=w.photo_url,
                is_public=w.is_public,
                profiles=FeedProfile.model_validate(profile) if profile else FeedProfile(username=ANONYMOUS_USERNAME),
                workout_exercises=build_exercise_entries(exercises_by_workout.get(w.id, []), sets_by_entry),
                community_reactions=[ReactionRead.model_validate(r) for r in reactions],
                counts=FeedCounts(
                    community_reactions=len(reactions),
                    community_comments=comment_counts.get(w.id, 0),
                ),
            )
        )
    return feed


# ── presentation helpers ─────────────────────────────────────────────────


def generate_exercise_summary(entries: list[WorkoutExerciseRead]) -> str:
    """Short text for a feed card, e.g. "Squat, Bench Press and 2 more"."""
    if not entries:
        return "No exercises logged"
    names = [e.exercises.name for e in entries if e.exercises and e.exercises.name]
    if not names:
        return "Workout completed"
    if len(names) <= 2:
        return ", ".join(names)
    return f"{', '.join(names[:2])} and {len(names) - 2} more"


def calculate_workout_volume(entries: list[WorkoutExerciseRead]) -> float:
    """Total reps x weight over every set; sets without weight count as zero."""
    return sum(
        s.reps * (s.weight or 0)
        for e in entries
        for s in e.workout_sets
    )


def format_relative_time(when: datetime, now: datetime | None = None) -> str:
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    seconds = int((now - when).total_seconds())
    if seconds < 60:
        return "Just now"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    if seconds < 604800:
        return f"{seconds // 86400}d ago"
    return f"{when.month}/{when.day}/{when.year}"
