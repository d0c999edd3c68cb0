"""PR detection: a set is a personal record when it beats the user's stored best for that exercise."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fitsnap.models.progress import PersonalRecord


def beats_record(record: PersonalRecord | None, weight: float, reps: int) -> bool:
    """Heavier wins; at equal weight, more reps wins."""
    if record is None:
        return True
    best = float(record.weight)
    return weight > best or (weight == best and reps > record.reps)


async def update_personal_record(
    db: AsyncSession,
    user_id: uuid.UUID,
    exercise_id: uuid.UUID,
    weight: float,
    reps: int,
) -> bool:
    """
    Store (weight, reps) as the user's record for the exercise when it beats the
    current one. Returns True if the set is a new personal record.
    """
    result = await db.execute(
        select(PersonalRecord).where(
            PersonalRecord.user_id == user_id,
            PersonalRecord.exercise_id == exercise_id,
        )
    )
    record = result.scalar_one_or_none()
    if not beats_record(record, weight, reps):
        return False

    now = datetime.now(timezone.utc)
    if record is None:
        db.add(PersonalRecord(user_id=user_id, exercise_id=exercise_id, weight=weight, reps=reps, achieved_at=now))
    else:
        record.weight = weight
        record.reps = reps
        record.achieved_at = now
    await db.flush()
    return True
