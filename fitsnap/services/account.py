"""Profile, settings and goals of a user. Reads fall back to defaults when no row exists."""

from __future__ import annotations

import logging
import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fitsnap.core.constants import DEFAULT_MONTHLY_WORKOUT_TARGET
from fitsnap.models.profile import Profile
from fitsnap.models.progress import UserGoals, UserSettings
from fitsnap.schemas.account import GoalsRead, GoalsUpdate, ProfileUpdate, SettingsRead, SettingsUpdate
from fitsnap.services.progress import remaining_days_in_month

logger = logging.getLogger(__name__)


async def get_profile(db: AsyncSession, user_id: uuid.UUID) -> Profile | None:
    return await db.get(Profile, user_id)


async def update_profile(db: AsyncSession, user_id: uuid.UUID, payload: ProfileUpdate) -> Profile:
    """Apply the fields that were sent; creates the profile row on first save."""
    profile = await db.get(Profile, user_id)
    if profile is None:
        profile = Profile(id=user_id)
        db.add(profile)
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(profile, key, value)
    await db.flush()
    await db.refresh(profile)
    return profile


async def get_settings_or_default(db: AsyncSession, user_id: uuid.UUID) -> SettingsRead:
    result = await db.execute(select(UserSettings).where(UserSettings.user_id == user_id))
    row = result.scalar_one_or_none()
    if row is None:
        return SettingsRead(user_id=user_id)
    return SettingsRead.model_validate(row)


async def update_settings(db: AsyncSession, user_id: uuid.UUID, payload: SettingsUpdate) -> SettingsRead:
    result = await db.execute(select(UserSettings).where(UserSettings.user_id == user_id))
    row = result.scalar_one_or_none()
    if row is None:
        row = UserSettings(user_id=user_id)
        db.add(row)
    for key, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(row, key, value)
    await db.flush()
    await db.refresh(row)
    logger.info("Settings saved for %s", user_id)
    return SettingsRead.model_validate(row)


async def get_goals_or_default(db: AsyncSession, user_id: uuid.UUID, today: date) -> GoalsRead:
    """Stored goals, or the default monthly target capped at the days left in the month."""
    result = await db.execute(select(UserGoals).where(UserGoals.user_id == user_id))
    row = result.scalar_one_or_none()
    if row is None:
        target = min(DEFAULT_MONTHLY_WORKOUT_TARGET, remaining_days_in_month(today))
        return GoalsRead(user_id=user_id, monthly_workout_target=target)
    return GoalsRead.model_validate(row)


async def update_goals(db: AsyncSession, user_id: uuid.UUID, payload: GoalsUpdate, today: date) -> GoalsRead:
    """
    Existing goals take the new target as sent. A first save is capped at the
    days left in the month so a fresh goal is reachable.
    """
    result = await db.execute(select(UserGoals).where(UserGoals.user_id == user_id))
    row = result.scalar_one_or_none()
    if row is None:
        target = min(payload.monthly_workout_target, remaining_days_in_month(today))
        row = UserGoals(user_id=user_id, monthly_workout_target=target)
        db.add(row)
    else:
        row.monthly_workout_target = payload.monthly_workout_target
    await db.flush()
    await db.refresh(row)
    logger.info("Goals saved for %s: %d workouts/month", user_id, row.monthly_workout_target)
    return GoalsRead.model_validate(row)
