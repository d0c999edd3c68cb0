"""Community feed and workout sharing."""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fitsnap.core.constants import COMMUNITY_FEED_DEFAULT_LIMIT, COMMUNITY_FEED_MAX_LIMIT
from fitsnap.core.security import get_current_user
from fitsnap.db.session import get_service_db
from fitsnap.models.workout import Workout
from fitsnap.schemas.auth import AuthUser
from fitsnap.schemas.community import CommunityWorkoutRead, VisibilityUpdate
from fitsnap.schemas.workout import WorkoutRead
from fitsnap.services.community import load_community_feed

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/workouts", response_model=list[CommunityWorkoutRead])
async def community_feed(
    limit: int = Query(COMMUNITY_FEED_DEFAULT_LIMIT, ge=1, le=COMMUNITY_FEED_MAX_LIMIT),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_service_db),
):
    """Public workouts, newest first."""
    try:
        return await load_community_feed(db, limit, offset)
    except SQLAlchemyError as e:
        logger.exception("GET /community/workouts failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch community workouts")


@router.patch("/workouts/{workout_id}/visibility", response_model=WorkoutRead)
async def set_workout_visibility(
    workout_id: uuid.UUID,
    payload: VisibilityUpdate,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_service_db),
):
    """Share or unshare one of the caller's workouts."""
    try:
        result = await db.execute(select(Workout).where(Workout.id == workout_id))
        workout = result.scalar_one_or_none()
        if not workout:
            raise HTTPException(status_code=404, detail="Workout not found")
        # The service credential skips row-level security, so ownership is checked here.
        if str(workout.user_id) != user.id:
            raise HTTPException(status_code=403, detail="Only the owner can change sharing")
        workout.is_public = payload.is_public
        await db.flush()
        await db.refresh(workout)
    except SQLAlchemyError as e:
        logger.exception("PATCH /community/workouts/%s/visibility failed: %s", workout_id, e)
        raise HTTPException(status_code=500, detail="Failed to update workout visibility")
    return workout
