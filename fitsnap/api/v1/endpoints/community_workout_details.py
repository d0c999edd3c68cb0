"""Public workout detail: exercises with nested sets, only for public workouts."""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fitsnap.db.session import get_service_db
from fitsnap.schemas.workout import WorkoutDetail
from fitsnap.services.community import load_public_workout_detail

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/{workout_id}", response_model=WorkoutDetail)
async def get_workout_details(
    workout_id: uuid.UUID,
    db: AsyncSession = Depends(get_service_db),
):
    try:
        detail = await load_public_workout_detail(db, workout_id)
    except SQLAlchemyError as e:
        logger.exception("GET /community-workout-details/%s failed: %s", workout_id, e)
        raise HTTPException(status_code=500, detail="Failed to fetch workout details")
    if detail is None:
        raise HTTPException(status_code=404, detail="Workout not found or not public")
    logger.info(
        "Fetched %d exercises with %d total sets for workout %s",
        len(detail.exercises),
        detail.total_sets,
        workout_id,
    )
    return detail
