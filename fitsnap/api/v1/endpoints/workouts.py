"""Workout logging endpoints for the signed-in user: save, read, edit, delete."""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fitsnap.core.security import get_current_user
from fitsnap.db.session import get_service_db
from fitsnap.models.exercise import Exercise
from fitsnap.schemas.auth import AuthUser
from fitsnap.schemas.workout import WorkoutCreate, WorkoutRead, WorkoutSaved, WorkoutUpdate, WorkoutWithExercises
from fitsnap.services.account import get_settings_or_default
from fitsnap.services.workouts import (
    delete_workout,
    get_user_workout,
    load_workout_with_exercises,
    save_workout,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=WorkoutSaved, status_code=201)
async def create_workout(
    payload: WorkoutCreate,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_service_db),
):
    """Save a finished workout. Weighted sets that beat the user's best are flagged as personal records."""
    user_id = uuid.UUID(user.id)
    exercise_ids = {e.exercise_id for e in payload.exercises}
    try:
        if exercise_ids:
            result = await db.execute(select(Exercise.id).where(Exercise.id.in_(exercise_ids)))
            missing = exercise_ids - set(result.scalars().all())
            if missing:
                raise HTTPException(status_code=400, detail="Unknown exercise")
        workout, records = await save_workout(db, user_id, payload)
    except SQLAlchemyError as e:
        logger.exception("POST /workouts failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to save workout")
    return WorkoutSaved(workout_id=workout.id, personal_records=records)


@router.get("/rest-time")
async def get_rest_time(
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_service_db),
):
    """Default rest between sets from the user's settings, in seconds."""
    try:
        settings = await get_settings_or_default(db, uuid.UUID(user.id))
    except SQLAlchemyError as e:
        logger.exception("GET /workouts/rest-time failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch rest time")
    return {"default_rest_seconds": settings.default_rest_seconds}


@router.get("/{workout_id}", response_model=WorkoutWithExercises)
async def get_workout(
    workout_id: uuid.UUID,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_service_db),
):
    """One of the user's workouts with exercises and sets."""
    try:
        workout = await get_user_workout(db, uuid.UUID(user.id), workout_id)
        if workout is None:
            raise HTTPException(status_code=404, detail="Workout not found")
        return await load_workout_with_exercises(db, workout)
    except SQLAlchemyError as e:
        logger.exception("GET /workouts/%s failed: %s", workout_id, e)
        raise HTTPException(status_code=500, detail="Failed to fetch workout")


@router.patch("/{workout_id}", response_model=WorkoutRead)
async def update_workout(
    workout_id: uuid.UUID,
    payload: WorkoutUpdate,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_service_db),
):
    """Edit name, type, notes, photo, duration or visibility. Exercises and sets are not editable here."""
    try:
        workout = await get_user_workout(db, uuid.UUID(user.id), workout_id)
        if workout is None:
            raise HTTPException(status_code=404, detail="Workout not found")
        data = payload.model_dump(exclude_unset=True)
        if data.get("name") is None:
            data.pop("name", None)
        if "type" in data:
            if data["type"] is None:
                data.pop("type")
            else:
                data["type"] = data["type"].value
        if data.get("is_public") is None:
            data.pop("is_public", None)
        for k, v in data.items():
            setattr(workout, k, v)
        await db.flush()
        await db.refresh(workout)
    except SQLAlchemyError as e:
        logger.exception("PATCH /workouts/%s failed: %s", workout_id, e)
        raise HTTPException(status_code=500, detail="Failed to update workout")
    return WorkoutRead.model_validate(workout)


@router.delete("/{workout_id}", status_code=204)
async def remove_workout(
    workout_id: uuid.UUID,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_service_db),
):
    """Delete a workout with its exercises, sets, reactions and comments."""
    try:
        workout = await get_user_workout(db, uuid.UUID(user.id), workout_id)
        if workout is None:
            raise HTTPException(status_code=404, detail="Workout not found")
        await delete_workout(db, workout)
    except SQLAlchemyError as e:
        logger.exception("DELETE /workouts/%s failed: %s", workout_id, e)
        raise HTTPException(status_code=500, detail="Failed to delete workout")
    logger.info("Deleted workout %s", workout_id)
    return Response(status_code=204)
