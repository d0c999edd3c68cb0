"""Progress endpoints: monthly goal, personal records, frequency and calendar."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fitsnap.core.constants import TOP_PERSONAL_RECORDS
from fitsnap.core.security import get_current_user
from fitsnap.db.session import get_service_db
from fitsnap.schemas.auth import AuthUser
from fitsnap.schemas.progress import MonthlyProgress, PersonalRecordRead, WorkoutCalendar, WorkoutFrequency
from fitsnap.services import progress

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/monthly", response_model=MonthlyProgress)
async def get_monthly_progress(
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_service_db),
):
    try:
        return await progress.monthly_progress(db, uuid.UUID(user.id), datetime.now(timezone.utc))
    except SQLAlchemyError as e:
        logger.exception("GET /progress/monthly failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch monthly progress")


@router.get("/personal-records", response_model=list[PersonalRecordRead])
async def get_personal_records(
    limit: int = Query(TOP_PERSONAL_RECORDS, ge=1, le=50),
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_service_db),
):
    """Best set per exercise, heaviest first. Empty when nothing weighted was logged."""
    try:
        return await progress.personal_records(db, uuid.UUID(user.id), limit)
    except SQLAlchemyError as e:
        logger.exception("GET /progress/personal-records failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch personal records")


@router.get("/frequency", response_model=WorkoutFrequency)
async def get_frequency(
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_service_db),
):
    try:
        return await progress.workout_frequency(db, uuid.UUID(user.id), datetime.now(timezone.utc))
    except SQLAlchemyError as e:
        logger.exception("GET /progress/frequency failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch workout frequency")


@router.get("/calendar", response_model=WorkoutCalendar)
async def get_calendar(
    year: int = Query(..., ge=1970, le=9999),
    month: int = Query(..., ge=1, le=12),
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_service_db),
):
    """Days of the given month with at least one workout."""
    try:
        days = await progress.workout_days(db, uuid.UUID(user.id), year, month)
    except SQLAlchemyError as e:
        logger.exception("GET /progress/calendar failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch workout calendar")
    return WorkoutCalendar(year=year, month=month, days=days)
