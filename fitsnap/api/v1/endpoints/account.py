"""Profile, settings and goals of the signed-in user."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fitsnap.core.security import get_current_user
from fitsnap.db.session import get_service_db
from fitsnap.schemas.account import (
    GoalsRead,
    GoalsUpdate,
    ProfileRead,
    ProfileUpdate,
    SettingsRead,
    SettingsUpdate,
)
from fitsnap.schemas.auth import AuthUser
from fitsnap.services import account

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/profile", response_model=ProfileRead)
async def get_profile(
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_service_db),
):
    try:
        profile = await account.get_profile(db, uuid.UUID(user.id))
    except SQLAlchemyError as e:
        logger.exception("GET /account/profile failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch profile")
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.patch("/profile", response_model=ProfileRead)
async def update_profile(
    payload: ProfileUpdate,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_service_db),
):
    try:
        return await account.update_profile(db, uuid.UUID(user.id), payload)
    except IntegrityError:
        raise HTTPException(status_code=409, detail="Username already taken")
    except SQLAlchemyError as e:
        logger.exception("PATCH /account/profile failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to update profile")


@router.get("/settings", response_model=SettingsRead)
async def get_settings(
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_service_db),
):
    try:
        return await account.get_settings_or_default(db, uuid.UUID(user.id))
    except SQLAlchemyError as e:
        logger.exception("GET /account/settings failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch settings")


@router.patch("/settings", response_model=SettingsRead)
async def update_settings(
    payload: SettingsUpdate,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_service_db),
):
    try:
        return await account.update_settings(db, uuid.UUID(user.id), payload)
    except SQLAlchemyError as e:
        logger.exception("PATCH /account/settings failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to update settings")


@router.get("/goals", response_model=GoalsRead)
async def get_goals(
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_service_db),
):
    today = datetime.now(timezone.utc).date()
    try:
        return await account.get_goals_or_default(db, uuid.UUID(user.id), today)
    except SQLAlchemyError as e:
        logger.exception("GET /account/goals failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch goals")


@router.put("/goals", response_model=GoalsRead)
async def update_goals(
    payload: GoalsUpdate,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_service_db),
):
    today = datetime.now(timezone.utc).date()
    try:
        return await account.update_goals(db, uuid.UUID(user.id), payload, today)
    except SQLAlchemyError as e:
        logger.exception("PUT /account/goals failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to update goals")
