"""Workout history of the signed-in user: filtered listing, muscle groups, CSV export."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fitsnap.core.constants import HISTORY_DEFAULT_LIMIT, HISTORY_EXPORT_LIMIT, HISTORY_MAX_LIMIT
from fitsnap.core.security import get_current_user
from fitsnap.db.session import get_service_db
from fitsnap.schemas.auth import AuthUser
from fitsnap.schemas.history import HistoryPage
from fitsnap.services.history import HistoryFilters, history_csv, load_history, user_muscle_groups

logger = logging.getLogger(__name__)
router = APIRouter()


def history_filters(
    search: str | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    muscle_group: str | None = None,
    workout_type: str | None = Query(None, alias="type"),
) -> HistoryFilters:
    return HistoryFilters(
        search=search,
        date_from=date_from,
        date_to=date_to,
        muscle_group=muscle_group,
        workout_type=workout_type,
    )


@router.get("", response_model=HistoryPage)
async def list_history(
    filters: HistoryFilters = Depends(history_filters),
    limit: int = Query(HISTORY_DEFAULT_LIMIT, ge=1, le=HISTORY_MAX_LIMIT),
    offset: int = Query(0, ge=0),
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_service_db),
):
    """Newest first; `total` counts every workout matching the filters."""
    try:
        items, total = await load_history(db, uuid.UUID(user.id), filters, limit, offset)
    except SQLAlchemyError as e:
        logger.exception("GET /history failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch workout history")
    return HistoryPage(workouts=items, total=total)


@router.get("/muscle-groups", response_model=list[str])
async def list_muscle_groups(
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_service_db),
):
    try:
        return await user_muscle_groups(db, uuid.UUID(user.id))
    except SQLAlchemyError as e:
        logger.exception("GET /history/muscle-groups failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch muscle groups")


@router.get("/export")
async def export_history(
    filters: HistoryFilters = Depends(history_filters),
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_service_db),
):
    """The filtered history as CSV, one row per set."""
    try:
        items, _ = await load_history(db, uuid.UUID(user.id), filters, HISTORY_EXPORT_LIMIT, 0)
    except SQLAlchemyError as e:
        logger.exception("GET /history/export failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to export workout history")
    filename = f"workout-history-{datetime.now(timezone.utc).date().isoformat()}.csv"
    logger.info("Exported %d workouts for %s", len(items), user.id)
    return Response(
        content=history_csv(items),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
