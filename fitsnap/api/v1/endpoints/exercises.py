"""Exercise catalog: public reads, admin-only writes."""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fitsnap.core.constants import EXERCISE_SEARCH_LIMIT
from fitsnap.core.security import require_admin
from fitsnap.db.filters import LIKE_ESCAPE, contains_pattern
from fitsnap.db.session import get_service_db
from fitsnap.models.exercise import Exercise
from fitsnap.schemas.exercise import ExerciseCreate, ExerciseOptions, ExerciseRead, ExerciseUpdate

router = APIRouter()


@router.get("", response_model=list[ExerciseRead])
async def list_exercises(
    db: AsyncSession = Depends(get_service_db),
    category: str | None = None,
    muscle_group: str | None = None,
    q: str | None = None,
):
    """List exercises by name, optionally filtered by category, muscle group and name."""
    stmt = select(Exercise)
    if category:
        stmt = stmt.where(Exercise.category == category)
    if muscle_group:
        stmt = stmt.where(Exercise.muscle_group == muscle_group)
    if q and q.strip():
        stmt = stmt.where(Exercise.name.ilike(contains_pattern(q.strip()), escape=LIKE_ESCAPE))
    result = await db.execute(stmt.order_by(Exercise.name))
    return list(result.scalars().all())


@router.get("/search", response_model=list[ExerciseRead])
async def search_exercises(
    q: str = "",
    db: AsyncSession = Depends(get_service_db),
):
    """Case-insensitive name search (first 10 by name). A blank query returns nothing."""
    if not q.strip():
        return []
    result = await db.execute(
        select(Exercise)
        .where(Exercise.name.ilike(contains_pattern(q.strip()), escape=LIKE_ESCAPE))
        .order_by(Exercise.name)
        .limit(EXERCISE_SEARCH_LIMIT)
    )
    return list(result.scalars().all())


@router.get("/options", response_model=ExerciseOptions)
async def exercise_options(db: AsyncSession = Depends(get_service_db)):
    """Distinct categories and muscle groups for the catalog filters."""
    result = await db.execute(select(Exercise.category, Exercise.muscle_group))
    rows = result.all()
    return ExerciseOptions(
        categories=sorted({r.category for r in rows if r.category}),
        muscle_groups=sorted({r.muscle_group for r in rows if r.muscle_group}),
    )


@router.get("/{exercise_id}", response_model=ExerciseRead)
async def get_exercise(
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_service_db),
):
    result = await db.execute(select(Exercise).where(Exercise.id == exercise_id))
    exercise = result.scalar_one_or_none()
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise


@router.post("", response_model=ExerciseRead, status_code=201, dependencies=[Depends(require_admin)])
async def create_exercise(
    payload: ExerciseCreate,
    db: AsyncSession = Depends(get_service_db),
):
    """Add an exercise to the catalog (admin)."""
    exercise = Exercise(**payload.model_dump())
    db.add(exercise)
    await db.flush()
    await db.refresh(exercise)
    return exercise


@router.patch("/{exercise_id}", response_model=ExerciseRead, dependencies=[Depends(require_admin)])
async def update_exercise(
    exercise_id: uuid.UUID,
    payload: ExerciseUpdate,
    db: AsyncSession = Depends(get_service_db),
):
    """Update an exercise (partial, admin)."""
    result = await db.execute(select(Exercise).where(Exercise.id == exercise_id))
    exercise = result.scalar_one_or_none()
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    for k, v in payload.model_dump(exclude_unset=True).items():
        setattr(exercise, k, v)
    await db.flush()
    await db.refresh(exercise)
    return exercise


@router.delete("/{exercise_id}", status_code=204, dependencies=[Depends(require_admin)])
async def delete_exercise(
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_service_db),
):
    """Delete an exercise (admin)."""
    result = await db.execute(select(Exercise).where(Exercise.id == exercise_id))
    exercise = result.scalar_one_or_none()
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    await db.delete(exercise)
    return None
