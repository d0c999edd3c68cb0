"""Community reactions: add (replace), remove, list."""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fitsnap.db.session import get_service_db
from fitsnap.schemas.community import (
    ReactionAdded,
    ReactionCreate,
    ReactionDelete,
    ReactionList,
    ReactionRead,
    ReactionRemoved,
)
from fitsnap.services.reactions import list_reactions, remove_reaction, upsert_reaction

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/add", response_model=ReactionAdded)
async def add_reaction(
    payload: ReactionCreate,
    db: AsyncSession = Depends(get_service_db),
):
    """Set the user's reaction on a workout. Repeating the call replaces the reaction type."""
    if not payload.workout_id or not payload.user_id:
        raise HTTPException(status_code=400, detail="Workout ID and User ID are required")
    try:
        reaction = await upsert_reaction(db, payload.workout_id, payload.user_id, payload.reaction_type)
    except SQLAlchemyError as e:
        logger.exception("POST /community-reactions/add failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to add reaction")
    logger.info(
        "Reaction %s set on workout %s by %s", reaction.reaction_type, payload.workout_id, payload.user_id
    )
    return ReactionAdded(reaction=ReactionRead.model_validate(reaction))


@router.post("/remove", response_model=ReactionRemoved)
async def delete_reaction(
    payload: ReactionDelete,
    db: AsyncSession = Depends(get_service_db),
):
    """Remove the user's reaction. Removing a reaction that does not exist is not an error."""
    if not payload.workout_id or not payload.user_id:
        raise HTTPException(status_code=400, detail="Workout ID and User ID are required")
    try:
        removed = await remove_reaction(db, payload.workout_id, payload.user_id)
    except SQLAlchemyError as e:
        logger.exception("POST /community-reactions/remove failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to remove reaction")
    logger.info("Removed %d reaction(s) on workout %s by %s", removed, payload.workout_id, payload.user_id)
    return ReactionRemoved()


@router.get("/{workout_id}", response_model=ReactionList)
async def get_reactions(
    workout_id: uuid.UUID,
    db: AsyncSession = Depends(get_service_db),
):
    try:
        reactions = await list_reactions(db, workout_id)
    except SQLAlchemyError as e:
        logger.exception("GET /community-reactions/%s failed: %s", workout_id, e)
        raise HTTPException(status_code=500, detail="Failed to fetch reactions")
    return ReactionList(reactions=[ReactionRead.model_validate(r) for r in reactions])
