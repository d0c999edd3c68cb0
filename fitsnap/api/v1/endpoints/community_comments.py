"""Community comments: list per workout (oldest first) and add."""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fitsnap.db.session import get_service_db
from fitsnap.models.community import CommunityComment
from fitsnap.schemas.community import CommentCreate, CommentCreated, CommentList
from fitsnap.services.community import comment_with_profile, fetch_profiles, load_comments

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/{workout_id}", response_model=CommentList)
async def list_comments(
    workout_id: uuid.UUID,
    db: AsyncSession = Depends(get_service_db),
):
    """Comments on a workout in ascending creation order, each with the poster's profile."""
    try:
        comments = await load_comments(db, workout_id)
    except SQLAlchemyError as e:
        logger.exception("GET /community-comments/%s failed: %s", workout_id, e)
        raise HTTPException(status_code=500, detail="Failed to fetch comments")
    logger.info("Fetched %d comments for workout %s", len(comments), workout_id)
    return CommentList(comments=comments)


@router.post("/add", response_model=CommentCreated)
async def add_comment(
    payload: CommentCreate,
    db: AsyncSession = Depends(get_service_db),
):
    """Add a comment; workoutId, content and userId are all required."""
    content = (payload.content or "").strip()
    if not payload.workout_id or not content or not payload.user_id:
        raise HTTPException(status_code=400, detail="Workout ID, content, and User ID are required")

    try:
        comment = CommunityComment(
            workout_id=payload.workout_id,
            user_id=payload.user_id,
            content=content,
        )
        db.add(comment)
        await db.flush()
        await db.refresh(comment)
        profiles = await fetch_profiles(db, [comment.user_id])
    except SQLAlchemyError as e:
        logger.exception("POST /community-comments/add failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to add comment")
    logger.info("Comment %s added to workout %s", comment.id, comment.workout_id)
    return CommentCreated(comment=comment_with_profile(comment, profiles.get(comment.user_id)))
