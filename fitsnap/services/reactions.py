"""Reaction writes: one reaction per (workout, user), last write wins."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from fitsnap.models.community import CommunityReaction


def _dialect_insert(db: AsyncSession):
    # Local development and the test suite run on SQLite; the BaaS store is Postgres.
    if db.bind is not None and db.bind.dialect.name == "sqlite":
        return sqlite_insert
    return pg_insert


async def upsert_reaction(
    db: AsyncSession,
    workout_id: uuid.UUID,
    user_id: uuid.UUID,
    reaction_type: str,
) -> CommunityReaction:
    """
    Insert the user's reaction or replace the type of the one already there.
    A single INSERT .. ON CONFLICT statement, so concurrent calls for the same
    pair can neither leave zero rows nor duplicates.
    """
    insert = _dialect_insert(db)
    stmt = insert(CommunityReaction).values(
        id=uuid.uuid4(),
        workout_id=workout_id,
        user_id=user_id,
        reaction_type=reaction_type,
        created_at=datetime.now(timezone.utc),
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[CommunityReaction.workout_id, CommunityReaction.user_id],
        set_={
            "reaction_type": stmt.excluded.reaction_type,
            "created_at": stmt.excluded.created_at,
        },
    )
    result = await db.scalars(
        stmt.returning(CommunityReaction),
        execution_options={"populate_existing": True},
    )
    return result.one()


async def remove_reaction(db: AsyncSession, workout_id: uuid.UUID, user_id: uuid.UUID) -> int:
    """Delete the user's reaction; returns the number of rows removed (0 is fine)."""
    result = await db.execute(
        delete(CommunityReaction).where(
            CommunityReaction.workout_id == workout_id,
            CommunityReaction.user_id == user_id,
        )
    )
    return result.rowcount or 0


async def list_reactions(db: AsyncSession, workout_id: uuid.UUID) -> list[CommunityReaction]:
    result = await db.execute(
        select(CommunityReaction)
        .where(CommunityReaction.workout_id == workout_id)
        .order_by(CommunityReaction.created_at, CommunityReaction.id)
    )
    return list(result.scalars().all())
