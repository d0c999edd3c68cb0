"""Seed the exercise catalog with a starter set (skips names that already exist)."""

import asyncio
import os
import sys

# Add parent directory to path so we can import fitsnap modules
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from sqlalchemy import select

from fitsnap.db.session import service_engine, service_session_maker
from fitsnap.models.exercise import Exercise

STARTER_EXERCISES = [
    {"name": "Bench Press", "category": "Strength", "muscle_group": "Chest", "equipment": "Barbell"},
    {"name": "Goblet Squat", "category": "Strength", "muscle_group": "Legs", "equipment": "Dumbbell"},
    {"name": "Barbell Row", "category": "Strength", "muscle_group": "Back", "equipment": "Barbell"},
    {"name": "Pull-Up", "category": "Strength", "muscle_group": "Back", "equipment": "Bodyweight"},
    {"name": "Dumbbell Curl", "category": "Strength", "muscle_group": "Arms", "equipment": "Dumbbell"},
    {"name": "Plank", "category": "Strength", "muscle_group": "Core", "equipment": "Bodyweight"},
]


async def seed() -> None:
    async with service_session_maker() as session:
        result = await session.execute(select(Exercise.name))
        existing = {name.lower() for name in result.scalars().all()}
        added = 0
        for data in STARTER_EXERCISES:
            if data["name"].lower() in existing:
                continue
            session.add(Exercise(**data))
            added += 1
        await session.commit()
    print(f"Seeded {added} exercise(s), {len(STARTER_EXERCISES) - added} already present.")
    await service_engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
