import uuid

import pytest

from fitsnap.models import Workout

pytestmark = pytest.mark.asyncio


async def test_public_workout_details(client, seeded):
    response = await client.get(f"/api/community-workout-details/{seeded['public'].id}")

    assert response.status_code == 200
    body = response.json()
    assert body["totalSets"] == 3
    exercises = body["exercises"]
    assert [e["order_index"] for e in exercises] == [0, 1]
    assert [e["exercises"]["name"] for e in exercises] == ["Bench Press", "Goblet Squat"]
    # sets come back oldest first within their exercise
    assert [s["reps"] for s in exercises[0]["workout_sets"]] == [10, 8]
    assert [s["weight"] for s in exercises[0]["workout_sets"]] == [50.0, 60.0]
    assert len(exercises[1]["workout_sets"]) == 1
    assert all(s["workout_exercise_id"] == exercises[0]["id"] for s in exercises[0]["workout_sets"])


async def test_private_workout_is_not_found(client, seeded):
    response = await client.get(f"/api/community-workout-details/{seeded['private'].id}")

    assert response.status_code == 404
    body = response.json()
    assert body == {"detail": "Workout not found or not public"}
    assert "exercises" not in body


async def test_missing_workout_is_not_found(client):
    response = await client.get(f"/api/community-workout-details/{uuid.uuid4()}")

    assert response.status_code == 404


async def test_public_workout_without_exercises(client, seeded):
    response = await client.get(f"/api/community-workout-details/{seeded['public_newer'].id}")

    assert response.status_code == 200
    assert response.json() == {"exercises": [], "totalSets": 0}


async def test_unshared_workout_disappears(client, seeded, session_maker):
    async with session_maker() as session:
        workout = await session.get(Workout, seeded["public"].id)
        workout.is_public = False
        await session.commit()

    response = await client.get(f"/api/community-workout-details/{seeded['public'].id}")

    assert response.status_code == 404
