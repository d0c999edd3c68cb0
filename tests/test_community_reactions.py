import uuid

import pytest
from sqlalchemy import select

from fitsnap.models import CommunityReaction

pytestmark = pytest.mark.asyncio


async def _reactions(session_maker) -> list[CommunityReaction]:
    async with session_maker() as session:
        result = await session.execute(select(CommunityReaction))
        return list(result.scalars().all())


async def test_add_reaction_defaults_to_like(client, seeded, session_maker):
    workout, alice = seeded["public"], seeded["alice"]

    response = await client.post(
        "/api/community-reactions/add",
        json={"workoutId": str(workout.id), "userId": str(alice.id)},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Reaction added successfully"
    assert body["reaction"]["reaction_type"] == "like"
    assert body["reaction"]["workout_id"] == str(workout.id)
    assert len(await _reactions(session_maker)) == 1


async def test_add_reaction_twice_keeps_one_row_with_latest_type(client, seeded, session_maker):
    workout, alice = seeded["public"], seeded["alice"]
    payload = {"workoutId": str(workout.id), "userId": str(alice.id)}

    first = await client.post("/api/community-reactions/add", json={**payload, "reactionType": "like"})
    second = await client.post("/api/community-reactions/add", json={**payload, "reactionType": "fire"})

    assert first.status_code == 200
    assert second.status_code == 200
    assert second.json()["reaction"]["reaction_type"] == "fire"
    rows = await _reactions(session_maker)
    assert len(rows) == 1
    assert rows[0].reaction_type == "fire"


async def test_reactions_from_different_users_coexist(client, seeded, session_maker):
    workout = seeded["public"]
    for user_id in (seeded["alice"].id, seeded["bob"].id):
        response = await client.post(
            "/api/community-reactions/add",
            json={"workoutId": str(workout.id), "userId": str(user_id)},
        )
        assert response.status_code == 200

    listed = await client.get(f"/api/community-reactions/{workout.id}")

    assert listed.status_code == 200
    assert {r["user_id"] for r in listed.json()["reactions"]} == {str(seeded["alice"].id), str(seeded["bob"].id)}


@pytest.mark.parametrize("path", ["/api/community-reactions/add", "/api/community-reactions/remove"])
async def test_reaction_writes_require_ids(client, session_maker, path):
    response = await client.post(path, json={"workoutId": str(uuid.uuid4())})

    assert response.status_code == 400
    assert response.json() == {"detail": "Workout ID and User ID are required"}
    assert await _reactions(session_maker) == []


async def test_remove_reaction(client, seeded, session_maker):
    payload = {"workoutId": str(seeded["public"].id), "userId": str(seeded["alice"].id)}
    await client.post("/api/community-reactions/add", json=payload)

    response = await client.post("/api/community-reactions/remove", json=payload)

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Reaction removed successfully"}
    assert await _reactions(session_maker) == []


async def test_remove_missing_reaction_is_success(client):
    response = await client.post(
        "/api/community-reactions/remove",
        json={"workoutId": str(uuid.uuid4()), "userId": str(uuid.uuid4())},
    )

    assert response.status_code == 200
    assert response.json()["success"] is True


async def test_list_reactions_empty(client):
    response = await client.get(f"/api/community-reactions/{uuid.uuid4()}")

    assert response.status_code == 200
    assert response.json() == {"reactions": []}
