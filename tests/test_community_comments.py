import uuid
from datetime import timedelta

import pytest
from sqlalchemy import func, select

from fitsnap.models import CommunityComment
from tests.conftest import T0

pytestmark = pytest.mark.asyncio


async def _comment_count(session_maker) -> int:
    async with session_maker() as session:
        return await session.scalar(select(func.count()).select_from(CommunityComment))


@pytest.mark.parametrize(
    "body",
    [
        {"content": "Nice!", "userId": str(uuid.uuid4())},
        {"workoutId": str(uuid.uuid4()), "userId": str(uuid.uuid4())},
        {"workoutId": str(uuid.uuid4()), "content": "Nice!"},
        {"workoutId": str(uuid.uuid4()), "content": "   ", "userId": str(uuid.uuid4())},
        {},
    ],
)
async def test_add_comment_requires_all_fields(client, session_maker, body):
    response = await client.post("/api/community-comments/add", json=body)

    assert response.status_code == 400
    assert response.json() == {"detail": "Workout ID, content, and User ID are required"}
    assert await _comment_count(session_maker) == 0


async def test_add_comment_rejects_malformed_body(client, session_maker):
    response = await client.post(
        "/api/community-comments/add",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert await _comment_count(session_maker) == 0


async def test_add_comment_returns_comment_with_profile(client, seeded, session_maker):
    alice, workout = seeded["alice"], seeded["public"]

    response = await client.post(
        "/api/community-comments/add",
        json={"workoutId": str(workout.id), "content": "  Strong session  ", "userId": str(alice.id)},
    )

    assert response.status_code == 200
    comment = response.json()["comment"]
    assert comment["content"] == "Strong session"
    assert comment["workout_id"] == str(workout.id)
    assert comment["user_id"] == str(alice.id)
    assert comment["profiles"] == {"username": "alice", "avatar_url": "https://img/alice.png"}
    assert await _comment_count(session_maker) == 1


async def test_add_comment_without_profile_has_null_profiles(client, seeded):
    response = await client.post(
        "/api/community-comments/add",
        json={"workoutId": str(seeded["public"].id), "content": "hi", "userId": str(seeded["stranger_id"])},
    )

    assert response.status_code == 200
    assert response.json()["comment"]["profiles"] is None


async def test_list_comments_oldest_first(client, seeded, add_comment_row):
    workout, alice, bob = seeded["public"], seeded["alice"], seeded["bob"]
    await add_comment_row(workout.id, bob.id, "second", T0 + timedelta(minutes=10))
    await add_comment_row(workout.id, alice.id, "first", T0 + timedelta(minutes=5))
    await add_comment_row(workout.id, alice.id, "third", T0 + timedelta(minutes=20))
    await add_comment_row(seeded["public_newer"].id, alice.id, "elsewhere", T0)

    response = await client.get(f"/api/community-comments/{workout.id}")

    assert response.status_code == 200
    comments = response.json()["comments"]
    assert [c["content"] for c in comments] == ["first", "second", "third"]
    assert comments[1]["profiles"]["username"] == "bob"


async def test_list_comments_empty(client):
    response = await client.get(f"/api/community-comments/{uuid.uuid4()}")

    assert response.status_code == 200
    assert response.json() == {"comments": []}


async def test_list_comments_invalid_id(client):
    response = await client.get("/api/community-comments/not-a-uuid")

    assert response.status_code == 400
