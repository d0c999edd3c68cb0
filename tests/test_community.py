import uuid
from datetime import timedelta

import pytest

from fitsnap.models import CommunityReaction, Workout
from tests.conftest import T0

pytestmark = pytest.mark.asyncio


async def test_feed_lists_public_workouts_newest_first(client, seeded):
    response = await client.get("/api/community/workouts")

    assert response.status_code == 200
    feed = response.json()
    assert [w["id"] for w in feed] == [str(seeded["public_newer"].id), str(seeded["public"].id)]
    assert str(seeded["private"].id) not in {w["id"] for w in feed}


async def test_feed_embeds_profile_exercises_and_counts(client, seeded, db, add_comment_row):
    workout = seeded["public"]
    db.add(CommunityReaction(workout_id=workout.id, user_id=seeded["bob"].id, reaction_type="fire"))
    await db.commit()
    await add_comment_row(workout.id, seeded["bob"].id, "great", T0 + timedelta(hours=1))
    await add_comment_row(workout.id, seeded["alice"].id, "thanks", T0 + timedelta(hours=2))

    response = await client.get("/api/community/workouts")

    item = next(w for w in response.json() if w["id"] == str(workout.id))
    assert item["profiles"] == {
        "username": "alice",
        "avatar_url": "https://img/alice.png",
        "full_name": "Alice A",
    }
    assert [e["exercises"]["name"] for e in item["workout_exercises"]] == ["Bench Press", "Goblet Squat"]
    assert [r["reaction_type"] for r in item["community_reactions"]] == ["fire"]
    assert item["_count"] == {"community_reactions": 1, "community_comments": 2}


async def test_feed_falls_back_to_anonymous_profile(client, seeded):
    response = await client.get("/api/community/workouts")

    item = next(w for w in response.json() if w["id"] == str(seeded["public_newer"].id))
    assert item["profiles"]["username"] == "Anonymous User"
    assert item["_count"] == {"community_reactions": 0, "community_comments": 0}


async def test_feed_pagination(client, seeded):
    response = await client.get("/api/community/workouts", params={"limit": 1, "offset": 1})

    assert response.status_code == 200
    assert [w["id"] for w in response.json()] == [str(seeded["public"].id)]


@pytest.mark.parametrize("params", [{"limit": 0}, {"limit": 101}, {"offset": -1}])
async def test_feed_rejects_bad_paging(client, params):
    response = await client.get("/api/community/workouts", params=params)

    assert response.status_code == 400


async def test_owner_can_share_workout(client, seeded, as_user, session_maker):
    bob, private = seeded["bob"], seeded["private"]
    headers = as_user(str(bob.id))

    response = await client.patch(
        f"/api/community/workouts/{private.id}/visibility", json={"isPublic": True}, headers=headers
    )

    assert response.status_code == 200
    assert response.json()["is_public"] is True
    async with session_maker() as session:
        assert (await session.get(Workout, private.id)).is_public is True


async def test_other_user_cannot_change_sharing(client, seeded, as_user):
    headers = as_user(str(seeded["alice"].id))

    response = await client.patch(
        f"/api/community/workouts/{seeded['private'].id}/visibility", json={"isPublic": True}, headers=headers
    )

    assert response.status_code == 403


async def test_visibility_requires_authentication(client, seeded):
    response = await client.patch(
        f"/api/community/workouts/{seeded['private'].id}/visibility", json={"isPublic": True}
    )

    assert response.status_code == 401


async def test_visibility_unknown_workout(client, as_user):
    response = await client.patch(
        f"/api/community/workouts/{uuid.uuid4()}/visibility", json={"isPublic": False}, headers=as_user()
    )

    assert response.status_code == 404
