import csv
import io
from datetime import timedelta

import pytest
import pytest_asyncio

from fitsnap.services.history import CSV_HEADER
from tests.conftest import T0

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture()
async def alice_history(client, seeded, as_user):
    """Alice's seeded push day plus a pull day two days later without exercises."""
    headers = as_user(str(seeded["alice"].id))
    await client.post(
        "/api/workouts",
        json={"name": "Pull day", "type": "pull", "completed_at": (T0 + timedelta(days=2)).isoformat()},
        headers=headers,
    )
    return headers


async def _names(client, headers, **params):
    response = await client.get("/api/history", params=params, headers=headers)
    assert response.status_code == 200
    body = response.json()
    return [w["name"] for w in body["workouts"]], body["total"]


async def test_history_is_own_workouts_newest_first(client, alice_history):
    response = await client.get("/api/history", headers=alice_history)

    body = response.json()
    assert body["total"] == 2
    assert [w["name"] for w in body["workouts"]] == ["Pull day", "Push day"]
    push = body["workouts"][1]
    assert push["exercise_count"] == 2
    assert push["total_sets"] == 3
    assert push["total_weight"] == 60
    assert push["total_exercise_duration"] == 0
    assert [e["exercises"]["name"] for e in push["workout_exercises"]] == ["Bench Press", "Goblet Squat"]


@pytest.mark.parametrize(
    "params, expected",
    [
        ({"search": "PUSH"}, ["Push day"]),
        ({"type": "pull"}, ["Pull day"]),
        ({"type": "all"}, ["Pull day", "Push day"]),
        ({"muscle_group": "legs"}, ["Push day"]),
        ({"muscle_group": "all"}, ["Pull day", "Push day"]),
        ({"date_from": (T0 + timedelta(days=1)).isoformat()}, ["Pull day"]),
        ({"date_to": (T0 + timedelta(hours=1)).isoformat()}, ["Push day"]),
        ({"search": "%"}, []),
    ],
)
async def test_history_filters(client, alice_history, params, expected):
    names, total = await _names(client, alice_history, **params)

    assert names == expected
    assert total == len(expected)


async def test_history_paging_keeps_filtered_total(client, alice_history):
    names, total = await _names(client, alice_history, limit=1, offset=1)

    assert names == ["Push day"]
    assert total == 2


async def test_history_requires_sign_in(client):
    response = await client.get("/api/history")

    assert response.status_code == 401


async def test_muscle_groups(client, seeded, as_user):
    response = await client.get("/api/history/muscle-groups", headers=as_user(str(seeded["alice"].id)))

    assert response.json() == ["Chest", "Legs"]


async def test_export_csv(client, seeded, as_user):
    response = await client.get("/api/history/export", headers=as_user(str(seeded["bob"].id)))

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert response.headers["content-disposition"].startswith('attachment; filename="workout-history-')
    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[0] == CSV_HEADER
    assert rows[1:] == [
        ["2026-03-01", "Secret", "custom", "0", "Plank", "Core", "1", "0", "0", "60", "0", "No", "", ""]
    ]

