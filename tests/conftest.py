from __future__ import annotations

import uuid
from collections.abc import AsyncGenerator, Callable
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from fitsnap.core.auth_client import AuthProvider, get_auth_provider
from fitsnap.db.base import Base
from fitsnap.db.session import get_service_db
from fitsnap.main import app
from fitsnap.models import (
    CommunityComment,
    Exercise,
    Profile,
    Workout,
    WorkoutExercise,
    WorkoutSet,
)

AUTH_BASE_URL = "http://auth.test/auth/v1"

AuthHandler = Callable[[httpx.Request], httpx.Response]


def auth_user_payload(user_id: str | None = None, email: str = "lifter@example.com", **extra: Any) -> dict[str, Any]:
    return {
        "id": user_id or str(uuid.uuid4()),
        "email": email,
        "app_metadata": extra.pop("app_metadata", {}),
        "user_metadata": {},
        **extra,
    }


def token_payload(user: dict[str, Any] | None = None, expires_in: int = 3600) -> dict[str, Any]:
    return {
        "access_token": "access-" + uuid.uuid4().hex,
        "refresh_token": "refresh-" + uuid.uuid4().hex,
        "token_type": "bearer",
        "expires_in": expires_in,
        "user": user or auth_user_payload(),
    }


def make_provider(handler: AuthHandler) -> AuthProvider:
    return AuthProvider(AUTH_BASE_URL, "anon-key", transport=httpx.MockTransport(handler))


@pytest.fixture()
def auth_requests() -> list[httpx.Request]:
    return []


@pytest.fixture()
def auth_responses() -> dict[tuple[str, str], httpx.Response]:
    """Responses keyed by (method, path); tests fill it in. Unknown routes answer 404."""
    return {}


@pytest.fixture()
def auth_handler(auth_requests, auth_responses) -> AuthHandler:
    def handler(request: httpx.Request) -> httpx.Response:
        auth_requests.append(request)
        return auth_responses.get(
            (request.method, request.url.path),
            httpx.Response(404, json={"msg": "not found"}),
        )

    return handler


@pytest_asyncio.fixture()
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture()
async def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture()
async def db(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture()
async def client(session_maker, auth_handler) -> AsyncGenerator[httpx.AsyncClient, None]:
    async def override_service_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def override_auth_provider() -> AsyncGenerator[AuthProvider, None]:
        async with make_provider(auth_handler) as provider:
            yield provider

    app.dependency_overrides[get_service_db] = override_service_db
    app.dependency_overrides[get_auth_provider] = override_auth_provider
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def as_user(auth_responses) -> Callable[..., dict[str, str]]:
    """Make GET /user accept a bearer token for the given user; returns the auth header."""

    def _as_user(user_id: str | None = None, email: str = "lifter@example.com", **extra: Any) -> dict[str, str]:
        auth_responses[("GET", "/auth/v1/user")] = httpx.Response(
            200, json=auth_user_payload(user_id, email=email, **extra)
        )
        return {"Authorization": "Bearer test-token"}

    return _as_user


# ── seed data ────────────────────────────────────────────────────────────

T0 = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture()
async def seeded(db: AsyncSession) -> dict[str, Any]:
    """Two public workouts (one with exercises and sets), one private workout, two profiles."""
    alice = Profile(id=uuid.uuid4(), username="alice", full_name="Alice A", avatar_url="https://img/alice.png")
    bob = Profile(id=uuid.uuid4(), username="bob", avatar_url=None)
    stranger_id = uuid.uuid4()  # no profile row

    bench = Exercise(name="Bench Press", category="Strength", muscle_group="Chest", equipment="Barbell")
    squat = Exercise(name="Goblet Squat", category="Strength", muscle_group="Legs", equipment="Dumbbell")
    plank = Exercise(name="Plank", category="Strength", muscle_group="Core", equipment="Bodyweight")

    public = Workout(
        id=uuid.uuid4(), user_id=alice.id, name="Push day", type="push", is_public=True, completed_at=T0
    )
    public_newer = Workout(
        id=uuid.uuid4(),
        user_id=stranger_id,
        name="Legs",
        type="legs",
        is_public=True,
        completed_at=T0 + timedelta(days=1),
    )
    private = Workout(
        id=uuid.uuid4(), user_id=bob.id, name="Secret", type="custom", is_public=False, completed_at=T0
    )
    db.add_all([alice, bob, bench, squat, plank, public, public_newer, private])
    await db.flush()

    first = WorkoutExercise(id=uuid.uuid4(), workout_id=public.id, exercise_id=bench.id, order_index=0)
    second = WorkoutExercise(id=uuid.uuid4(), workout_id=public.id, exercise_id=squat.id, order_index=1)
    hidden = WorkoutExercise(id=uuid.uuid4(), workout_id=private.id, exercise_id=plank.id, order_index=0)
    db.add_all([second, first, hidden])
    await db.flush()

    db.add_all(
        [
            WorkoutSet(workout_exercise_id=first.id, reps=8, weight=60, created_at=T0 + timedelta(minutes=2)),
            WorkoutSet(workout_exercise_id=first.id, reps=10, weight=50, created_at=T0 + timedelta(minutes=1)),
            WorkoutSet(workout_exercise_id=second.id, reps=12, weight=20, created_at=T0 + timedelta(minutes=5)),
            WorkoutSet(workout_exercise_id=hidden.id, reps=0, duration=60, created_at=T0),
        ]
    )
    await db.commit()
    return {
        "alice": alice,
        "bob": bob,
        "stranger_id": stranger_id,
        "public": public,
        "public_newer": public_newer,
        "private": private,
        "bench": bench,
        "squat": squat,
        "first": first,
        "second": second,
    }


@pytest_asyncio.fixture()
async def add_comment_row(db: AsyncSession):
    async def _add(workout_id: uuid.UUID, user_id: uuid.UUID, content: str, created_at: datetime) -> CommunityComment:
        comment = CommunityComment(workout_id=workout_id, user_id=user_id, content=content, created_at=created_at)
        db.add(comment)
        await db.commit()
        return comment

    return _add
