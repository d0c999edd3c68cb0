"""API router aggregation."""

from fastapi import APIRouter

from fitsnap.api.v1.endpoints import (
    account,
    auth,
    community,
    community_comments,
    community_reactions,
    community_workout_details,
    exercises,
    health,
    history,
    progress,
    workouts,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(community_comments.router, prefix="/community-comments", tags=["community"])
api_router.include_router(community_reactions.router, prefix="/community-reactions", tags=["community"])
api_router.include_router(
    community_workout_details.router, prefix="/community-workout-details", tags=["community"]
)
api_router.include_router(community.router, prefix="/community", tags=["community"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(workouts.router, prefix="/workouts", tags=["workouts"])
api_router.include_router(history.router, prefix="/history", tags=["history"])
api_router.include_router(progress.router, prefix="/progress", tags=["progress"])
api_router.include_router(account.router, prefix="/account", tags=["account"])
