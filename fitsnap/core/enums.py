"""Shared enums for models, API and client state."""

from enum import Enum


class WorkoutType(str, Enum):
    """Split a workout was logged under."""

    PUSH = "push"
    PULL = "pull"
    LEGS = "legs"
    CUSTOM = "custom"


class AuthChangeEvent(str, Enum):
    """Events published by the auth provider's state-change stream."""

    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"
