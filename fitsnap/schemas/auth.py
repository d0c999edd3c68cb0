"""Auth provider payloads and auth endpoint schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AuthUser(BaseModel):
    """User record as returned by the auth provider."""

    model_config = ConfigDict(extra="ignore")

    id: str
    email: str | None = None
    app_metadata: dict[str, Any] = Field(default_factory=dict)
    user_metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: str | None = None


class AuthSession(BaseModel):
    model_config = ConfigDict(extra="ignore")

    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"
    expires_in: int | None = None
    expires_at: int | None = None  # unix seconds
    user: AuthUser | None = None


class Credentials(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=6)


class MagicLinkRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)


class SignUpResult(BaseModel):
    """Sign-up may or may not start a session (email confirmation pending)."""

    session: AuthSession | None = None
    confirmation_required: bool = False


class RouteAccess(BaseModel):
    path: str
    redirect: str | None = None


class SessionInfo(BaseModel):
    user: AuthUser
    is_admin: bool = False
