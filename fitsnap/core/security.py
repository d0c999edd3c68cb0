"""Auth helpers: admin predicate, page route access and bearer-token dependencies."""

from __future__ import annotations

import logging
from urllib.parse import urlencode

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from fitsnap.core.auth_client import AuthError, AuthProvider, get_auth_provider
from fitsnap.core.config import get_settings
from fitsnap.core.constants import ADMIN_ROUTES, AUTH_ROUTES, PROTECTED_ROUTES
from fitsnap.schemas.auth import AuthUser

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

# Auth API answers for an expired, revoked or malformed token
REJECTED_TOKEN_STATUSES = (401, 403)


def is_admin_user(user: AuthUser | None, admin_email_domain: str | None = None) -> bool:
    """UI-level admin flag. The store's access policy makes the real decision."""
    if user is None:
        return False
    if admin_email_domain is None:
        admin_email_domain = get_settings().admin_email_domain
    if user.app_metadata.get("is_admin"):
        return True
    return bool(user.email and admin_email_domain and user.email.lower().endswith(admin_email_domain.lower()))


def _matches(path: str, routes: tuple[str, ...]) -> bool:
    return any(path.startswith(route) for route in routes)


def resolve_route_redirect(path: str, user: AuthUser | None, admin_email_domain: str | None = None) -> str | None:
    """
    Where a page request for `path` must be redirected, or None to let it through.
    Signed-in users skip the auth pages; anonymous users are sent to login with
    redirectedFrom; admin pages also bounce non-admins to the dashboard.
    """
    settings = get_settings()
    if _matches(path, AUTH_ROUTES):
        return settings.dashboard_path if user is not None else None
    if _matches(path, PROTECTED_ROUTES) or _matches(path, ADMIN_ROUTES):
        if user is None:
            return f"{settings.login_path}?{urlencode({'redirectedFrom': path})}"
    if _matches(path, ADMIN_ROUTES) and not is_admin_user(user, admin_email_domain):
        return settings.dashboard_path
    return None


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth: AuthProvider = Depends(get_auth_provider),
) -> AuthUser | None:
    """
    Resolve the bearer token to a user; None when absent or rejected.
    Any other auth API failure (unreachable, 5xx) is a 503, not an anonymous caller.
    """
    if credentials is None:
        return None
    try:
        return await auth.get_user(credentials.credentials)
    except AuthError as e:
        if e.status in REJECTED_TOKEN_STATUSES:
            return None
        logger.warning("Auth API failed while resolving bearer token: %s", e.message)
        raise HTTPException(status_code=503, detail="Auth service unavailable")


async def get_current_user(user: AuthUser | None = Depends(get_optional_user)) -> AuthUser:
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


async def require_admin(user: AuthUser = Depends(get_current_user)) -> AuthUser:
    if not is_admin_user(user):
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
