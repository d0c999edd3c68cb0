"""Auth endpoints: code-exchange callback and thin wrappers over the auth provider."""

from __future__ import annotations

import logging
from urllib.parse import quote, urlencode

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse
from fastapi.security import HTTPAuthorizationCredentials

from fitsnap.core.auth_client import AuthError, AuthProvider, get_auth_provider
from fitsnap.core.config import get_settings
from fitsnap.core.security import (
    bearer_scheme,
    get_current_user,
    get_optional_user,
    is_admin_user,
    resolve_route_redirect,
)
from fitsnap.schemas.auth import (
    AuthSession,
    AuthUser,
    Credentials,
    MagicLinkRequest,
    RouteAccess,
    SessionInfo,
    SignUpResult,
)

logger = logging.getLogger(__name__)
router = APIRouter()

ACCESS_TOKEN_COOKIE = "sb-access-token"
REFRESH_TOKEN_COOKIE = "sb-refresh-token"


def _login_redirect(error: str) -> RedirectResponse:
    settings = get_settings()
    query = urlencode({"error": error}, quote_via=quote)
    return RedirectResponse(f"{settings.site_path(settings.login_path)}?{query}")


def _dashboard_redirect(session: AuthSession | None) -> RedirectResponse:
    settings = get_settings()
    response = RedirectResponse(settings.site_path(settings.dashboard_path))
    if session is not None:
        secure = settings.environment != "development"
        response.set_cookie(
            ACCESS_TOKEN_COOKIE,
            session.access_token,
            max_age=session.expires_in,
            httponly=True,
            secure=secure,
            samesite="lax",
        )
        if session.refresh_token:
            response.set_cookie(
                REFRESH_TOKEN_COOKIE, session.refresh_token, httponly=True, secure=secure, samesite="lax"
            )
    return response


@router.get("/callback")
async def auth_callback(
    code: str | None = None,
    auth: AuthProvider = Depends(get_auth_provider),
):
    """
    Exchange the one-time code from a magic link / OAuth redirect for a session.
    Success lands on the dashboard; any failure lands on login with ?error=...
    """
    session = None
    try:
        if code:
            try:
                session = await auth.exchange_code_for_session(code)
            except AuthError as e:
                logger.error("Error exchanging code for session: %s", e.message)
                return _login_redirect("Authentication failed")
            if session is None:
                return _login_redirect("No session created")
        return _dashboard_redirect(session)
    except Exception as e:
        logger.exception("Unexpected error in auth callback: %s", e)
        return _login_redirect("Authentication error")


@router.post("/sign-in", response_model=AuthSession)
async def sign_in(payload: Credentials, auth: AuthProvider = Depends(get_auth_provider)):
    try:
        return await auth.sign_in_with_password(payload.email, payload.password)
    except AuthError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.post("/sign-up", response_model=SignUpResult, status_code=201)
async def sign_up(payload: Credentials, auth: AuthProvider = Depends(get_auth_provider)):
    """Create an account; confirmation_required is set when the provider emails a confirmation link."""
    try:
        session = await auth.sign_up(payload.email, payload.password)
    except AuthError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return SignUpResult(session=session, confirmation_required=session is None)


@router.post("/magic-link", status_code=202)
async def send_magic_link(payload: MagicLinkRequest, auth: AuthProvider = Depends(get_auth_provider)):
    try:
        await auth.sign_in_with_otp(payload.email, redirect_to=get_settings().auth_callback_url)
    except AuthError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return {"message": "Check your email for the login link"}


@router.post("/sign-out", status_code=204)
async def sign_out(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth: AuthProvider = Depends(get_auth_provider),
):
    """Revoke the bearer session. Signing out without a token is a no-op."""
    if credentials is not None:
        auth.set_session(AuthSession(access_token=credentials.credentials))
    await auth.sign_out()
    return None


@router.get("/session", response_model=SessionInfo)
async def current_session(user: AuthUser = Depends(get_current_user)):
    return SessionInfo(user=user, is_admin=is_admin_user(user))


@router.get("/route-access", response_model=RouteAccess)
async def route_access(path: str, user: AuthUser | None = Depends(get_optional_user)):
    """Where the frontend must send a visitor asking for `path` (redirect is null to let them in)."""
    return RouteAccess(path=path, redirect=resolve_route_redirect(path, user))
