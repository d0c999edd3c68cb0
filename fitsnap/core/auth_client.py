"""Client for the BaaS auth REST API (public/anon credential tier).

The provider keeps the session it last obtained in memory, the way a browser
client does, and publishes auth-state changes to subscribers. Server handlers
get a fresh provider per request through ``get_auth_provider`` so sessions never
leak between callers.
"""

from __future__ import annotations

import itertools
import logging
import time
from collections.abc import AsyncGenerator, Callable
from typing import Any

import httpx

from fitsnap.core.config import get_settings
from fitsnap.core.enums import AuthChangeEvent
from fitsnap.schemas.auth import AuthSession, AuthUser

logger = logging.getLogger(__name__)

AuthStateListener = Callable[[AuthChangeEvent, AuthSession | None], None]

# Refresh a little before the provider would reject the token
EXPIRY_MARGIN_SECONDS = 10


class AuthError(Exception):
    """Raised when the auth API rejects a call or cannot be reached."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class Subscription:
    """Handle returned by ``on_auth_state_change``; unsubscribing twice is a no-op."""

    def __init__(self, provider: AuthProvider, key: int) -> None:
        self._provider = provider
        self._key = key

    def unsubscribe(self) -> None:
        self._provider._listeners.pop(self._key, None)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"Auth request failed ({response.status_code})"
    if isinstance(body, dict):
        for key in ("error_description", "msg", "message", "error"):
            if body.get(key):
                return str(body[key])
    return f"Auth request failed ({response.status_code})"


class AuthProvider:
    def __init__(
        self,
        base_url: str,
        anon_key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"apikey": anon_key, "Content-Type": "application/json"},
            transport=transport,
        )
        self._session: AuthSession | None = None
        self._listeners: dict[int, AuthStateListener] = {}
        self._keys = itertools.count()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> AuthProvider:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ── subscriptions ────────────────────────────────────────────────────

    def on_auth_state_change(self, listener: AuthStateListener) -> Subscription:
        key = next(self._keys)
        self._listeners[key] = listener
        return Subscription(self, key)

    def _emit(self, event: AuthChangeEvent, session: AuthSession | None) -> None:
        for listener in list(self._listeners.values()):
            try:
                listener(event, session)
            except Exception:
                logger.exception("Auth state listener failed on %s", event.value)

    # ── transport ────────────────────────────────────────────────────────

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {access_token}"} if access_token else None
        try:
            response = await self._client.request(method, path, json=json, params=params, headers=headers)
        except httpx.HTTPError as e:
            raise AuthError(f"Auth API unreachable: {e}") from e
        if response.status_code >= 400:
            raise AuthError(_error_message(response), status=response.status_code)
        if not response.content:
            return {}
        return response.json()

    def _adopt(self, session: AuthSession, event: AuthChangeEvent) -> AuthSession:
        if session.expires_at is None and session.expires_in is not None:
            session.expires_at = int(time.time()) + session.expires_in
        self._session = session
        self._emit(event, session)
        return session

    # ── operations ───────────────────────────────────────────────────────

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        data = await self._request(
            "POST", "/token", params={"grant_type": "password"}, json={"email": email, "password": password}
        )
        return self._adopt(AuthSession.model_validate(data), AuthChangeEvent.SIGNED_IN)

    async def sign_up(self, email: str, password: str) -> AuthSession | None:
        """Create an account. Returns None when the provider waits for email confirmation."""
        data = await self._request("POST", "/signup", json={"email": email, "password": password})
        if not data.get("access_token"):
            return None
        return self._adopt(AuthSession.model_validate(data), AuthChangeEvent.SIGNED_IN)

    async def sign_in_with_otp(self, email: str, redirect_to: str | None = None) -> None:
        """Send a magic link; the link lands on the auth callback with an exchange code."""
        params = {"redirect_to": redirect_to} if redirect_to else None
        await self._request("POST", "/otp", params=params, json={"email": email, "create_user": True})

    async def exchange_code_for_session(self, code: str, code_verifier: str | None = None) -> AuthSession | None:
        data = await self._request(
            "POST",
            "/token",
            params={"grant_type": "pkce"},
            json={"auth_code": code, "code_verifier": code_verifier or ""},
        )
        if not data.get("access_token"):
            return None
        return self._adopt(AuthSession.model_validate(data), AuthChangeEvent.SIGNED_IN)

    async def refresh_session(self, refresh_token: str) -> AuthSession:
        data = await self._request(
            "POST", "/token", params={"grant_type": "refresh_token"}, json={"refresh_token": refresh_token}
        )
        return self._adopt(AuthSession.model_validate(data), AuthChangeEvent.TOKEN_REFRESHED)

    async def get_user(self, access_token: str) -> AuthUser:
        data = await self._request("GET", "/user", access_token=access_token)
        return AuthUser.model_validate(data)

    def set_session(self, session: AuthSession | None) -> None:
        """Adopt a session obtained elsewhere (e.g. restored from a cookie) without notifying."""
        self._session = session

    async def get_session(self) -> AuthSession | None:
        """Current session, refreshed first when its access token has expired."""
        session = self._session
        if session is None:
            return None
        if session.expires_at is not None and session.expires_at <= time.time() + EXPIRY_MARGIN_SECONDS:
            if not session.refresh_token:
                self._session = None
                return None
            return await self.refresh_session(session.refresh_token)
        return session

    async def sign_out(self) -> None:
        """Revoke the current session. The local session is dropped even if revocation fails."""
        session, self._session = self._session, None
        if session is not None:
            try:
                await self._request("POST", "/logout", access_token=session.access_token)
            except AuthError as e:
                logger.warning("Sign-out revocation failed: %s", e.message)
        self._emit(AuthChangeEvent.SIGNED_OUT, None)


def build_auth_provider(transport: httpx.AsyncBaseTransport | None = None) -> AuthProvider:
    settings = get_settings()
    return AuthProvider(
        settings.auth_url,
        settings.supabase_anon_key,
        timeout=settings.auth_timeout_seconds,
        transport=transport,
    )


async def get_auth_provider() -> AsyncGenerator[AuthProvider, None]:
    """Dependency that yields a per-request auth provider."""
    async with build_auth_provider() as provider:
        yield provider
