"""Session context: the signed-in user for the lifetime of a client.

Holds ``user``, ``loading`` and ``error``, keeps them in step with the auth
provider's state-change stream, and notifies its own listeners on every change.
``close()`` must be called on teardown to drop the provider subscription.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from fitsnap.core.auth_client import AuthProvider, Subscription
from fitsnap.core.config import get_settings
from fitsnap.core.enums import AuthChangeEvent
from fitsnap.core.security import is_admin_user
from fitsnap.schemas.auth import AuthSession, AuthUser
from fitsnap.state.navigation import Navigator

logger = logging.getLogger(__name__)

SessionListener = Callable[["SessionContext"], None]


class SessionContext:
    def __init__(
        self,
        provider: AuthProvider,
        navigator: Navigator,
        login_path: str | None = None,
        admin_email_domain: str | None = None,
    ) -> None:
        settings = get_settings()
        self._provider = provider
        self._navigator = navigator
        self._login_path = login_path or settings.login_path
        self._admin_email_domain = admin_email_domain or settings.admin_email_domain
        self._subscription: Subscription | None = None
        self._listeners: list[SessionListener] = []

        self.user: AuthUser | None = None
        self.loading = True
        self.error: Exception | None = None

    @property
    def is_admin(self) -> bool:
        """UI hint only; the store's access policy decides what an admin may do."""
        return is_admin_user(self.user, self._admin_email_domain)

    # ── listeners ────────────────────────────────────────────────────────

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a change listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Session listener failed")

    # ── lifecycle ────────────────────────────────────────────────────────

    async def start(self) -> None:
        """Subscribe to auth changes, then load the current session."""
        if self._subscription is None:
            self._subscription = self._provider.on_auth_state_change(self._on_auth_state_change)
        await self.load_user()

    async def load_user(self) -> None:
        try:
            session = await self._provider.get_session()
            self.user = session.user if session else None
        except Exception as e:
            logger.warning("Failed to load session: %s", e)
            self.error = e
            self.user = None
        finally:
            self.loading = False
            self._notify()

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self._listeners.clear()

    def _on_auth_state_change(self, event: AuthChangeEvent, session: AuthSession | None) -> None:
        self.user = session.user if session else None
        if event == AuthChangeEvent.SIGNED_IN:
            self._navigator.refresh()
        elif event == AuthChangeEvent.SIGNED_OUT:
            self.user = None
            self._navigator.push(self._login_path)
            self._navigator.refresh()
        self._notify()

    async def sign_out(self) -> None:
        await self._provider.sign_out()
        self.user = None
        self._navigator.push(self._login_path)
        self._notify()
