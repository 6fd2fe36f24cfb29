"""Login gate in front of ordering.

The gate initializes the identity provider once and exposes the resulting
state. Identity failures are terminal for the page load: they end up in the
status banner and are never retried automatically.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from miniapp_order.schemas.session import SessionState, StatusLevel, UserProfile
from miniapp_order.services.identity import IdentityProvider

logger = logging.getLogger(__name__)

SDK_MISSING_MESSAGE: str = "⚠️ LINE SDK failed to load, please check your connection and reload."
INIT_FAILED_MESSAGE: str = "⚠️ LINE features failed to load, please reload the page."
AUTO_REDIRECT_MESSAGE: str = "You are not logged in, redirecting you to the login page..."
LOGIN_REQUIRED_MESSAGE: str = "Please log in with LINE to continue ordering."
LOGIN_REDIRECT_MESSAGE: str = "🔄 Redirecting to LINE login..."
LOGIN_FAILED_MESSAGE: str = "⚠️ Login failed, please try again later."


def welcome_message(profile: UserProfile) -> str:
    return f"👋 Welcome, {profile.display_name}!"


class SessionGate:
    """Owns the session state derived from an `IdentityProvider`."""

    def __init__(self, provider: IdentityProvider | None, app_id: str) -> None:
        self.provider = provider
        self.app_id = app_id
        self.state = SessionState()
        self._initialized = False

    def _fail(self, message: str) -> SessionState:
        self.state = self.state.model_copy(
            update={
                "status_message": message,
                "status_level": StatusLevel.ERROR,
                "is_loading": False,
            }
        )
        return self.state

    def initialize(self) -> SessionState:
        """Initialize the provider and resolve login state; runs at most once."""
        if self._initialized:
            return self.state
        self._initialized = True

        if self.provider is None:
            logger.error("[SESSION] Identity SDK not available")
            return self._fail(SDK_MISSING_MESSAGE)

        provider = self.provider
        try:
            provider.initialize(self.app_id)
            if provider.is_logged_in():
                with ThreadPoolExecutor(max_workers=2) as pool:
                    profile_future = pool.submit(provider.get_profile)
                    token_future = pool.submit(provider.get_identity_token)
                    profile: UserProfile = profile_future.result()
                    token: str = token_future.result()
                self.state = SessionState(
                    is_logged_in=True,
                    profile=profile,
                    identity_token=token,
                    status_message=welcome_message(profile),
                    status_level=StatusLevel.SUCCESS,
                    is_loading=False,
                )
            elif provider.is_embedded_client():
                self.state = SessionState(
                    status_message=AUTO_REDIRECT_MESSAGE,
                    status_level=StatusLevel.INFO,
                    is_loading=False,
                )
                provider.login()
            else:
                self.state = SessionState(
                    status_message=LOGIN_REQUIRED_MESSAGE,
                    status_level=StatusLevel.WARNING,
                    is_loading=False,
                    can_login=True,
                )
        except Exception:
            logger.warning("[SESSION] Identity initialization failed", exc_info=True)
            return self._fail(INIT_FAILED_MESSAGE)
        return self.state

    def login(self) -> SessionState:
        """Start the login redirect; ignored while loading or without an SDK."""
        if self.provider is None or self.state.is_loading:
            return self.state

        self.state = self.state.model_copy(
            update={
                "is_loading": True,
                "status_message": LOGIN_REDIRECT_MESSAGE,
                "status_level": StatusLevel.INFO,
            }
        )
        try:
            self.provider.login()
        except Exception:
            logger.exception("[SESSION] Login redirect failed")
            return self._fail(LOGIN_FAILED_MESSAGE)
        return self.state
