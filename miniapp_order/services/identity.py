"""Identity provider interface and the token-based implementation."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from miniapp_order.core.config import settings
from miniapp_order.core.security import InvalidIdentityToken, create_dev_identity_token, read_identity_claims
from miniapp_order.schemas.session import UserProfile

logger = logging.getLogger(__name__)


class IdentityError(Exception):
    """Raised by identity providers when the host SDK cannot serve a request."""


class IdentityProvider(Protocol):
    """Capabilities the application needs from the host login SDK."""

    def initialize(self, app_id: str) -> None: ...

    def is_logged_in(self) -> bool: ...

    def get_profile(self) -> UserProfile: ...

    def get_identity_token(self) -> str: ...

    def login(self) -> None: ...

    def is_embedded_client(self) -> bool: ...


class IdTokenIdentityProvider:
    """Identity backed by an ID token handed over by the host container.

    Logging in is a navigation to `login_url`; the provider only records that
    it was requested so the front end can redirect.
    """

    def __init__(self, id_token: str | None, *, embedded: bool = False, login_url: str | None = None) -> None:
        self._id_token = id_token
        self._embedded = embedded
        self.login_url: str = login_url or settings.login_url
        self.login_requested: bool = False
        self._claims: dict[str, Any] | None = None
        self._initialized = False

    def initialize(self, app_id: str) -> None:
        if self._id_token:
            try:
                self._claims = read_identity_claims(self._id_token)
            except InvalidIdentityToken as exc:
                raise IdentityError(str(exc)) from exc
        self._initialized = True
        logger.info("[SESSION] Identity provider ready for app %s", app_id or "<unset>")

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise IdentityError("Identity provider used before initialize()")

    def is_logged_in(self) -> bool:
        self._require_initialized()
        return self._claims is not None

    def get_profile(self) -> UserProfile:
        self._require_initialized()
        if self._claims is None:
            raise IdentityError("Not logged in")
        return UserProfile(
            user_id=str(self._claims["sub"]),
            display_name=str(self._claims.get("name", "")),
            picture_url=self._claims.get("picture"),
        )

    def get_identity_token(self) -> str:
        self._require_initialized()
        if self._claims is None or self._id_token is None:
            raise IdentityError("Not logged in")
        return self._id_token

    def login(self) -> None:
        self.login_requested = True

    def is_embedded_client(self) -> bool:
        return self._embedded


def build_identity_provider(id_token: str | None = None) -> IdTokenIdentityProvider:
    """Build the provider from a host token, or a development identity when configured."""
    if not id_token and settings.dev_user_id and settings.app_env == "dev":
        id_token = create_dev_identity_token(settings.dev_user_id, settings.dev_user_name or settings.dev_user_id)
    return IdTokenIdentityProvider(id_token, embedded=settings.embedded_client)
