"""Identity token helpers.

The order service verifies identity tokens itself; the client only reads the
claims it needs to show who is ordering.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from miniapp_order.core.config import settings


class InvalidIdentityToken(Exception):
    """Raised when an identity token cannot be decoded."""


def create_dev_identity_token(user_id: str, display_name: str, expire_minutes: int = 60) -> str:
    """Mint a signed identity token for local development sessions."""
    expire: datetime = datetime.now(timezone.utc) + timedelta(minutes=expire_minutes)
    to_encode: dict[str, Any] = {"sub": user_id, "name": display_name, "exp": expire}
    return jwt.encode(
        to_encode,
        settings.dev_identity_secret,
        algorithm=settings.dev_identity_algorithm,
    )


def read_identity_claims(token: str) -> dict[str, Any]:
    """Return the claims of an identity token without verifying its signature."""
    try:
        claims: dict[str, Any] = jwt.get_unverified_claims(token)
    except JWTError as exc:
        raise InvalidIdentityToken("Could not read identity token") from exc

    if not claims.get("sub"):
        raise InvalidIdentityToken("Identity token has no subject")
    return claims
