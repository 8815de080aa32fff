"""Bearer token issuing and verification."""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from pydantic import ValidationError

from landscape360.config.settings import Settings, get_settings
from landscape360.core.exceptions import AuthenticationError
from landscape360.tenancy.access import Principal


def create_access_token(
    principal: Principal,
    settings: Settings | None = None,
    expires_in: timedelta | None = None,
) -> str:
    """Issue a signed token for ``principal``.

    Raises:
        AuthenticationError: If no JWT secret is configured
    """
    settings = settings or get_settings()
    if settings.JWT_SECRET is None:
        raise AuthenticationError("Token signing is not configured")

    now = datetime.now(UTC)
    expires_at = now + (expires_in or timedelta(minutes=settings.JWT_EXPIRES_MINUTES))
    claims: dict[str, Any] = {
        "sub": principal.user_id,
        "role": principal.role.value,
        "tenant_id": str(principal.tenant_id) if principal.tenant_id else None,
        "email": principal.email,
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(
        claims,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str, settings: Settings | None = None) -> Principal:
    """Verify ``token`` and return the principal it was issued for.

    Raises:
        AuthenticationError: If the token is invalid, expired, or malformed
    """
    settings = settings or get_settings()
    if settings.JWT_SECRET is None:
        raise AuthenticationError("Token verification is not configured")

    try:
        claims = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
        )
    except JWTError as e:
        raise AuthenticationError("Invalid or expired token") from e

    try:
        return Principal(
            user_id=claims["sub"],
            role=claims["role"],
            tenant_id=claims.get("tenant_id"),
            email=claims.get("email"),
        )
    except (KeyError, ValidationError) as e:
        raise AuthenticationError("Invalid token claims") from e
