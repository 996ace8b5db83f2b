"""
Session token issue and verification.

Tokens are HS256 JWTs signed with the process-wide secret from JWTSettings:

    {"userId": "...", "email": "...", "domain": "admin.example.com",
     "iat": 1700000000, "exp": 1700086400}

They are not persisted, cannot be refreshed and cannot be revoked before
``exp``; the ``domain`` claim binds a token to the front end it was issued
for.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt

from config import JWTSettings
from errors import ForbiddenError

REQUIRED_CLAIMS = ["exp", "iat", "userId", "email", "domain"]


@dataclass(frozen=True)
class AuthContext:
    """Verified identity handed to protected handlers."""

    user_id: str
    email: str
    domain: str


def issue_token(
    user_id: str,
    email: str,
    domain: str,
    settings: JWTSettings,
    *,
    now: Optional[datetime] = None,
) -> str:
    """Sign a token binding *user_id*/*email* to the requesting *domain*."""
    now = now or datetime.now(timezone.utc)
    claims = {
        "userId": str(user_id),
        "email": email,
        "domain": domain,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=settings.token_ttl_seconds)).timestamp()),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: JWTSettings) -> dict[str, Any]:
    """Verify signature and expiry and return the claims.

    Raises:
        ForbiddenError: "Invalid token" for any signature, expiry or
            structural failure.
    """
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.PyJWTError as e:
        raise ForbiddenError("Invalid token") from e


def verify_token(token: str, domain: str, settings: JWTSettings) -> AuthContext:
    """Decode *token* and check that it was issued for *domain*.

    Raises:
        ForbiddenError: "Invalid token" or "Invalid domain".
    """
    claims = decode_token(token, settings)
    if claims.get("domain") != domain:
        raise ForbiddenError("Invalid domain")
    return AuthContext(
        user_id=str(claims["userId"]),
        email=str(claims["email"]),
        domain=claims["domain"],
    )


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None
