"""
Cryptographic helpers: password hashing and API key generation.

Uses argon2id for passwords (via argon2-cffi). The hash string embeds the
algorithm parameters and a random salt, so hashes produced under an older
cost configuration keep verifying after the configuration changes.
"""

from __future__ import annotations

import secrets
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from config import PasswordSettings

_password_hasher = PasswordHasher()


def build_password_hasher(settings: Optional[PasswordSettings] = None) -> PasswordHasher:
    """Return a PasswordHasher using the configured argon2 cost parameters."""
    if settings is None:
        return _password_hasher
    return PasswordHasher(
        time_cost=settings.hash_time_cost,
        memory_cost=settings.hash_memory_cost,
        parallelism=settings.hash_parallelism,
    )


def hash_password(
    plain_password: str, hasher: Optional[PasswordHasher] = None
) -> str:
    """Hash *plain_password* with argon2id.

    Returns:
        Argon2 hash string (includes algorithm parameters and salt).
    """
    return (hasher or _password_hasher).hash(plain_password)


def verify_password(
    plain_password: str,
    password_hash: Optional[str],
    hasher: Optional[PasswordHasher] = None,
) -> bool:
    """Verify *plain_password* against an argon2 *password_hash*.

    Returns:
        ``True`` if the password matches, ``False`` for any failure
        (wrong password, missing or malformed hash).
    """
    if not password_hash:
        return False
    try:
        return (hasher or _password_hasher).verify(password_hash, plain_password)
    except (VerificationError, InvalidHashError):
        return False


def generate_api_key(num_bytes: int = 32) -> str:
    """Return a hex-encoded API key built from *num_bytes* random bytes."""
    return secrets.token_hex(num_bytes)
