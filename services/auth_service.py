"""
Credential checks and token issue.

Three ways to obtain a token, all producing the same claims and lifetime:
signup, password login, and the API-key exchange (the caller proves it
holds the user's API key by encrypting it with the user's public key).

Failures on the login paths raise a single generic AuthenticationError per
path; which factor failed is only recorded in the logs.
"""

from __future__ import annotations

import hmac
from datetime import datetime, timezone

from argon2 import PasswordHasher
from fastapi.concurrency import run_in_threadpool

from config import JWTSettings
from errors import AuthenticationError, DecryptionError
from repositories.user_repository import UserRepository
from schemas.dto.requests.user import SignupRequest
from schemas.models.user import UserDoc, normalize_email
from shared.crypto import hash_password, verify_password
from shared.logging import get_logger
from shared.rsa_keys import decrypt_with_private_key
from shared.tokens import issue_token

log = get_logger(__name__)

INVALID_LOGIN = "Invalid email or password"
INVALID_API_KEY_LOGIN = "Invalid email or API key"


class AuthService:
    def __init__(
        self,
        users: UserRepository,
        jwt_settings: JWTSettings,
        hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._jwt = jwt_settings
        self._hasher = hasher

    def _token_for(self, user: UserDoc, domain: str) -> str:
        return issue_token(str(user.id), user.email, domain, self._jwt)

    async def signup(self, body: SignupRequest, domain: str) -> tuple[str, UserDoc]:
        """Create an account and return ``(token, user)``.

        Raises:
            ConflictError: the email is already registered.
        """
        email = normalize_email(body.email)
        password_hash = await run_in_threadpool(hash_password, body.password, self._hasher)
        now = datetime.now(timezone.utc)
        user = UserDoc(
            first_name=body.first_name,
            last_name=body.last_name,
            email=email,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        user_id = await self._users.create(user)
        user = user.model_copy(update={"id": user_id, "password_hash": None})

        log.info("user_registered", user_id=str(user_id), domain=domain)
        return self._token_for(user, domain), user

    async def login(self, email: str, password: str, domain: str) -> tuple[str, UserDoc]:
        """Verify email/password and return ``(token, user)``."""
        email = normalize_email(email)
        user = await self._users.find_for_login(email)
        if user is None:
            log.warning("login_failed", reason="unknown_email")
            raise AuthenticationError(INVALID_LOGIN)

        valid = await run_in_threadpool(
            verify_password, password, user.password_hash, self._hasher
        )
        if not valid:
            log.warning("login_failed", reason="invalid_password", user_id=str(user.id))
            raise AuthenticationError(INVALID_LOGIN)

        log.info("login_success", user_id=str(user.id), auth_method="password", domain=domain)
        return self._token_for(user, domain), user.model_copy(update={"password_hash": None})

    async def login_with_api_key(
        self, email: str, encrypted_key: str, domain: str
    ) -> tuple[str, UserDoc]:
        """Decrypt *encrypted_key* with the user's private key and compare it
        to the stored API key; return ``(token, user)`` on a match."""
        email = normalize_email(email)
        user = await self._users.find_for_api_key_auth(email)
        if user is None or not user.api_key or user.rsa_keys is None or not user.rsa_keys.private_key:
            log.warning(
                "api_key_login_failed",
                reason="no_credentials",
                email_exists=user is not None,
            )
            raise AuthenticationError(INVALID_API_KEY_LOGIN)

        try:
            candidate = await run_in_threadpool(
                decrypt_with_private_key, encrypted_key, user.rsa_keys.private_key
            )
        except DecryptionError as e:
            log.warning(
                "api_key_login_failed",
                reason="decryption_failed",
                user_id=str(user.id),
                error=e.message,
            )
            raise AuthenticationError(INVALID_API_KEY_LOGIN) from e

        if not hmac.compare_digest(candidate.encode("utf-8"), user.api_key.encode("utf-8")):
            log.warning("api_key_login_failed", reason="key_mismatch", user_id=str(user.id))
            raise AuthenticationError(INVALID_API_KEY_LOGIN)

        log.info("login_success", user_id=str(user.id), auth_method="api_key", domain=domain)
        public_view = user.model_copy(update={"api_key": None, "rsa_keys": None})
        return self._token_for(user, domain), public_view
