"""
Per-user key material: the RSA key pair and the API key.

Both are created lazily. Regenerating either one replaces the stored
value outright; ciphertexts made with an old public key, and the old API
key itself, stop authenticating as soon as the write lands.
"""

from __future__ import annotations

from typing import Optional

from fastapi.concurrency import run_in_threadpool

from errors import NotFoundError
from repositories.user_repository import UserRepository
from shared.crypto import generate_api_key
from shared.logging import get_logger
from shared.rsa_keys import generate_key_pair

log = get_logger(__name__)


class KeyService:
    def __init__(self, users: UserRepository) -> None:
        self._users = users

    async def get_or_create_public_key(self, user_id: str) -> str:
        """Return the user's public key, provisioning a pair on first use."""
        existing = await self._users.get_public_key(user_id)
        if existing:
            return existing

        pair = await run_in_threadpool(generate_key_pair)
        if await self._users.set_rsa_keys_if_absent(user_id, pair):
            log.info("rsa_keys_provisioned", user_id=user_id)
            return pair.public_key

        # Lost a race with a concurrent provisioner, or the user is gone
        existing = await self._users.get_public_key(user_id)
        if existing:
            return existing
        raise NotFoundError("User not found")

    async def regenerate_key_pair(self, user_id: str) -> str:
        """Replace the user's key pair and return the new public key."""
        pair = await run_in_threadpool(generate_key_pair)
        if not await self._users.set_rsa_keys(user_id, pair):
            raise NotFoundError("User not found")
        log.info("rsa_keys_regenerated", user_id=user_id)
        return pair.public_key

    async def get_api_key(self, user_id: str) -> Optional[str]:
        return await self._users.get_api_key(user_id)

    async def regenerate_api_key(self, user_id: str) -> str:
        api_key = generate_api_key()
        if not await self._users.set_api_key(user_id, api_key):
            raise NotFoundError("User not found")
        log.info("api_key_regenerated", user_id=user_id)
        return api_key
