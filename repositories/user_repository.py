"""
Credential store: async access to the `users` collection.

Secrets are opt-in. Default reads use DEFAULT_PROJECTION, which strips the
password hash, the API key, the RSA private key and the private contact
fields; the login and API-key exchange paths ask for exactly the secret
they need. Nothing in the API reads the private contact fields back.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import DuplicateKeyError

from errors import ConflictError
from repositories.base import store_call
from schemas.models.base import parse_object_id
from schemas.models.user import RsaKeys, UserDoc
from shared.rsa_keys import KeyPair

DEFAULT_PROJECTION: dict[str, int] = {
    "password_hash": 0,
    "api_key": 0,
    "rsa_keys.private_key": 0,
    "contact.personal_email": 0,
    "contact.from_email": 0,
    "contact.send_grid_api_key": 0,
}
LOGIN_PROJECTION: dict[str, int] = {"api_key": 0, "rsa_keys": 0}
API_KEY_AUTH_PROJECTION: dict[str, int] = {"password_hash": 0}


class UserRepository:
    def __init__(self, collection: AsyncCollection) -> None:
        self._col = collection

    @store_call
    async def create(self, user: UserDoc) -> ObjectId:
        """Insert a new user; raises ConflictError when the email is taken."""
        try:
            result = await self._col.insert_one(user.to_mongo())
        except DuplicateKeyError as e:
            raise ConflictError("Email already registered", field="email") from e
        return result.inserted_id

    @store_call
    async def find_by_email(
        self, email: str, projection: Optional[dict[str, int]] = None
    ) -> Optional[UserDoc]:
        doc = await self._col.find_one(
            {"email": email}, projection or DEFAULT_PROJECTION
        )
        return UserDoc.from_mongo(doc)

    async def find_for_login(self, email: str) -> Optional[UserDoc]:
        """User with `password_hash` loaded."""
        return await self.find_by_email(email, LOGIN_PROJECTION)

    async def find_for_api_key_auth(self, email: str) -> Optional[UserDoc]:
        """User with `api_key` and the full `rsa_keys` pair loaded."""
        return await self.find_by_email(email, API_KEY_AUTH_PROJECTION)

    @store_call
    async def find_by_id(self, user_id: Any) -> Optional[UserDoc]:
        oid = parse_object_id(user_id)
        if oid is None:
            return None
        doc = await self._col.find_one({"_id": oid}, DEFAULT_PROJECTION)
        return UserDoc.from_mongo(doc)

    @store_call
    async def get_api_key(self, user_id: Any) -> Optional[str]:
        oid = parse_object_id(user_id)
        if oid is None:
            return None
        doc = await self._col.find_one({"_id": oid}, {"api_key": 1})
        return (doc or {}).get("api_key")

    @store_call
    async def set_api_key(self, user_id: Any, api_key: str) -> bool:
        """Replace the user's API key. Returns False when the user is gone."""
        oid = parse_object_id(user_id)
        if oid is None:
            return False
        try:
            result = await self._col.update_one(
                {"_id": oid},
                {"$set": {"api_key": api_key, "updated_at": _now()}},
            )
        except DuplicateKeyError as e:
            raise ConflictError("API key collision, retry the request") from e
        return result.matched_count == 1

    @store_call
    async def get_public_key(self, user_id: Any) -> Optional[str]:
        oid = parse_object_id(user_id)
        if oid is None:
            return None
        doc = await self._col.find_one({"_id": oid}, {"rsa_keys.public_key": 1})
        rsa_keys = (doc or {}).get("rsa_keys") or {}
        return rsa_keys.get("public_key")

    @store_call
    async def set_rsa_keys_if_absent(self, user_id: Any, pair: KeyPair) -> bool:
        """Store *pair* only when the user has no key pair yet.

        Returns False when another request provisioned a pair first (or the
        user does not exist).
        """
        oid = parse_object_id(user_id)
        if oid is None:
            return False
        doc = await self._col.find_one_and_update(
            {"_id": oid, "rsa_keys": None},
            {"$set": {"rsa_keys": _keys_doc(pair), "updated_at": _now()}},
            projection={"_id": 1},
            return_document=ReturnDocument.AFTER,
        )
        return doc is not None

    @store_call
    async def set_rsa_keys(self, user_id: Any, pair: KeyPair) -> bool:
        """Overwrite the user's key pair unconditionally."""
        oid = parse_object_id(user_id)
        if oid is None:
            return False
        result = await self._col.update_one(
            {"_id": oid},
            {"$set": {"rsa_keys": _keys_doc(pair), "updated_at": _now()}},
        )
        return result.matched_count == 1

    @store_call
    async def update_profile(
        self, user_id: Any, fields: dict[str, Any]
    ) -> Optional[UserDoc]:
        oid = parse_object_id(user_id)
        if oid is None:
            return None
        doc = await self._col.find_one_and_update(
            {"_id": oid},
            {"$set": {**fields, "updated_at": _now()}},
            projection=DEFAULT_PROJECTION,
            return_document=ReturnDocument.AFTER,
        )
        return UserDoc.from_mongo(doc)


def _keys_doc(pair: KeyPair) -> dict[str, str]:
    return RsaKeys(public_key=pair.public_key, private_key=pair.private_key).model_dump()


def _now() -> datetime:
    return datetime.now(timezone.utc)
