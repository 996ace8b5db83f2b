"""Async access to the `origins` collection (CORS allow-list entries)."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import DuplicateKeyError

from errors import ConflictError
from repositories.base import store_call
from schemas.models.base import parse_object_id
from schemas.models.origin import OriginDoc


class OriginRepository:
    def __init__(self, collection: AsyncCollection) -> None:
        self._col = collection

    @store_call
    async def list_all_origins(self) -> list[str]:
        """Every stored origin string, across all users."""
        values = await self._col.distinct("origin")
        return [v for v in values if isinstance(v, str) and v]

    @store_call
    async def list_by_user(self, user_id: Any) -> list[OriginDoc]:
        oid = parse_object_id(user_id)
        if oid is None:
            return []
        cursor = self._col.find({"user": oid}).sort("created_at", 1)
        return [OriginDoc.from_mongo(doc) async for doc in cursor]

    @store_call
    async def create(self, origin: OriginDoc) -> OriginDoc:
        """Insert *origin*; ConflictError when the user already registered it."""
        now = datetime.now(timezone.utc)
        origin = origin.model_copy(update={"created_at": now, "updated_at": now})
        try:
            result = await self._col.insert_one(origin.to_mongo())
        except DuplicateKeyError as e:
            raise ConflictError(
                "Origin already exists for this user", field="origin"
            ) from e
        return origin.model_copy(update={"id": result.inserted_id})

    @store_call
    async def delete_for_user(self, origin_id: Any, user_id: Any) -> bool:
        oid = parse_object_id(origin_id)
        owner = parse_object_id(user_id)
        if oid is None or owner is None:
            return False
        result = await self._col.delete_one({"_id": oid, "user": owner})
        return result.deleted_count == 1
