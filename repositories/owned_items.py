"""
Async access to per-user portfolio entries (experiences, educations).

Every query is scoped by the owning ``user`` id, so one user can never
read or change another user's rows.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Generic, Optional, Type, TypeVar

from pymongo import DESCENDING, ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection

from repositories.base import store_call
from schemas.models.base import MongoBaseModel, parse_object_id
from schemas.models.education import EducationDoc
from schemas.models.experience import ExperienceDoc

DocT = TypeVar("DocT", bound=MongoBaseModel)


class OwnedItemRepository(Generic[DocT]):
    model: Type[DocT]

    def __init__(self, collection: AsyncCollection) -> None:
        self._col = collection

    @store_call
    async def list_by_user(self, user_id: Any) -> list[DocT]:
        owner = parse_object_id(user_id)
        if owner is None:
            return []
        cursor = self._col.find({"user": owner}).sort("start_date", DESCENDING)
        return [self.model.from_mongo(doc) async for doc in cursor]

    @store_call
    async def create(self, item: DocT) -> DocT:
        now = datetime.now(timezone.utc)
        item = item.model_copy(update={"created_at": now, "updated_at": now})
        result = await self._col.insert_one(item.to_mongo())
        return item.model_copy(update={"id": result.inserted_id})

    @store_call
    async def update_for_user(
        self, item_id: Any, user_id: Any, fields: dict[str, Any]
    ) -> Optional[DocT]:
        oid = parse_object_id(item_id)
        owner = parse_object_id(user_id)
        if oid is None or owner is None:
            return None
        doc = await self._col.find_one_and_update(
            {"_id": oid, "user": owner},
            {"$set": {**fields, "updated_at": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
        return self.model.from_mongo(doc)

    @store_call
    async def delete_for_user(self, item_id: Any, user_id: Any) -> bool:
        oid = parse_object_id(item_id)
        owner = parse_object_id(user_id)
        if oid is None or owner is None:
            return False
        result = await self._col.delete_one({"_id": oid, "user": owner})
        return result.deleted_count == 1


class ExperienceRepository(OwnedItemRepository[ExperienceDoc]):
    model = ExperienceDoc


class EducationRepository(OwnedItemRepository[EducationDoc]):
    model = EducationDoc
