"""
Collection names and index creation.

ensure_indexes() runs once at startup; create_index is idempotent, so
running it against an already-indexed database is a no-op.
"""

from __future__ import annotations

from pymongo import ASCENDING, DESCENDING
from pymongo.asynchronous.database import AsyncDatabase

from shared.logging import get_logger

log = get_logger(__name__)

USERS = "users"
ORIGINS = "origins"
EXPERIENCES = "experiences"
EDUCATIONS = "educations"


async def ensure_indexes(db: AsyncDatabase) -> None:
    await db[USERS].create_index([("email", ASCENDING)], unique=True)
    # Unique among issued keys; users without a key (null) are not indexed
    await db[USERS].create_index(
        [("api_key", ASCENDING)],
        unique=True,
        partialFilterExpression={"api_key": {"$type": "string"}},
    )

    await db[ORIGINS].create_index(
        [("origin", ASCENDING), ("user", ASCENDING)], unique=True
    )
    await db[ORIGINS].create_index([("user", ASCENDING)])

    await db[EXPERIENCES].create_index([("user", ASCENDING), ("start_date", DESCENDING)])
    await db[EDUCATIONS].create_index([("user", ASCENDING), ("start_date", DESCENDING)])

    log.info("indexes_ensured")
