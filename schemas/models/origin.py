"""
Allow-listed origin document model.

Maps to the `origins` MongoDB collection. A compound unique index on
(origin, user) keeps one row per origin per owner.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from schemas.models.base import MongoBaseModel, PyObjectId


class OriginDoc(MongoBaseModel):
    """Document model for the `origins` collection."""

    origin: str
    description: Optional[str] = None
    user: PyObjectId
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
