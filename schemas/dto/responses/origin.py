"""
Response DTOs for allow-listed origin endpoints.

OriginResponse — one origin entry (GET /origins list, POST /origins 201)
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from schemas.models.origin import OriginDoc


class OriginResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    origin: str
    description: Optional[str] = None
    user: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_doc(cls, doc: OriginDoc) -> "OriginResponse":
        return cls(
            id=str(doc.id),
            origin=doc.origin,
            description=doc.description,
            user=str(doc.user),
            created_at=doc.created_at,
            updated_at=doc.updated_at,
        )
