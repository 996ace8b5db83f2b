"""Work experience document model (`experiences` collection)."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from schemas.models.base import MongoBaseModel, PyObjectId


class ExperienceDoc(MongoBaseModel):
    role: str
    company: str
    start_date: datetime
    end_date: Optional[datetime] = None
    is_current_job: bool
    responsibilities: str
    technologies: list[str]
    user: PyObjectId
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
