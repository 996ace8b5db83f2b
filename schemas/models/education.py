"""Education document model (`educations` collection)."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from schemas.models.base import MongoBaseModel, PyObjectId


class EducationDoc(MongoBaseModel):
    university_name: str
    major: str
    degree: str
    start_date: datetime
    # Required unless the degree is still being pursued
    end_date: Optional[datetime] = None
    related_courseworks: list[str]
    gpa: float
    is_pursuing: bool
    user: PyObjectId
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
