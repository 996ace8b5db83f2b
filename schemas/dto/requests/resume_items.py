"""
Request DTOs for experience and education entries.

ExperienceRequest — POST /experiences, PUT /experiences/{id}
EducationRequest  — POST /educations,  PUT /educations/{id}
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel


class ExperienceRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    role: str
    company: str
    start_date: datetime
    end_date: Optional[datetime] = None
    is_current_job: bool
    responsibilities: str
    technologies: list[str]

    @field_validator("role", "company", "responsibilities", mode="after")
    @classmethod
    def _not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Missing required fields")
        return v


class EducationRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    university_name: str
    major: str
    degree: str
    start_date: datetime
    end_date: Optional[datetime] = None
    related_courseworks: list[str]
    gpa: float
    is_pursuing: bool

    @model_validator(mode="after")
    def _end_date_unless_pursuing(self) -> "EducationRequest":
        if not self.is_pursuing and self.end_date is None:
            raise ValueError("endDate is required unless isPursuing is true")
        return self
