"""
Response DTOs for experience, education and the aggregated portfolio.

ExperienceResponse / ExperienceEnvelope — /experiences
EducationResponse  / EducationEnvelope  — /educations
PortfolioResponse                       — GET /portfolio
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from schemas.dto.responses.user import InterestsResponse, SeoResponse
from schemas.models.education import EducationDoc
from schemas.models.experience import ExperienceDoc


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ExperienceResponse(_CamelModel):
    id: str
    role: str
    company: str
    start_date: datetime
    end_date: Optional[datetime] = None
    is_current_job: bool
    responsibilities: str
    technologies: list[str]

    @classmethod
    def from_doc(cls, doc: ExperienceDoc) -> "ExperienceResponse":
        return cls(id=str(doc.id), **doc.model_dump(exclude={"id", "user", "created_at", "updated_at"}))


class ExperienceEnvelope(_CamelModel):
    message: str
    experience: ExperienceResponse


class EducationResponse(_CamelModel):
    id: str
    university_name: str
    major: str
    degree: str
    start_date: datetime
    end_date: Optional[datetime] = None
    related_courseworks: list[str]
    gpa: float
    is_pursuing: bool

    @classmethod
    def from_doc(cls, doc: EducationDoc) -> "EducationResponse":
        return cls(id=str(doc.id), **doc.model_dump(exclude={"id", "user", "created_at", "updated_at"}))


class EducationEnvelope(_CamelModel):
    message: str
    education: EducationResponse


class PortfolioResponse(_CamelModel):
    first_name: str
    last_name: str
    about: str = ""
    status: str = ""
    interests: InterestsResponse = InterestsResponse()
    seo: SeoResponse = SeoResponse()
    education: list[EducationResponse] = []
    experience: list[ExperienceResponse] = []
