"""
Portfolio content owned by the authenticated user: profile settings,
experience and education entries, and the aggregated portfolio view read
by the public site.
"""

from __future__ import annotations

from typing import Any

from bson import ObjectId

from errors import NotFoundError
from repositories.owned_items import EducationRepository, ExperienceRepository
from repositories.user_repository import UserRepository
from schemas.dto.requests.resume_items import EducationRequest, ExperienceRequest
from schemas.dto.requests.user import UpdateProfileRequest
from schemas.dto.responses.resume_items import (
    EducationResponse,
    ExperienceResponse,
    PortfolioResponse,
)
from schemas.dto.responses.user import InterestsResponse, SeoResponse
from schemas.models.education import EducationDoc
from schemas.models.experience import ExperienceDoc
from schemas.models.user import UserDoc
from shared.logging import get_logger

log = get_logger(__name__)


class PortfolioService:
    def __init__(
        self,
        users: UserRepository,
        experiences: ExperienceRepository,
        educations: EducationRepository,
    ) -> None:
        self._users = users
        self._experiences = experiences
        self._educations = educations

    async def get_profile(self, user_id: str) -> UserDoc:
        user = await self._users.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def update_profile(self, user_id: str, body: UpdateProfileRequest) -> UserDoc:
        fields: dict[str, Any] = body.model_dump(exclude_none=True)
        if not fields:
            return await self.get_profile(user_id)
        user = await self._users.update_profile(user_id, fields)
        if user is None:
            raise NotFoundError("User not found")
        log.info("profile_updated", user_id=user_id, fields=sorted(fields))
        return user

    async def get_portfolio(self, user_id: str) -> PortfolioResponse:
        user = await self.get_profile(user_id)
        experiences = await self._experiences.list_by_user(user_id)
        educations = await self._educations.list_by_user(user_id)
        return PortfolioResponse(
            first_name=user.first_name,
            last_name=user.last_name,
            about=user.about,
            status=user.status,
            interests=InterestsResponse(**user.interests.model_dump()),
            seo=SeoResponse(**user.seo.model_dump()),
            education=[EducationResponse.from_doc(e) for e in educations],
            experience=[ExperienceResponse.from_doc(e) for e in experiences],
        )

    # ── Experience ───────────────────────────────────────────────────────────

    async def list_experiences(self, user_id: str) -> list[ExperienceDoc]:
        return await self._experiences.list_by_user(user_id)

    async def add_experience(self, user_id: str, body: ExperienceRequest) -> ExperienceDoc:
        doc = ExperienceDoc(user=ObjectId(user_id), **body.model_dump())
        return await self._experiences.create(doc)

    async def update_experience(
        self, user_id: str, item_id: str, body: ExperienceRequest
    ) -> ExperienceDoc:
        updated = await self._experiences.update_for_user(item_id, user_id, body.model_dump())
        if updated is None:
            raise NotFoundError("Experience not found")
        return updated

    async def delete_experience(self, user_id: str, item_id: str) -> None:
        if not await self._experiences.delete_for_user(item_id, user_id):
            raise NotFoundError("Experience not found")

    # ── Education ────────────────────────────────────────────────────────────

    async def list_educations(self, user_id: str) -> list[EducationDoc]:
        return await self._educations.list_by_user(user_id)

    async def add_education(self, user_id: str, body: EducationRequest) -> EducationDoc:
        doc = EducationDoc(user=ObjectId(user_id), **body.model_dump())
        return await self._educations.create(doc)

    async def update_education(
        self, user_id: str, item_id: str, body: EducationRequest
    ) -> EducationDoc:
        updated = await self._educations.update_for_user(item_id, user_id, body.model_dump())
        if updated is None:
            raise NotFoundError("Education not found")
        return updated

    async def delete_education(self, user_id: str, item_id: str) -> None:
        if not await self._educations.delete_for_user(item_id, user_id):
            raise NotFoundError("Education not found")
