"""
Per-section profile settings, one resource per admin screen.

All protected (Authorization: Bearer <token>, domain-bound):
    GET/PUT       /users/about
    GET/PUT       /users/status
    GET/PUT       /users/interests
    GET/PUT/POST  /users/seo
    GET/PUT       /users/analytics
    GET/PUT       /users/contact

Each PUT replaces one section of the user document through the same path
as PUT /users/profile. Contact e-mail addresses and the mail API key are
write-only: they are accepted on PUT but never returned.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from dependencies import CurrentUser, get_portfolio_service
from schemas.dto.requests.user import (
    AboutRequest,
    AnalyticsPayload,
    InterestsPayload,
    SeoPayload,
    StatusRequest,
    UpdateContactRequest,
    UpdateProfileRequest,
)
from schemas.dto.responses.common import AUTH_ERROR_RESPONSES
from schemas.dto.responses.user import (
    AboutEnvelope,
    AnalyticsEnvelope,
    AnalyticsResponse,
    ContactEnvelope,
    ContactResponse,
    InterestsEnvelope,
    InterestsResponse,
    SeoEnvelope,
    SeoResponse,
    StatusEnvelope,
)
from schemas.models.user import UserDoc
from services.portfolio_service import PortfolioService

router = APIRouter(
    prefix="/users",
    tags=["settings"],
    responses=AUTH_ERROR_RESPONSES,
)

Portfolio = Annotated[PortfolioService, Depends(get_portfolio_service)]


def _contact(user: UserDoc) -> ContactEnvelope:
    if user.contact is None:
        return ContactEnvelope()
    return ContactEnvelope(contact=ContactResponse(location=user.contact.location))


# ── About / status ───────────────────────────────────────────────────────────


@router.get("/about", response_model=AboutEnvelope, response_model_exclude_none=True)
async def get_about(current_user: CurrentUser, portfolio: Portfolio) -> AboutEnvelope:
    user = await portfolio.get_profile(current_user.user_id)
    return AboutEnvelope(about=user.about)


@router.put("/about", response_model=AboutEnvelope, response_model_exclude_none=True)
async def update_about(
    body: AboutRequest, current_user: CurrentUser, portfolio: Portfolio
) -> AboutEnvelope:
    user = await portfolio.update_profile(
        current_user.user_id, UpdateProfileRequest(about=body.about)
    )
    return AboutEnvelope(message="About updated successfully", about=user.about)


@router.get("/status", response_model=StatusEnvelope, response_model_exclude_none=True)
async def get_status(current_user: CurrentUser, portfolio: Portfolio) -> StatusEnvelope:
    user = await portfolio.get_profile(current_user.user_id)
    return StatusEnvelope(status=user.status)


@router.put("/status", response_model=StatusEnvelope, response_model_exclude_none=True)
async def update_status(
    body: StatusRequest, current_user: CurrentUser, portfolio: Portfolio
) -> StatusEnvelope:
    user = await portfolio.update_profile(
        current_user.user_id, UpdateProfileRequest(status=body.status)
    )
    return StatusEnvelope(message="Status updated successfully", status=user.status)


# ── Interests / SEO / analytics ──────────────────────────────────────────────


@router.get("/interests", response_model=InterestsEnvelope, response_model_exclude_none=True)
async def get_interests(current_user: CurrentUser, portfolio: Portfolio) -> InterestsEnvelope:
    user = await portfolio.get_profile(current_user.user_id)
    return InterestsEnvelope(interests=InterestsResponse(**user.interests.model_dump()))


@router.put("/interests", response_model=InterestsEnvelope, response_model_exclude_none=True)
async def update_interests(
    body: InterestsPayload, current_user: CurrentUser, portfolio: Portfolio
) -> InterestsEnvelope:
    user = await portfolio.update_profile(
        current_user.user_id, UpdateProfileRequest(interests=body)
    )
    return InterestsEnvelope(
        message="Interests updated successfully",
        interests=InterestsResponse(**user.interests.model_dump()),
    )


@router.get("/seo", response_model=SeoEnvelope, response_model_exclude_none=True)
async def get_seo(current_user: CurrentUser, portfolio: Portfolio) -> SeoEnvelope:
    user = await portfolio.get_profile(current_user.user_id)
    return SeoEnvelope(seo=SeoResponse(**user.seo.model_dump()))


@router.put("/seo", response_model=SeoEnvelope, response_model_exclude_none=True)
@router.post("/seo", response_model=SeoEnvelope, response_model_exclude_none=True)
async def update_seo(
    body: SeoPayload, current_user: CurrentUser, portfolio: Portfolio
) -> SeoEnvelope:
    user = await portfolio.update_profile(current_user.user_id, UpdateProfileRequest(seo=body))
    return SeoEnvelope(
        message="SEO settings updated successfully",
        seo=SeoResponse(**user.seo.model_dump()),
    )


@router.get("/analytics", response_model=AnalyticsEnvelope, response_model_exclude_none=True)
async def get_analytics(current_user: CurrentUser, portfolio: Portfolio) -> AnalyticsEnvelope:
    user = await portfolio.get_profile(current_user.user_id)
    return AnalyticsEnvelope(analytics=AnalyticsResponse(**user.analytics.model_dump()))


@router.put("/analytics", response_model=AnalyticsEnvelope, response_model_exclude_none=True)
async def update_analytics(
    body: AnalyticsPayload, current_user: CurrentUser, portfolio: Portfolio
) -> AnalyticsEnvelope:
    user = await portfolio.update_profile(
        current_user.user_id, UpdateProfileRequest(analytics=body)
    )
    return AnalyticsEnvelope(
        message="Analytics settings updated successfully",
        analytics=AnalyticsResponse(**user.analytics.model_dump()),
    )


# ── Contact ──────────────────────────────────────────────────────────────────


@router.get("/contact", response_model=ContactEnvelope, response_model_exclude_none=True)
async def get_contact(current_user: CurrentUser, portfolio: Portfolio) -> ContactEnvelope:
    user = await portfolio.get_profile(current_user.user_id)
    return _contact(user)


@router.put("/contact", response_model=ContactEnvelope, response_model_exclude_none=True)
async def update_contact(
    body: UpdateContactRequest, current_user: CurrentUser, portfolio: Portfolio
) -> ContactEnvelope:
    user = await portfolio.update_profile(
        current_user.user_id, UpdateProfileRequest(contact=body.contact)
    )
    envelope = _contact(user)
    envelope.message = "Contact information updated successfully"
    return envelope
