"""
Portfolio content endpoints (all protected, scoped to the caller).

GET/POST        /experiences, PUT/DELETE /experiences/{id}
GET/POST        /educations,  PUT/DELETE /educations/{id}
GET             /portfolio     — aggregated view for the public site
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from dependencies import CurrentUser, get_portfolio_service
from schemas.dto.requests.resume_items import EducationRequest, ExperienceRequest
from schemas.dto.responses.common import AUTH_ERROR_RESPONSES, MessageResponse
from schemas.dto.responses.resume_items import (
    EducationEnvelope,
    EducationResponse,
    ExperienceEnvelope,
    ExperienceResponse,
    PortfolioResponse,
)
from services.portfolio_service import PortfolioService

router = APIRouter(tags=["portfolio"], responses=AUTH_ERROR_RESPONSES)

Portfolio = Annotated[PortfolioService, Depends(get_portfolio_service)]


@router.get("/portfolio", response_model=PortfolioResponse)
async def get_portfolio(current_user: CurrentUser, portfolio: Portfolio) -> PortfolioResponse:
    return await portfolio.get_portfolio(current_user.user_id)


# ── Experiences ──────────────────────────────────────────────────────────────


@router.get("/experiences", response_model=list[ExperienceResponse])
async def list_experiences(
    current_user: CurrentUser, portfolio: Portfolio
) -> list[ExperienceResponse]:
    docs = await portfolio.list_experiences(current_user.user_id)
    return [ExperienceResponse.from_doc(d) for d in docs]


@router.post(
    "/experiences", status_code=status.HTTP_201_CREATED, response_model=ExperienceEnvelope
)
async def create_experience(
    body: ExperienceRequest, current_user: CurrentUser, portfolio: Portfolio
) -> ExperienceEnvelope:
    doc = await portfolio.add_experience(current_user.user_id, body)
    return ExperienceEnvelope(
        message="Experience created successfully",
        experience=ExperienceResponse.from_doc(doc),
    )


@router.put("/experiences/{item_id}", response_model=ExperienceEnvelope)
async def update_experience(
    item_id: str, body: ExperienceRequest, current_user: CurrentUser, portfolio: Portfolio
) -> ExperienceEnvelope:
    doc = await portfolio.update_experience(current_user.user_id, item_id, body)
    return ExperienceEnvelope(
        message="Experience updated successfully",
        experience=ExperienceResponse.from_doc(doc),
    )


@router.delete("/experiences/{item_id}", response_model=MessageResponse)
async def delete_experience(
    item_id: str, current_user: CurrentUser, portfolio: Portfolio
) -> MessageResponse:
    await portfolio.delete_experience(current_user.user_id, item_id)
    return MessageResponse(message="Experience deleted successfully")


# ── Educations ───────────────────────────────────────────────────────────────


@router.get("/educations", response_model=list[EducationResponse])
async def list_educations(
    current_user: CurrentUser, portfolio: Portfolio
) -> list[EducationResponse]:
    docs = await portfolio.list_educations(current_user.user_id)
    return [EducationResponse.from_doc(d) for d in docs]


@router.post(
    "/educations", status_code=status.HTTP_201_CREATED, response_model=EducationEnvelope
)
async def create_education(
    body: EducationRequest, current_user: CurrentUser, portfolio: Portfolio
) -> EducationEnvelope:
    doc = await portfolio.add_education(current_user.user_id, body)
    return EducationEnvelope(
        message="Education created successfully",
        education=EducationResponse.from_doc(doc),
    )


@router.put("/educations/{item_id}", response_model=EducationEnvelope)
async def update_education(
    item_id: str, body: EducationRequest, current_user: CurrentUser, portfolio: Portfolio
) -> EducationEnvelope:
    doc = await portfolio.update_education(current_user.user_id, item_id, body)
    return EducationEnvelope(
        message="Education updated successfully",
        education=EducationResponse.from_doc(doc),
    )


@router.delete("/educations/{item_id}", response_model=MessageResponse)
async def delete_education(
    item_id: str, current_user: CurrentUser, portfolio: Portfolio
) -> MessageResponse:
    await portfolio.delete_education(current_user.user_id, item_id)
    return MessageResponse(message="Education deleted successfully")
