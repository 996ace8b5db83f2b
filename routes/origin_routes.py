"""
Allow-listed origin endpoints.

GET    /origins       — caller's origins (protected)
GET    /origins/all   — every stored origin string (public; used for CORS setup)
POST   /origins       — register an origin (protected, 201)
DELETE /origins/{id}  — remove one of the caller's origins (protected)
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from dependencies import CurrentUser, get_origin_service
from schemas.dto.requests.origin import CreateOriginRequest
from schemas.dto.responses.common import AUTH_ERROR_RESPONSES, MessageResponse
from schemas.dto.responses.origin import OriginResponse
from services.origin_service import OriginService

router = APIRouter(prefix="/origins", tags=["origins"], responses=AUTH_ERROR_RESPONSES)

Origins = Annotated[OriginService, Depends(get_origin_service)]


@router.get("", response_model=list[OriginResponse])
async def list_origins(current_user: CurrentUser, origins: Origins) -> list[OriginResponse]:
    docs = await origins.list_for_user(current_user.user_id)
    return [OriginResponse.from_doc(d) for d in docs]


@router.get("/all", response_model=list[str])
async def list_all_origins(origins: Origins) -> list[str]:
    return await origins.list_all()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=OriginResponse)
async def add_origin(
    body: CreateOriginRequest, current_user: CurrentUser, origins: Origins
) -> OriginResponse:
    doc = await origins.add(current_user.user_id, body)
    return OriginResponse.from_doc(doc)


@router.delete("/{origin_id}", response_model=MessageResponse)
async def delete_origin(
    origin_id: str, current_user: CurrentUser, origins: Origins
) -> MessageResponse:
    await origins.delete(current_user.user_id, origin_id)
    return MessageResponse(message="Origin deleted successfully")
