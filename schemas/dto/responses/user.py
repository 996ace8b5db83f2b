"""
Response DTOs for user and authentication endpoints.

UserResponse       — public view of a user (never carries secrets)
AuthResponse       — POST /users/signup (201), /users/login, /users/auth/api-key (200)
ProfileResponse    — GET /users/me, PUT /users/profile
PublicKeyResponse  — GET/POST /users/public-key
ApiKeyResponse     — GET/POST /users/api-key
CheckAuthResponse  — GET /users/check-auth
*Envelope          — GET/PUT /users/{about,status,interests,seo,analytics,contact}
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from schemas.models.user import UserDoc


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserResponse(_CamelModel):
    id: str
    first_name: str
    last_name: str
    email: str

    @classmethod
    def from_doc(cls, user: UserDoc) -> "UserResponse":
        return cls(
            id=str(user.id),
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
        )


class InterestsResponse(_CamelModel):
    business_domain: list[str] = []
    programming_language: list[str] = []
    framework: list[str] = []


class SeoResponse(_CamelModel):
    title: str = ""
    description: str = ""
    keywords: list[str] = []


class ProfileResponse(UserResponse):
    about: str = ""
    status: str = ""
    interests: InterestsResponse = InterestsResponse()
    seo: SeoResponse = SeoResponse()
    created_at: Optional[datetime] = None

    @classmethod
    def from_doc(cls, user: UserDoc) -> "ProfileResponse":
        return cls(
            id=str(user.id),
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            about=user.about,
            status=user.status,
            interests=InterestsResponse(**user.interests.model_dump()),
            seo=SeoResponse(**user.seo.model_dump()),
            created_at=user.created_at,
        )


class AuthResponse(_CamelModel):
    message: str
    token: str
    user: UserResponse


class ProfileEnvelope(_CamelModel):
    user: ProfileResponse


class PublicKeyResponse(_CamelModel):
    public_key: str


class ApiKeyResponse(_CamelModel):
    api_key: str


class CheckAuthResponse(_CamelModel):
    is_authenticated: bool


# ── Per-section settings (/users/about, /users/status, ...) ──────────────────
# GET returns the bare section; PUT adds a confirmation message.


class AnalyticsResponse(_CamelModel):
    google_analytics_id: str = ""


class ContactResponse(_CamelModel):
    """Public part of the contact details; the e-mail fields are write-only."""

    location: str


class AboutEnvelope(_CamelModel):
    message: Optional[str] = None
    about: str


class StatusEnvelope(_CamelModel):
    message: Optional[str] = None
    status: str


class InterestsEnvelope(_CamelModel):
    message: Optional[str] = None
    interests: InterestsResponse


class SeoEnvelope(_CamelModel):
    message: Optional[str] = None
    seo: SeoResponse


class AnalyticsEnvelope(_CamelModel):
    message: Optional[str] = None
    analytics: AnalyticsResponse


class ContactEnvelope(_CamelModel):
    message: Optional[str] = None
    contact: Optional[ContactResponse] = None
