"""
Request DTOs for user and authentication endpoints.

SignupRequest        — POST /users/signup
LoginRequest         — POST /users/login
ApiKeyAuthRequest    — POST /users/auth/api-key
UpdateProfileRequest — PUT  /users/profile
AboutRequest, StatusRequest, InterestsPayload, SeoPayload, AnalyticsPayload,
UpdateContactRequest — the per-section settings endpoints under /users

Bodies are camelCase on the wire (``firstName``, ``encryptedKey``).
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("field is required")
    return v


class SignupRequest(_CamelModel):
    """Request body for POST /users/signup."""

    first_name: str
    last_name: str
    email: str
    password: str

    @field_validator("first_name", "last_name", mode="after")
    @classmethod
    def _name_not_empty(cls, v: str) -> str:
        return _required(v)

    @field_validator("email", mode="after")
    @classmethod
    def _email_shape(cls, v: str) -> str:
        v = _required(v).lower()
        if "@" not in v:
            raise ValueError("email is invalid")
        return v

    @field_validator("password", mode="after")
    @classmethod
    def _password_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("password is required")
        return v


class LoginRequest(_CamelModel):
    """Request body for POST /users/login."""

    email: str
    password: str

    @field_validator("email", mode="after")
    @classmethod
    def _normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class ApiKeyAuthRequest(_CamelModel):
    """Request body for POST /users/auth/api-key.

    ``encrypted_key`` is the base64 RSA-OAEP ciphertext of the user's API key,
    encrypted with the public key from ``GET /users/public-key``.
    """

    email: str
    encrypted_key: str

    @field_validator("email", mode="after")
    @classmethod
    def _normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("encrypted_key", mode="after")
    @classmethod
    def _key_not_empty(cls, v: str) -> str:
        return _required(v)


class InterestsPayload(_CamelModel):
    business_domain: list[str] = []
    programming_language: list[str] = []
    framework: list[str] = []


class SeoPayload(_CamelModel):
    title: str = ""
    description: str = ""
    keywords: list[str] = []


class AnalyticsPayload(_CamelModel):
    google_analytics_id: str = ""


class ContactPayload(_CamelModel):
    location: str = ""
    personal_email: str = ""
    from_email: str = ""
    send_grid_api_key: Optional[str] = None

    @model_validator(mode="after")
    def _required_fields(self) -> "ContactPayload":
        self.location = self.location.strip()
        self.personal_email = self.personal_email.strip().lower()
        self.from_email = self.from_email.strip().lower()
        if not (self.location and self.personal_email and self.from_email):
            raise ValueError("Location, personal email, and from email are required")
        return self


class UpdateProfileRequest(_CamelModel):
    """Request body for PUT /users/profile. Omitted fields are left unchanged."""

    about: Optional[str] = None
    status: Optional[str] = None
    interests: Optional[InterestsPayload] = None
    seo: Optional[SeoPayload] = None
    analytics: Optional[AnalyticsPayload] = None
    contact: Optional[ContactPayload] = None


class AboutRequest(_CamelModel):
    about: str


class StatusRequest(_CamelModel):
    status: str


class UpdateContactRequest(_CamelModel):
    """Request body for PUT /users/contact: ``{"contact": {...}}``."""

    contact: ContactPayload
