"""
User document model.

Maps to the `users` MongoDB collection. One document per account.

Signup stores only identity and the password hash; `api_key` and
`rsa_keys` are filled in lazily by their generation endpoints. The default
repository projection strips `password_hash`, `api_key`,
`rsa_keys.private_key` and the private contact fields, so a UserDoc loaded
for display never carries them.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from schemas.models.base import MongoBaseModel


class RsaKeys(BaseModel):
    """PEM-encoded key pair used for the API key exchange."""

    public_key: str
    private_key: Optional[str] = None


class Interests(BaseModel):
    business_domain: list[str] = []
    programming_language: list[str] = []
    framework: list[str] = []


class SeoSettings(BaseModel):
    title: str = ""
    description: str = ""
    keywords: list[str] = []


class AnalyticsSettings(BaseModel):
    google_analytics_id: str = ""


class ContactInfo(BaseModel):
    """Contact details; the e-mail addresses and mail API key are write-only."""

    location: str
    personal_email: Optional[str] = None
    from_email: Optional[str] = None
    send_grid_api_key: Optional[str] = None


class UserDoc(MongoBaseModel):
    """Document model for the `users` collection."""

    first_name: str
    last_name: str
    email: str
    password_hash: Optional[str] = None
    api_key: Optional[str] = None
    rsa_keys: Optional[RsaKeys] = None
    about: str = ""
    status: str = ""
    interests: Interests = Interests()
    seo: SeoSettings = SeoSettings()
    analytics: AnalyticsSettings = AnalyticsSettings()
    contact: Optional[ContactInfo] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def normalize_email(email: str) -> str:
    """Emails are stored trimmed and lower-cased."""
    return email.strip().lower()
