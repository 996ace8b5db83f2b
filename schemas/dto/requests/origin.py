"""
Request DTOs for allow-listed origin endpoints.

CreateOriginRequest — POST /origins
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class CreateOriginRequest(BaseModel):
    """Request body for POST /origins."""

    model_config = ConfigDict(populate_by_name=True)

    origin: str
    description: Optional[str] = None

    @field_validator("origin", mode="after")
    @classmethod
    def _origin_not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("origin is required")
        return v

    @field_validator("description", mode="after")
    @classmethod
    def _strip_description(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else None
