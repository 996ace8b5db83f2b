"""
FastAPI dependency providers.

All injectable dependencies are defined here as plain functions used with
FastAPI's Depends() system. Repositories live on app.state (built in the
app lifespan) so tests can swap them without touching the handlers.

get_current_user is the token guard applied to every protected endpoint.
"""

from __future__ import annotations

from typing import Annotated

from argon2 import PasswordHasher
from fastapi import Depends, Request

from config import AppSettings
from errors import AuthenticationError, ForbiddenError
from repositories.origin_repository import OriginRepository
from repositories.owned_items import EducationRepository, ExperienceRepository
from repositories.user_repository import UserRepository
from services.auth_service import AuthService
from services.key_service import KeyService
from services.origin_service import OriginService
from services.portfolio_service import PortfolioService
from shared.logging import get_logger
from shared.origin_utils import request_domain
from shared.tokens import AuthContext, extract_bearer_token, verify_token

log = get_logger(__name__)


def get_settings(request: Request) -> AppSettings:
    """Return the AppSettings instance stored on app.state."""
    return request.app.state.settings


def get_user_repository(request: Request) -> UserRepository:
    return request.app.state.user_repository


def get_origin_repository(request: Request) -> OriginRepository:
    return request.app.state.origin_repository


def get_experience_repository(request: Request) -> ExperienceRepository:
    return request.app.state.experience_repository


def get_education_repository(request: Request) -> EducationRepository:
    return request.app.state.education_repository


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_auth_service(
    users: Annotated[UserRepository, Depends(get_user_repository)],
    settings: Annotated[AppSettings, Depends(get_settings)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> AuthService:
    return AuthService(users, settings.jwt, hasher)


def get_key_service(
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> KeyService:
    return KeyService(users)


def get_origin_service(
    origins: Annotated[OriginRepository, Depends(get_origin_repository)],
    settings: Annotated[AppSettings, Depends(get_settings)],
) -> OriginService:
    return OriginService(origins, settings.builtin_origins)


def get_portfolio_service(
    users: Annotated[UserRepository, Depends(get_user_repository)],
    experiences: Annotated[ExperienceRepository, Depends(get_experience_repository)],
    educations: Annotated[EducationRepository, Depends(get_education_repository)],
) -> PortfolioService:
    return PortfolioService(users, experiences, educations)


def get_request_domain(request: Request) -> str:
    """Hostname of the calling front end (Origin, else Referer, else "")."""
    return request_domain(request)


def get_current_user(
    request: Request,
    settings: Annotated[AppSettings, Depends(get_settings)],
) -> AuthContext:
    """Token guard for protected endpoints.

    - no bearer token              → 401 "Authentication required"
    - bad signature / expired      → 403 "Invalid token"
    - origin hostname != token.domain → 403 "Invalid domain"
    """
    token = extract_bearer_token(request.headers.get("authorization"))
    if not token:
        raise AuthenticationError("Authentication required")
    domain = request_domain(request)
    try:
        return verify_token(token, domain, settings.jwt)
    except ForbiddenError as e:
        log.warning("token_rejected", reason=e.message, domain=domain, path=request.url.path)
        raise


CurrentUser = Annotated[AuthContext, Depends(get_current_user)]
