"""
User and authentication endpoints.

Public:
    POST /users/signup        — create account, returns a token (201)
    POST /users/login         — email + password → token
    POST /users/auth/api-key  — email + RSA-encrypted API key → token
    POST /users/logout        — clears the session cookie

Protected (Authorization: Bearer <token>, domain-bound):
    GET  /users/check-auth
    GET  /users/me
    PUT  /users/profile
    GET  /users/public-key    — provisions a key pair on first call
    POST /users/public-key    — regenerates the key pair
    GET  /users/api-key       — 204 when no key has been issued
    POST /users/api-key       — regenerates the API key

Tokens are also set as an httpOnly cookie for the admin front end; the guard
itself only reads the Authorization header.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from config import AppSettings
from dependencies import (
    CurrentUser,
    get_auth_service,
    get_key_service,
    get_portfolio_service,
    get_request_domain,
    get_settings,
)
from schemas.dto.requests.user import (
    ApiKeyAuthRequest,
    LoginRequest,
    SignupRequest,
    UpdateProfileRequest,
)
from schemas.dto.responses.common import AUTH_ERROR_RESPONSES, MessageResponse
from schemas.dto.responses.user import (
    ApiKeyResponse,
    AuthResponse,
    CheckAuthResponse,
    ProfileEnvelope,
    ProfileResponse,
    PublicKeyResponse,
    UserResponse,
)
from services.auth_service import AuthService
from services.key_service import KeyService
from services.portfolio_service import PortfolioService
from shared.logging import get_logger

router = APIRouter(prefix="/users", tags=["users"], responses=AUTH_ERROR_RESPONSES)
log = get_logger(__name__)

Domain = Annotated[str, Depends(get_request_domain)]
Settings = Annotated[AppSettings, Depends(get_settings)]


def _set_session_cookie(response: Response, token: str, settings: AppSettings) -> None:
    response.set_cookie(
        settings.jwt.cookie_name,
        value=token,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        max_age=settings.jwt.token_ttl_seconds,
        path="/",
    )


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
async def signup(
    body: SignupRequest,
    response: Response,
    domain: Domain,
    settings: Settings,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    token, user = await auth.signup(body, domain)
    _set_session_cookie(response, token, settings)
    return AuthResponse(
        message="User created successfully",
        token=token,
        user=UserResponse.from_doc(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    response: Response,
    domain: Domain,
    settings: Settings,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    token, user = await auth.login(body.email, body.password, domain)
    _set_session_cookie(response, token, settings)
    return AuthResponse(
        message="Login successful", token=token, user=UserResponse.from_doc(user)
    )


@router.post("/auth/api-key", response_model=AuthResponse)
async def login_with_api_key(
    body: ApiKeyAuthRequest,
    response: Response,
    domain: Domain,
    settings: Settings,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    token, user = await auth.login_with_api_key(body.email, body.encrypted_key, domain)
    _set_session_cookie(response, token, settings)
    return AuthResponse(
        message="Login successful", token=token, user=UserResponse.from_doc(user)
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response, settings: Settings) -> MessageResponse:
    response.delete_cookie(settings.jwt.cookie_name, path="/")
    return MessageResponse(message="Logout successful")


@router.get("/check-auth", response_model=CheckAuthResponse)
async def check_auth(current_user: CurrentUser) -> CheckAuthResponse:
    return CheckAuthResponse(is_authenticated=True)


@router.get("/me", response_model=ProfileEnvelope)
async def me(
    current_user: CurrentUser,
    portfolio: Annotated[PortfolioService, Depends(get_portfolio_service)],
) -> ProfileEnvelope:
    user = await portfolio.get_profile(current_user.user_id)
    return ProfileEnvelope(user=ProfileResponse.from_doc(user))


@router.put("/profile", response_model=ProfileEnvelope)
async def update_profile(
    body: UpdateProfileRequest,
    current_user: CurrentUser,
    portfolio: Annotated[PortfolioService, Depends(get_portfolio_service)],
) -> ProfileEnvelope:
    user = await portfolio.update_profile(current_user.user_id, body)
    return ProfileEnvelope(user=ProfileResponse.from_doc(user))


@router.get("/public-key", response_model=PublicKeyResponse)
async def get_public_key(
    current_user: CurrentUser,
    keys: Annotated[KeyService, Depends(get_key_service)],
) -> PublicKeyResponse:
    public_key = await keys.get_or_create_public_key(current_user.user_id)
    return PublicKeyResponse(public_key=public_key)


@router.post("/public-key", response_model=PublicKeyResponse)
async def regenerate_public_key(
    current_user: CurrentUser,
    keys: Annotated[KeyService, Depends(get_key_service)],
) -> PublicKeyResponse:
    public_key = await keys.regenerate_key_pair(current_user.user_id)
    return PublicKeyResponse(public_key=public_key)


@router.get("/api-key", response_model=ApiKeyResponse)
async def get_api_key(
    current_user: CurrentUser,
    keys: Annotated[KeyService, Depends(get_key_service)],
):
    api_key = await keys.get_api_key(current_user.user_id)
    if not api_key:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return ApiKeyResponse(api_key=api_key)


@router.post("/api-key", response_model=ApiKeyResponse)
async def regenerate_api_key(
    current_user: CurrentUser,
    keys: Annotated[KeyService, Depends(get_key_service)],
) -> ApiKeyResponse:
    api_key = await keys.regenerate_api_key(current_user.user_id)
    return ApiKeyResponse(api_key=api_key)
