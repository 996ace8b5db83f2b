"""
Allow-listed origins: per-user management and the CORS allow-list.

The allow-list is recomputed for every cross-origin request as the union
of all stored origins and the built-in origins of the deployment
environment. It only decides whether browsers may call the API; token
domain binding is checked separately for each protected request.
"""

from __future__ import annotations

from urllib.parse import urlsplit, urlunsplit

from errors import NotFoundError
from repositories.origin_repository import OriginRepository
from schemas.dto.requests.origin import CreateOriginRequest
from schemas.models.base import parse_object_id
from schemas.models.origin import OriginDoc
from shared.logging import get_logger

log = get_logger(__name__)


def normalize_origin(origin: str) -> str:
    """Origins are compared without surrounding whitespace or a trailing slash,
    with the scheme and host lower-cased."""
    origin = origin.strip().rstrip("/")
    parts = urlsplit(origin)
    if not parts.scheme or not parts.netloc:
        return origin
    return urlunsplit(parts._replace(scheme=parts.scheme.lower(), netloc=parts.netloc.lower()))


class OriginService:
    def __init__(self, origins: OriginRepository, builtin_origins: list[str]) -> None:
        self._origins = origins
        self._builtin = [normalize_origin(o) for o in builtin_origins]

    async def allowed_origins(self) -> set[str]:
        """Stored origins ∪ built-in origins.

        Raises:
            DependencyError: the store could not be read; callers must deny.
        """
        stored = await self._origins.list_all_origins()
        return {normalize_origin(o) for o in stored} | set(self._builtin)

    async def is_allowed(self, origin: str) -> bool:
        return normalize_origin(origin) in await self.allowed_origins()

    async def list_for_user(self, user_id: str) -> list[OriginDoc]:
        return await self._origins.list_by_user(user_id)

    async def list_all(self) -> list[str]:
        return await self._origins.list_all_origins()

    async def add(self, user_id: str, body: CreateOriginRequest) -> OriginDoc:
        """Register an origin for *user_id*.

        Raises:
            ConflictError: the user already registered this origin.
        """
        doc = OriginDoc(
            origin=normalize_origin(body.origin),
            description=body.description,
            user=parse_object_id(user_id),
        )
        created = await self._origins.create(doc)
        log.info("origin_added", user_id=user_id, origin=created.origin)
        return created

    async def delete(self, user_id: str, origin_id: str) -> None:
        if not await self._origins.delete_for_user(origin_id, user_id):
            raise NotFoundError("Origin not found")
        log.info("origin_deleted", user_id=user_id, origin_id=origin_id)
