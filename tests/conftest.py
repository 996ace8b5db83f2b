"""
Shared test configuration.

- Disables .env loading so tests control config exclusively through
  constructor arguments and monkeypatch.setenv().
- Provides in-memory repositories with the same async interface (and the
  same secret-hiding read paths) as the MongoDB repositories.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

import pytest
from bson import ObjectId

from config import (
    AppSettings,
    CorsSettings,
    DatabaseSettings,
    JWTSettings,
    PasswordSettings,
)
from errors import ConflictError, DependencyError
from schemas.models.base import parse_object_id
from schemas.models.education import EducationDoc
from schemas.models.experience import ExperienceDoc
from schemas.models.origin import OriginDoc
from schemas.models.user import ContactInfo, RsaKeys, UserDoc

TEST_ORIGIN = "http://localhost:5173"


@pytest.fixture(autouse=True)
def disable_dotenv_loading(monkeypatch):
    """Prevent pydantic-settings from loading .env files in all tests."""
    import pydantic_settings.sources.providers.dotenv as ps_dotenv

    monkeypatch.setattr(ps_dotenv, "dotenv_values", lambda *a, **kw: {})


# ── In-memory repositories ────────────────────────────────────────────────────


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryUserRepository:
    def __init__(self) -> None:
        self.docs: dict[ObjectId, UserDoc] = {}
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            raise DependencyError("Document store unavailable")

    def _by_email(self, email: str) -> Optional[UserDoc]:
        return next((u for u in self.docs.values() if u.email == email), None)

    @staticmethod
    def _public(user: Optional[UserDoc]) -> Optional[UserDoc]:
        if user is None:
            return None
        keys = RsaKeys(public_key=user.rsa_keys.public_key) if user.rsa_keys else None
        contact = ContactInfo(location=user.contact.location) if user.contact else None
        return user.model_copy(
            update={"password_hash": None, "api_key": None, "rsa_keys": keys, "contact": contact}
        )

    async def create(self, user: UserDoc) -> ObjectId:
        self._check()
        if self._by_email(user.email) is not None:
            raise ConflictError("Email already registered", field="email")
        oid = ObjectId()
        self.docs[oid] = user.model_copy(update={"id": oid})
        return oid

    async def find_by_email(self, email: str, projection=None) -> Optional[UserDoc]:
        self._check()
        return self._public(self._by_email(email))

    async def find_for_login(self, email: str) -> Optional[UserDoc]:
        self._check()
        user = self._by_email(email)
        if user is None:
            return None
        return user.model_copy(update={"api_key": None, "rsa_keys": None})

    async def find_for_api_key_auth(self, email: str) -> Optional[UserDoc]:
        self._check()
        user = self._by_email(email)
        if user is None:
            return None
        return user.model_copy(update={"password_hash": None})

    async def find_by_id(self, user_id: Any) -> Optional[UserDoc]:
        self._check()
        return self._public(self.docs.get(parse_object_id(user_id)))

    async def get_api_key(self, user_id: Any) -> Optional[str]:
        user = self.docs.get(parse_object_id(user_id))
        return user.api_key if user else None

    async def set_api_key(self, user_id: Any, api_key: str) -> bool:
        oid = parse_object_id(user_id)
        if oid not in self.docs:
            return False
        if any(u.api_key == api_key for k, u in self.docs.items() if k != oid):
            raise ConflictError("API key collision, retry the request")
        self.docs[oid] = self.docs[oid].model_copy(update={"api_key": api_key})
        return True

    async def get_public_key(self, user_id: Any) -> Optional[str]:
        user = self.docs.get(parse_object_id(user_id))
        if user is None or user.rsa_keys is None:
            return None
        return user.rsa_keys.public_key

    async def set_rsa_keys_if_absent(self, user_id: Any, pair) -> bool:
        oid = parse_object_id(user_id)
        user = self.docs.get(oid)
        if user is None or user.rsa_keys is not None:
            return False
        return await self.set_rsa_keys(user_id, pair)

    async def set_rsa_keys(self, user_id: Any, pair) -> bool:
        oid = parse_object_id(user_id)
        if oid not in self.docs:
            return False
        keys = RsaKeys(public_key=pair.public_key, private_key=pair.private_key)
        self.docs[oid] = self.docs[oid].model_copy(update={"rsa_keys": keys})
        return True

    async def update_profile(self, user_id: Any, fields: dict[str, Any]) -> Optional[UserDoc]:
        oid = parse_object_id(user_id)
        user = self.docs.get(oid)
        if user is None:
            return None
        data = user.model_dump(by_alias=True)
        data.update(fields)
        data["updated_at"] = _now()
        self.docs[oid] = UserDoc.model_validate(data)
        return self._public(self.docs[oid])


class InMemoryOriginRepository:
    def __init__(self) -> None:
        self.rows: list[OriginDoc] = []
        self.fail = False
        self.calls = 0

    async def list_all_origins(self) -> list[str]:
        self.calls += 1
        if self.fail:
            raise DependencyError("Document store unavailable")
        return sorted({r.origin for r in self.rows})

    async def list_by_user(self, user_id: Any) -> list[OriginDoc]:
        owner = parse_object_id(user_id)
        return [r for r in self.rows if r.user == owner]

    async def create(self, origin: OriginDoc) -> OriginDoc:
        if any(r.origin == origin.origin and r.user == origin.user for r in self.rows):
            raise ConflictError("Origin already exists for this user", field="origin")
        now = _now()
        created = origin.model_copy(update={"id": ObjectId(), "created_at": now, "updated_at": now})
        self.rows.append(created)
        return created

    async def delete_for_user(self, origin_id: Any, user_id: Any) -> bool:
        oid, owner = parse_object_id(origin_id), parse_object_id(user_id)
        before = len(self.rows)
        self.rows = [r for r in self.rows if not (r.id == oid and r.user == owner)]
        return len(self.rows) < before


class InMemoryOwnedItemRepository:
    def __init__(self, model) -> None:
        self.model = model
        self.rows: dict[ObjectId, Any] = {}

    async def list_by_user(self, user_id: Any) -> list:
        owner = parse_object_id(user_id)
        items = [r for r in self.rows.values() if r.user == owner]
        return sorted(items, key=lambda r: r.start_date, reverse=True)

    async def create(self, item):
        created = item.model_copy(update={"id": ObjectId(), "created_at": _now()})
        self.rows[created.id] = created
        return created

    async def update_for_user(self, item_id: Any, user_id: Any, fields: dict[str, Any]):
        oid, owner = parse_object_id(item_id), parse_object_id(user_id)
        item = self.rows.get(oid)
        if item is None or item.user != owner:
            return None
        self.rows[oid] = item.model_copy(update=fields)
        return self.rows[oid]

    async def delete_for_user(self, item_id: Any, user_id: Any) -> bool:
        oid, owner = parse_object_id(item_id), parse_object_id(user_id)
        item = self.rows.get(oid)
        if item is None or item.user != owner:
            return False
        del self.rows[oid]
        return True


# ── Fixtures ──────────────────────────────────────────────────────────────────


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        env="development",
        db=DatabaseSettings(mongodb_uri="mongodb://localhost:27017/"),
        jwt=JWTSettings(jwt_secret="test-secret-with-enough-length-for-hs256"),
        # Minimal argon2 cost keeps the suite fast
        password=PasswordSettings(hash_time_cost=1, hash_memory_cost=8, hash_parallelism=1),
        cors=CorsSettings(cors_development_origins=[TEST_ORIGIN]),
    )


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def origin_repo() -> InMemoryOriginRepository:
    return InMemoryOriginRepository()


@pytest.fixture
def experience_repo() -> InMemoryOwnedItemRepository:
    return InMemoryOwnedItemRepository(ExperienceDoc)


@pytest.fixture
def education_repo() -> InMemoryOwnedItemRepository:
    return InMemoryOwnedItemRepository(EducationDoc)
