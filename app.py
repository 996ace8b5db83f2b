"""
FastAPI application factory.
create_app() is the single entry point for building the app.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import sentry_sdk
from fastapi import FastAPI
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.asynchronous.mongo_client import AsyncMongoClient

from config import AppSettings
from errors import register_error_handlers
from middleware.cors import DynamicCORSMiddleware
from middleware.request_logging import RequestLoggingMiddleware
from repositories import indexes
from repositories.indexes import ensure_indexes
from repositories.origin_repository import OriginRepository
from repositories.owned_items import EducationRepository, ExperienceRepository
from repositories.user_repository import UserRepository
from routes.health_routes import router as health_router
from routes.origin_routes import router as origin_router
from routes.portfolio_routes import router as portfolio_router
from routes.settings_routes import router as settings_router
from routes.user_routes import router as user_router
from shared.crypto import build_password_hasher
from shared.logging import get_logger, setup_logging

log = get_logger(__name__)


def attach_repositories(app: FastAPI, db: AsyncDatabase) -> None:
    """Expose one repository per collection on app.state."""
    app.state.db = db
    app.state.user_repository = UserRepository(db[indexes.USERS])
    app.state.origin_repository = OriginRepository(db[indexes.ORIGINS])
    app.state.experience_repository = ExperienceRepository(db[indexes.EXPERIENCES])
    app.state.education_repository = EducationRepository(db[indexes.EDUCATIONS])


def install_middleware(app: FastAPI) -> None:
    # Added last → outermost: the request logger also sees CORS rejections
    app.add_middleware(DynamicCORSMiddleware)
    app.add_middleware(RequestLoggingMiddleware)


def include_routers(app: FastAPI, prefix: str = "") -> None:
    app.include_router(health_router)
    app.include_router(user_router, prefix=prefix)
    app.include_router(settings_router, prefix=prefix)
    app.include_router(origin_router, prefix=prefix)
    app.include_router(portfolio_router, prefix=prefix)


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """Create and return a fully configured FastAPI application."""
    if settings is None:
        settings = AppSettings()

    setup_logging(
        log_level=settings.logging.log_level,
        log_format=settings.logging.log_format,
        env=settings.env,
    )

    # Initialise Sentry before anything else so it captures startup errors
    if settings.sentry.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry.sentry_dsn,
            send_default_pii=settings.sentry.sentry_send_pii,
            traces_sample_rate=settings.sentry.sentry_traces_sample_rate,
            environment=settings.env,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # ── Startup ──────────────────────────────────────────────────────────
        mongo_client: AsyncMongoClient = AsyncMongoClient(settings.db.mongodb_uri)
        app.state.mongo_client = mongo_client
        app.state.password_hasher = build_password_hasher(settings.password)
        attach_repositories(app, mongo_client[settings.db.db_name])

        await ensure_indexes(app.state.db)
        log.info("app_started", env=settings.env, db_name=settings.db.db_name)

        yield

        # ── Shutdown ─────────────────────────────────────────────────────────
        await mongo_client.close()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url=settings.docs_url,
        redoc_url=None,
        lifespan=lifespan,
    )

    app.state.settings = settings

    install_middleware(app)
    register_error_handlers(app)
    include_routers(app, prefix=settings.api_prefix)

    return app
