"""
Application configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file).

The token-signing secret is read once when AppSettings is built at startup
and is never mutated afterwards; handlers receive it through the settings
object stored on app.state.
"""

from __future__ import annotations

from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    mongodb_uri: str
    db_name: str = "portfolio"


class JWTSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    jwt_secret: str
    jwt_algorithm: str = "HS256"
    # Tokens are not refreshable; a new one requires re-authentication
    token_ttl_seconds: int = 86400
    cookie_name: str = "jwt"


class PasswordSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # argon2id cost parameters
    hash_time_cost: int = 3
    hash_memory_cost: int = 65536  # KiB
    hash_parallelism: int = 4


class CorsSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Built-in origins, merged with the origins stored in the database
    cors_production_origins: list[str] = []
    cors_development_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    cors_max_age: int = 600


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"
    log_format: str = "console"  # "json" in production


class SentrySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    sentry_dsn: str = ""
    sentry_send_pii: bool = False
    sentry_traces_sample_rate: float = 0.1


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Core
    env: str = "development"
    app_name: str = "portfolio-cms"

    # Prefix for every API router, e.g. "/api"
    api_prefix: str = ""

    # OpenAPI docs URL (None disables the docs UI)
    docs_url: Optional[str] = "/docs"

    # Sub-configs (composed via model_validator below)
    db: Optional[DatabaseSettings] = None
    jwt: Optional[JWTSettings] = None
    password: Optional[PasswordSettings] = None
    cors: Optional[CorsSettings] = None
    logging: Optional[LoggingSettings] = None
    sentry: Optional[SentrySettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        # Populate sub-configs from the same env/dotenv source
        if self.db is None:
            self.db = DatabaseSettings()
        if self.jwt is None:
            self.jwt = JWTSettings()
        if self.password is None:
            self.password = PasswordSettings()
        if self.cors is None:
            self.cors = CorsSettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        if self.sentry is None:
            self.sentry = SentrySettings()

        return self

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @property
    def builtin_origins(self) -> list[str]:
        """Origins always allowed for the current deployment environment."""
        if self.is_production:
            return list(self.cors.cors_production_origins)
        return list(self.cors.cors_development_origins)
