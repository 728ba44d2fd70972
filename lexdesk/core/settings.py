from __future__ import annotations

import json
from decimal import Decimal
from functools import lru_cache
from typing import List

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, DotEnvSettingsSource, EnvSettingsSource, SettingsConfigDict


_DEFAULT_ORIGINS = [
    "http://localhost",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


class _FallbackEnvSettingsSource(EnvSettingsSource):
    """Allow ALLOW_ORIGINS to be comma-separated instead of strict JSON."""

    def decode_complex_value(self, field_name, field, value):  # type: ignore[override]
        try:
            return super().decode_complex_value(field_name, field, value)
        except json.JSONDecodeError:
            if field_name == "allow_origins":
                return value
            raise


class _FallbackDotEnvSettingsSource(DotEnvSettingsSource):
    """Allow ALLOW_ORIGINS to be comma-separated instead of strict JSON."""

    def decode_complex_value(self, field_name, field, value):  # type: ignore[override]
        try:
            return super().decode_complex_value(field_name, field, value)
        except json.JSONDecodeError:
            if field_name == "allow_origins":
                return value
            raise


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    project_name: str = "Lexdesk API"
    project_version: str = "1.0.0"
    environment: str = Field(
        default="development",
        description="Deployment environment name",
        validation_alias=AliasChoices("ENV", "ENVIRONMENT"),
    )
    log_level: str = Field(default="INFO", description="Logging level")

    # Database
    database_url: str = Field(
        default="sqlite+pysqlite:///./lexdesk.db",
        description="SQLAlchemy database URL",
    )
    db_pool_size: int = Field(default=5, description="Base DB connection pool size")
    db_max_overflow: int = Field(default=10, description="Additional DB connections beyond pool size")
    db_pool_timeout: int = Field(default=30, description="Seconds to wait for a DB connection")
    db_pool_recycle: int = Field(default=1800, description="Recycle DB connections after N seconds")

    # Auth / JWT
    jwt_secret: str = Field(default="change_me", description="JWT signing secret")
    algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    access_token_expire_minutes: int = Field(default=24 * 60, description="Access token expiry in minutes")

    # CORS
    allow_origins: List[str] = Field(default_factory=lambda: list(_DEFAULT_ORIGINS))

    # Billing
    invoice_tax_rate: Decimal = Field(
        default=Decimal("0.10"),
        ge=Decimal("0"),
        le=Decimal("1"),
        description="Tax rate applied to the billable subtotal of every invoice",
        validation_alias=AliasChoices("INVOICE_TAX_RATE", "TAX_RATE"),
    )
    recent_activity_limit: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Default number of entries in the invoice activity feed",
    )

    @field_validator("allow_origins", mode="before")
    @classmethod
    def parse_allow_origins(cls, value: str | List[str]) -> List[str]:
        if isinstance(value, list):
            return value
        if isinstance(value, str) and value.strip():
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return list(_DEFAULT_ORIGINS)

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            _FallbackEnvSettingsSource(settings_cls),
            _FallbackDotEnvSettingsSource(settings_cls),
            file_secret_settings,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
