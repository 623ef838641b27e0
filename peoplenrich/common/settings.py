# peoplenrich/common/settings.py
from __future__ import annotations

from functools import lru_cache
from typing import List, Optional
from pydantic import BaseModel, Field, AliasChoices, field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    return s in {"1", "true", "yes", "y", "on"}


class APIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080
    prefix: str = "/api"

    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "OPTIONS"])
    cors_allow_headers: List[str] = Field(
        default_factory=lambda: ["Accept", "Authorization", "Content-Type", "X-CSRF-Token"]
    )
    cors_expose_headers: List[str] = Field(default_factory=lambda: ["Link"])
    cors_allow_credentials: bool = False
    cors_max_age: int = 300


class DBConfig(BaseModel):
    driver: str = "postgresql+psycopg"
    host: str = "localhost"
    port: int = 5432
    name: str = "peopledb"
    user: str = "postgres"
    password: str = ""
    echo: bool = False
    pool_size: int = 10
    max_overflow: int = 20
    pool_pre_ping: bool = True
    pool_recycle: int = 1800

    # startup bootstrap
    create_tables: bool = False
    connect_timeout_sec: float = 15.0
    connect_interval_sec: float = 2.0

    @field_validator("echo", "pool_pre_ping", "create_tables", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v)

    @computed_field  # type: ignore[misc]
    @property
    def composed_url(self) -> str:
        return f"{self.driver}://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"


class EnrichmentConfig(BaseModel):
    age_url: str = "https://api.agify.io"
    gender_url: str = "https://api.genderize.io"
    nationality_url: str = "https://api.nationalize.io"
    timeout_sec: float = Field(10.0, gt=0, description="Deadline for a single outbound lookup")


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "peoplenrich"
    app_env: str = "development"  # development|test|staging|production
    log_level: str = "INFO"

    # Optional single URL (if set, it takes precedence over DB__* parts)
    database_url_override: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "database_url"),
    )

    # -------- Search defaults --------
    search_default_limit: int = Field(10, ge=1)
    search_age_min: int = Field(0, ge=0)
    search_age_max: int = Field(200, ge=0)

    # -------- Sub-configs --------
    api: APIConfig = APIConfig()
    db: DBConfig = DBConfig()
    enrichment: EnrichmentConfig = EnrichmentConfig()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # ===== Convenience: DB URL =====
    @computed_field  # type: ignore[misc]
    @property
    def database_url(self) -> str:
        return self.database_url_override or self.db.composed_url


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from peoplenrich.common.settings import get_settings
        cfg = get_settings()
    """
    return Settings()  # pydantic_settings will read from .env automatically
