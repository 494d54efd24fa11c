"""Application configuration using pydantic settings with structured sections."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def resolve_path(path: Path) -> Path:
    if path.is_absolute():
        return path
    return (PROJECT_ROOT / path).resolve()


class Environment(str, Enum):
    """Deployment mode, resolved once when settings are loaded."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"

    @classmethod
    def from_value(cls, value: Any) -> "Environment":
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.DEVELOPMENT
        normalized = str(value).strip().lower()
        if normalized in {"prod", "production"}:
            return cls.PRODUCTION
        return cls.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        return self is Environment.PRODUCTION


class SessionSettings(BaseModel):
    secret_key: str = Field(default="change-me-please", min_length=8)
    cookie_name: str = "portal_session"
    max_age: int = 60 * 60 * 24 * 14
    https_only: bool = False


class AssetSettings(BaseModel):
    manifest_path: Optional[Path] = None
    source_dir: Path = Path("app/web/static")
    bundle_dir: Path = Path("build/bundles")
    bundle_url: str = "/bundles"
    # None means "bundle in production, serve sources in development".
    use_bundles: Optional[bool] = None


class LoggingSettings(BaseModel):
    level: str = "INFO"
    file: Optional[Path] = None
    format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class ErrorPageSettings(BaseModel):
    title: str = "Error"
    fallback_message: str = "Erro ao processar requisição"


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Environment = Environment.DEVELOPMENT
    project_name: str = "Portal"
    api_prefix: str = "/api"
    version: str = "0.1.0"
    timezone: str = "America/Sao_Paulo"

    session: SessionSettings = SessionSettings()
    assets: AssetSettings = AssetSettings()
    logging: LoggingSettings = LoggingSettings()
    errors: ErrorPageSettings = ErrorPageSettings()

    static_dir: Path = Path("app/web/static")
    template_dir: Path = Path("app/web/templates")

    @field_validator("environment", mode="before")
    @classmethod
    def _parse_environment(cls, value: Any) -> Environment:
        return Environment.from_value(value)

    @property
    def is_production(self) -> bool:
        return self.environment.is_production

    @property
    def use_bundles(self) -> bool:
        if self.assets.use_bundles is None:
            return self.is_production
        return self.assets.use_bundles


@lru_cache()
def get_settings() -> Settings:
    return Settings()
