"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from code_mentor.domain.exceptions import ConfigurationError

DEFAULT_IGNORED_DIRECTORIES: tuple[str, ...] = (
    "node_modules",
    ".next",
    "dist",
    "build",
    "out",
    ".git",
    "coverage",
    ".vercel",
    ".turbo",
)

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    github_token: SecretStr | None = None
    cache_enabled: bool = True
    cache_ttl_seconds: int = Field(default=300, ge=0)
    cache_sweep_interval_seconds: float = Field(default=60.0, gt=0)
    retry_count: int = Field(default=3, ge=0, le=10)
    retry_base_delay_seconds: float = Field(default=1.0, ge=0)
    request_timeout_seconds: float = Field(default=10.0, gt=0)
    max_concurrent_files: int = Field(default=5, ge=1, le=50)
    max_file_size_bytes: int = Field(default=1024 * 1024, ge=1024)
    max_files_to_analyze: int = Field(default=20, ge=1)
    max_scan_depth: int = Field(default=10, ge=1)
    max_discovered_files: int = Field(default=500, ge=1)
    ignored_directories: tuple[str, ...] = DEFAULT_IGNORED_DIRECTORIES
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return level

    @property
    def token(self) -> str | None:
        return self.github_token.get_secret_value() if self.github_token else None


def load_settings(**overrides: object) -> Settings:
    """Build settings, translating pydantic validation errors."""
    try:
        return Settings(**overrides)  # type: ignore[arg-type]
    except ValidationError as exc:
        problems = [
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
            for err in exc.errors()
        ]
        raise ConfigurationError(
            "Invalid configuration: " + "; ".join(problems),
            details={"errors": problems},
        ) from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return load_settings()
