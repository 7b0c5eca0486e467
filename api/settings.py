"""
Application settings using pydantic-settings for type-safe configuration.

All environment variables are centralized here with proper typing, validation,
and sensible defaults. Settings are loaded once at startup and cached.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


def _is_docker_environment() -> bool:
    """Detect if running inside a Docker container."""
    if Path("/.dockerenv").exists():
        return True
    try:
        with open("/proc/1/cgroup") as f:
            return "docker" in f.read()
    except (FileNotFoundError, PermissionError):
        pass
    return False


def _is_github_actions() -> bool:
    """True only when BOTH CI=true AND GITHUB_ACTIONS=true are set."""
    return os.getenv("CI") == "true" and os.getenv("GITHUB_ACTIONS") == "true"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Defaults suit local development against a PocketBase on 127.0.0.1:8090.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    # === Authentication ===
    auth_mode: str = Field(
        default="production",
        description="Authentication mode: 'production' (token validation) or 'bypass' (dev only)",
    )
    skip_pb_auth: bool = Field(
        default=False,
        description="Skip PocketBase superuser authentication on startup (for testing)",
    )

    # === PocketBase ===
    pocketbase_url: str = Field(default="http://127.0.0.1:8090", description="PocketBase server URL")
    pocketbase_admin_email: str = Field(
        default="admin@hoopcamps.local",
        description="PocketBase superuser email for API authentication",
    )
    pocketbase_admin_password: str = Field(
        default="",
        description="PocketBase superuser password (required - no default for security)",
    )

    # === CORS ===
    allowed_origins_str: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        alias="ALLOWED_ORIGINS",
        description="Allowed CORS origins for the main API (comma-separated)",
    )

    # === E-mail ===
    resend_api_key: str = Field(default="", description="Resend API key")
    resend_api_url: str = Field(default="https://api.resend.com/emails")
    email_from: str = Field(default="Basketball Camps <onboarding@resend.dev>")
    review_email_from: str = Field(default="noreply@basketballcamps.com")
    admin_email: str = Field(
        default="basketballcamps2025@gmail.com",
        description="Receives new-submission notices; CC'd on booking e-mails",
    )
    public_site_url: str = Field(default="http://localhost:5173", description="Base URL for links in e-mails")
    functions_url: str = Field(
        default="http://127.0.0.1:8000/functions/v1",
        description="Base URL of the notification functions",
    )
    functions_secret: str = Field(
        default="",
        description="Shared secret the API sends to the notification functions (X-Functions-Secret)",
    )

    # === Submissions ===
    storage_bucket: str = Field(default="camp-images")
    max_images_per_submission: int = Field(default=50, ge=1)
    max_image_bytes: int = Field(default=10 * 1024 * 1024, ge=1)
    max_description_length: int = Field(default=10000, ge=1)
    min_commission_rate: float = Field(default=0.05, description="Minimum commission as a fraction of price")

    # === Owner dashboard ===
    owner_dashboard_timeout_seconds: float = Field(default=5.0, gt=0)

    # === Docker Detection ===
    is_docker: bool = Field(default=False, description="Whether running in Docker container")
    docker_container: bool = Field(default=False, description="Explicit Docker container flag")

    @property
    def allowed_origins(self) -> list[str]:
        """Parse comma-separated origins string into list."""
        return [origin.strip() for origin in self.allowed_origins_str.split(",") if origin.strip()]

    @field_validator("pocketbase_admin_password", mode="after")
    @classmethod
    def validate_admin_password(cls, v: str) -> str:
        """Warn when the superuser password is unset or an insecure default."""
        insecure_defaults = {"password", "admin", "123456", ""}
        if v in insecure_defaults:
            logger.warning(
                "SECURITY WARNING: POCKETBASE_ADMIN_PASSWORD is not set or uses an insecure default. "
                "Set a strong password in your .env file for production use."
            )
        return v

    @field_validator("auth_mode", mode="after")
    @classmethod
    def validate_auth_mode(cls, v: str) -> str:
        v = v.lower()
        if v not in ("bypass", "production"):
            raise ValueError(f"Invalid AUTH_MODE: {v}. Must be 'bypass' or 'production'")
        return v

    @field_validator("min_commission_rate", mode="after")
    @classmethod
    def validate_commission_rate(cls, v: float) -> float:
        if not 0 < v < 1:
            raise ValueError(f"MIN_COMMISSION_RATE must be between 0 and 1, got {v}")
        return v

    @field_validator("is_docker", mode="before")
    @classmethod
    def parse_is_docker(cls, v: str | bool) -> bool:
        """Parse IS_DOCKER env var which can be 'true', '1', 'yes', etc."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.lower() in ("true", "1", "yes")
        return False

    def is_docker_environment(self) -> bool:
        return self.is_docker or self.docker_container or _is_docker_environment()

    def get_effective_auth_mode(self) -> str:
        """Force production inside Docker, except in GitHub Actions CI."""
        if self.is_docker_environment() and not _is_github_actions():
            return "production"
        return self.auth_mode


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once and cached for the lifetime of the application.
    """
    return Settings()
