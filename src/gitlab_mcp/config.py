"""Configuration management for the GitLab MCP server."""

import os
import sys
from functools import lru_cache

from pydantic import Field, HttpUrl, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env" if os.getenv("ENVIRONMENT") != "test" else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    server_name: str = "gitlab-ce"
    server_version: str = "1.0.0"
    environment: str = "development"
    log_level: str = "INFO"

    # GitLab
    gitlab_host: HttpUrl = Field(default="https://gitlab.com", validate_default=True)
    gitlab_token: str = Field(min_length=1)
    request_timeout: float = Field(default=30.0, gt=0)

    @field_validator("gitlab_token", mode="before")
    @classmethod
    def strip_token(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @property
    def api_base(self) -> str:
        """Base URL of the REST API v4 for the configured host."""
        return f"{str(self.gitlab_host).rstrip('/')}/api/v4"


def format_validation_error(error: ValidationError) -> str:
    """Render a settings ValidationError as one line per violated field."""
    lines = ["Configuration error:"]
    for issue in error.errors():
        field = ".".join(str(part) for part in issue["loc"]) or "settings"
        lines.append(f"  - {field}: {issue['msg']}")
    return "\n".join(lines)


def load_settings() -> Settings:
    """Load settings or terminate the process with a readable report."""
    try:
        return Settings()
    except ValidationError as e:
        print(format_validation_error(e), file=sys.stderr)
        sys.exit(1)


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return load_settings()
