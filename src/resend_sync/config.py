"""Configuration management with pydantic-settings for resend-sync.

- Automatic .env file loading with proper precedence
- RESEND_ environment variable prefix
- SecretStr for the API key
- Frozen config (immutable after load)

References:
- Pydantic Settings: https://docs.pydantic.dev/latest/concepts/pydantic_settings/
"""

import logging
from functools import lru_cache

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .pagination import PaginationSettings

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_BASE_URL",
    "ResendConfig",
    "get_config",
    "reset_config",
]

DEFAULT_BASE_URL = "https://api.resend.com"


class ResendConfig(BaseSettings):
    """Configuration for the Resend list client.

    Loads from (in order of precedence):
    1. Environment variables (highest priority, RESEND_ prefix)
    2. .env file in working directory
    3. Default values (lowest priority)

    Attributes:
        api_key: Resend API key (stored as SecretStr)
        base_url: Resend API base URL
        request_interval_ms: Delay between consecutive page requests in one run
        return_all_ceiling: Item ceiling applied when every item is requested
        default_limit: Item count used when no explicit limit is given
        max_page_size: Largest page the server accepts
        timeout_seconds: Read timeout for API responses
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format (json for production, text for development)
    """

    model_config = SettingsConfigDict(
        env_prefix="RESEND_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        validate_default=True,
        frozen=True,
        extra="ignore",
    )

    api_key: SecretStr = Field(
        default=SecretStr(""),
        description="Resend API key used as Bearer token",
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Resend API base URL",
    )

    # Resend allows 2 requests/second per team
    request_interval_ms: int = Field(
        default=1000,
        ge=0,
        le=60000,
        description="Delay between page requests in milliseconds (rate limiting)",
    )

    return_all_ceiling: int = Field(
        default=1000,
        ge=1,
        le=100000,
        description="Maximum items gathered when every item is requested",
    )

    default_limit: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Items returned when no explicit limit is given",
    )

    max_page_size: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Server-side maximum page size",
    )

    timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="Read timeout for API responses in seconds",
    )

    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )

    log_format: str = Field(
        default="json",
        pattern="^(json|text)$",
        description="Log format: json (production), text (development)",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and strip the trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("RESEND_BASE_URL must start with http:// or https://")
        return v.rstrip("/")

    @model_validator(mode="after")
    def validate_limits(self) -> "ResendConfig":
        """Validate the default limit fits under the return-all ceiling."""
        if self.default_limit > self.return_all_ceiling:
            raise ValueError(
                f"RESEND_DEFAULT_LIMIT ({self.default_limit}) "
                f"must be <= RESEND_RETURN_ALL_CEILING ({self.return_all_ceiling})"
            )
        return self

    def pagination_settings(self) -> PaginationSettings:
        """Build pagination settings from this configuration."""
        return PaginationSettings(
            return_all_ceiling=self.return_all_ceiling,
            default_limit=self.default_limit,
            max_page_size=self.max_page_size,
            request_interval_ms=self.request_interval_ms,
        )


@lru_cache(maxsize=1)
def get_config() -> ResendConfig:
    """Get global configuration singleton.

    First call loads from environment + .env file, subsequent calls return
    the cached instance.

    Raises:
        ValidationError: If configuration values are invalid.

    Example:
        >>> config = get_config()
        >>> config.request_interval_ms
        1000
    """
    return ResendConfig()


def reset_config() -> None:
    """Reset configuration singleton for testing.

    Clears the lru_cache so the next get_config() call reloads from environment.
    """
    get_config.cache_clear()
