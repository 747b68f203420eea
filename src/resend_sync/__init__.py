"""resend-sync - Cursor pagination client for the Resend REST API.

Provides:
- Rate-limited cursor pagination over Resend list endpoints
- Async httpx client with Bearer auth
- Configuration management with environment overrides
- Payload helpers for email and template requests

Python Version: 3.10+ required
"""

# Logging Configuration - configure before other imports
from .logging_config import StructuredFormatter, configure_logging

configure_logging()

from .__version__ import __version__
from .client import ResendClient, ResendClientError
from .config import ResendConfig, get_config, reset_config
from .list_options import InvalidArgumentError, ListOptions, validate_list_options
from .pagination import (
    Cursor,
    CursorDirection,
    PaginationSettings,
    assemble_list_result,
    fetch_list,
)
from .payloads import (
    build_template_send_variables,
    normalize_email_list,
    parse_template_variables,
)
from .rate_limiter import RateLimiter

__all__ = [
    "Cursor",
    "CursorDirection",
    "InvalidArgumentError",
    "ListOptions",
    "PaginationSettings",
    "RateLimiter",
    "ResendClient",
    "ResendClientError",
    "ResendConfig",
    "StructuredFormatter",
    "__version__",
    "assemble_list_result",
    "build_template_send_variables",
    "configure_logging",
    "fetch_list",
    "get_config",
    "normalize_email_list",
    "parse_template_variables",
    "reset_config",
    "validate_list_options",
]
