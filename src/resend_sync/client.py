"""Resend REST API client.

Provides async httpx-based client for the Resend API with Bearer auth.
List endpoints are paginated through ``fetch_list`` with cursor pagination
and a fixed inter-request delay.

Reference: https://resend.com/docs/api-reference/introduction
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from .__version__ import __version__
from .config import DEFAULT_BASE_URL, ResendConfig
from .list_options import ListOptions
from .pagination import PaginationSettings, fetch_list

logger = logging.getLogger("resend_sync.client")

# Resend caps list pages at 100 items
DROPDOWN_PAGE_SIZE = 100


class ResendClientError(Exception):
    """Raised when a Resend API request fails.

    Wraps httpx timeouts, transport errors and non-success HTTP statuses.
    """

    pass


class ResendClient:
    """Resend REST API client using httpx with Bearer auth.

    Uses long-lived httpx.AsyncClient with connection pooling. The client's
    ``execute`` coroutine is the request executor used for every page of a
    paginated list call.

    Attributes:
        base_url: Resend API base URL (default: https://api.resend.com)
        pagination_settings: Limits and delay applied to list calls
        client: Underlying httpx.AsyncClient

    Example:
        >>> async with ResendClient("re_123") as client:
        ...     result = await client.list_items("/emails", return_all=True)
        ...     print(len(result["data"]))
    """

    CONNECT_TIMEOUT = 5.0  # seconds
    READ_TIMEOUT = 30.0  # seconds
    WRITE_TIMEOUT = 5.0  # seconds
    POOL_TIMEOUT = 5.0  # seconds

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        pagination_settings: PaginationSettings | None = None,
        read_timeout: float = READ_TIMEOUT,
    ) -> None:
        """Initialize Resend client with API key authentication.

        Args:
            api_key: Resend API key (``re_...``)
            base_url: Resend API base URL (default: https://api.resend.com)
            pagination_settings: Pagination tunables (defaults apply when None)
            read_timeout: Read timeout for API responses in seconds
        """
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.pagination_settings = pagination_settings or PaginationSettings()
        self._api_key = api_key

        timeout_config = httpx.Timeout(
            connect=self.CONNECT_TIMEOUT,
            read=read_timeout,
            write=self.WRITE_TIMEOUT,
            pool=self.POOL_TIMEOUT,
        )

        limits = httpx.Limits(
            max_keepalive_connections=10,
            max_connections=20,
            keepalive_expiry=10.0,
        )

        self.client = httpx.AsyncClient(
            timeout=timeout_config,
            limits=limits,
            headers={
                "Accept": "application/json",
                "User-Agent": f"resend-sync/{__version__}",
            },
        )

    @classmethod
    def from_config(cls, config: ResendConfig) -> "ResendClient":
        """Create a client from loaded configuration.

        Raises:
            ValueError: If no API key is configured
        """
        api_key = config.api_key.get_secret_value()
        if not api_key:
            raise ValueError("RESEND_API_KEY is required")
        return cls(
            api_key=api_key,
            base_url=config.base_url,
            pagination_settings=config.pagination_settings(),
            read_timeout=config.timeout_seconds,
        )

    @property
    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"}

    # --- Core HTTP Methods ---

    async def execute(
        self,
        url: str,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
    ) -> Any:
        """Perform one HTTP call and return the decoded JSON body.

        No retries: every failure is raised to the caller.

        Args:
            url: Absolute request URL
            method: HTTP method
            headers: Per-request headers (Authorization is supplied here)
            params: Query parameters
            json_body: Optional JSON request body

        Returns:
            Decoded JSON response, or None for an empty body

        Raises:
            ResendClientError: On timeout, transport error, non-2xx status or
                an undecodable body
        """
        try:
            response = await self.client.request(
                method,
                url,
                headers=headers,
                params=params,
                json=json_body,
            )
            response.raise_for_status()
            if not response.content:
                return None
            return response.json()
        except httpx.TimeoutException as e:
            logger.error(
                "resend_request_timeout",
                extra={"url": url, "method": method, "error": str(e)},
            )
            raise ResendClientError("RESEND_REQUEST_TIMEOUT") from e
        except httpx.HTTPStatusError as e:
            logger.error(
                "resend_request_failed",
                extra={
                    "url": url,
                    "method": method,
                    "status_code": e.response.status_code,
                    "error": str(e),
                },
            )
            raise ResendClientError(
                f"RESEND_REQUEST_ERROR: HTTP {e.response.status_code}: {e}"
            ) from e
        except httpx.HTTPError as e:
            logger.error(
                "resend_request_error",
                extra={"url": url, "method": method, "error": str(e)},
            )
            raise ResendClientError(f"RESEND_REQUEST_ERROR: {e}") from e
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors
            logger.error(
                "resend_request_invalid_json",
                extra={"url": url, "method": method, "error": str(e)},
            )
            raise ResendClientError("RESEND_REQUEST_ERROR: invalid JSON body") from e

    async def request(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an authenticated request relative to the base URL.

        Args:
            method: HTTP method
            endpoint: API path (e.g., /emails)
            body: Optional JSON body
            params: Optional query parameters

        Returns:
            Decoded JSON response

        Raises:
            ResendClientError: If the request fails
        """
        return await self.execute(
            f"{self.base_url}{endpoint}",
            method,
            headers=self.auth_headers,
            params=params,
            json_body=body,
        )

    # --- Endpoints ---

    async def test_connection(self) -> dict[str, Any]:
        """Test Resend API connectivity and authentication.

        Sends GET request to /domains to verify the API key.

        Returns:
            dict with keys:
                - success (bool): True if authenticated successfully
                - domains (int | None): Number of domains on the first page
                - error (str | None): Error message if failed
        """
        try:
            data = await self.request("GET", "/domains")
        except ResendClientError as e:
            return {"success": False, "domains": None, "error": str(e)}
        domains = data.get("data", []) if isinstance(data, dict) else []
        return {"success": True, "domains": len(domains), "error": None}

    async def list_items(
        self,
        endpoint: str,
        list_options: ListOptions | None = None,
        item_index: int = 0,
        return_all: bool = False,
        limit: int | None = None,
    ) -> dict[str, Any]:
        """List a collection endpoint with cursor pagination.

        Args:
            endpoint: API path of a list endpoint (e.g., /contacts)
            list_options: Starting cursor (at most one of after/before)
            item_index: Batch item index reported on validation errors
            return_all: Gather every item up to the configured ceiling
            limit: Number of items to return when return_all is False

        Returns:
            List response dict with ``data`` and ``has_more=False``

        Raises:
            InvalidArgumentError: If both cursors are supplied
            ResendClientError: If any page request fails
        """
        return await fetch_list(
            self.execute,
            f"{self.base_url}{endpoint}",
            list_options or ListOptions(),
            self._api_key,
            item_index,
            return_all,
            limit,
            settings=self.pagination_settings,
        )

    async def load_dropdown_options(self, endpoint: str) -> list[dict[str, str]]:
        """Load a single page of items as name/value options.

        Items without an ``id`` are skipped. Names read ``"Name (id)"`` when the
        item has a name, else just the id.

        Args:
            endpoint: API path of a list endpoint (e.g., /templates)

        Returns:
            List of ``{"name": ..., "value": ...}`` dicts
        """
        response = await self.request(
            "GET", endpoint, params={"limit": DROPDOWN_PAGE_SIZE}
        )
        if not isinstance(response, dict):
            return []
        items = response.get("data") or []

        options = []
        for item in items:
            if not isinstance(item, dict) or not item.get("id"):
                continue
            name = f"{item['name']} ({item['id']})" if item.get("name") else item["id"]
            options.append({"name": name, "value": item["id"]})
        return options

    async def get_templates(self) -> list[dict[str, str]]:
        return await self.load_dropdown_options("/templates")

    async def get_segments(self) -> list[dict[str, str]]:
        return await self.load_dropdown_options("/segments")

    async def get_topics(self) -> list[dict[str, str]]:
        return await self.load_dropdown_options("/topics")

    async def get_template_variables(
        self, template_id: str | None
    ) -> list[dict[str, str]]:
        """List the variables declared by a template.

        Blank IDs and unresolved expressions (containing ``{{``) yield an
        empty list without calling the API.

        Args:
            template_id: Template ID or alias

        Returns:
            List of ``{"name": "key (type)", "value": key}`` dicts
        """
        if not template_id or not template_id.strip():
            return []
        normalized = template_id.strip()
        if "{{" in normalized:
            return []

        response = await self.request(
            "GET", f"/templates/{quote(normalized, safe='')}"
        )
        if not isinstance(response, dict):
            return []
        variables = response.get("variables") or []

        options = []
        for variable in variables:
            if not isinstance(variable, dict) or not variable.get("key"):
                continue
            type_label = f" ({variable['type']})" if variable.get("type") else ""
            options.append(
                {"name": f"{variable['key']}{type_label}", "value": variable["key"]}
            )
        return options

    async def close(self) -> None:
        """Close the HTTP client connection."""
        if hasattr(self, "client") and self.client is not None:
            await self.client.aclose()

    async def __aenter__(self) -> "ResendClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
