"""Cursor pagination for Resend list endpoints.

Fetches pages from a list endpoint (``/emails``, ``/contacts``, ``/domains``, ...)
until the requested item count is reached or the server reports no more data,
then returns one uniform list response truncated to the exact requested size.

Pagination follows Resend's cursor model: ``limit`` (1-100) plus at most one of
``after``/``before``, each conventionally the ``id`` of the last item seen.

Reference: https://resend.com/docs/api-reference/pagination
"""

import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from .list_options import InvalidArgumentError, ListOptions, validate_list_options
from .metrics import (
    list_duration_seconds,
    list_items_total,
    list_pages_total,
    list_requests_total,
)
from .rate_limiter import DEFAULT_INTERVAL_MS, RateLimiter

logger = logging.getLogger("resend_sync.pagination")

__all__ = [
    "Cursor",
    "CursorDirection",
    "PaginationSettings",
    "RequestExecutor",
    "assemble_list_result",
    "fetch_list",
]


class RequestExecutor(Protocol):
    """Performs one authenticated HTTP call and returns the decoded JSON body.

    Any failure (network fault, timeout, non-success status) is raised and
    passed through pagination untouched.
    """

    async def __call__(
        self,
        url: str,
        method: str,
        headers: dict[str, str],
        params: dict[str, Any],
    ) -> Any: ...


class CursorDirection(str, Enum):
    """Which way a pagination run walks the collection."""

    START = "start"  # No cursor yet, first page from the top
    FORWARD = "forward"  # Paging with ``after``
    BACKWARD = "backward"  # Paging with ``before``


@dataclass(frozen=True)
class Cursor:
    """Position in a paginated collection.

    Attributes:
        direction: Paging direction
        value: Opaque cursor token (an item ID), None at START
    """

    direction: CursorDirection = CursorDirection.START
    value: str | None = None

    @classmethod
    def from_options(cls, options: ListOptions) -> "Cursor":
        if options.before:
            return cls(CursorDirection.BACKWARD, options.before)
        if options.after:
            return cls(CursorDirection.FORWARD, options.after)
        return cls()

    def advance(self, last_id: str) -> "Cursor":
        """Move past ``last_id``. START and FORWARD both continue forward."""
        if self.direction is CursorDirection.BACKWARD:
            return Cursor(CursorDirection.BACKWARD, last_id)
        return Cursor(CursorDirection.FORWARD, last_id)

    def query_params(self) -> dict[str, str]:
        if self.value is None:
            return {}
        if self.direction is CursorDirection.BACKWARD:
            return {"before": self.value}
        return {"after": self.value}


@dataclass(frozen=True)
class PaginationSettings:
    """Tunables for a pagination run.

    Attributes:
        return_all_ceiling: Absolute item ceiling when every item is requested
        default_limit: Item count used when no explicit limit is given
        max_page_size: Largest page the server accepts (Resend max is 100)
        request_interval_ms: Delay between consecutive requests
        cursor_field: Item field holding the next cursor value
        extract_cursor: Optional callable overriding ``cursor_field``
    """

    return_all_ceiling: int = 1000
    default_limit: int = 50
    max_page_size: int = 100
    request_interval_ms: int = DEFAULT_INTERVAL_MS
    cursor_field: str = "id"
    extract_cursor: Callable[[Any], str | None] | None = None

    def target_limit(
        self, return_all: bool, limit: int | None, item_index: int = 0
    ) -> int:
        """Resolve the total number of items to gather.

        An explicit limit below 1 is rejected before any request rather than
        being sent as ``limit=0``, which would quietly yield an empty list.

        Raises:
            InvalidArgumentError: If an explicit limit is below 1
        """
        if return_all:
            return self.return_all_ceiling
        if limit is None:
            return self.default_limit
        if limit < 1:
            raise InvalidArgumentError(
                f"Limit must be at least 1, got {limit}", item_index=item_index
            )
        return limit

    def page_size(self, target_limit: int) -> int:
        return min(target_limit, self.max_page_size)

    def cursor_of(self, item: Any) -> str | None:
        """Extract the next cursor value from the last item of a page."""
        if self.extract_cursor is not None:
            return self.extract_cursor(item)
        if isinstance(item, Mapping):
            return item.get(self.cursor_field)
        return None


def _page_items(response: Any) -> list[Any]:
    if isinstance(response, Mapping) and isinstance(response.get("data"), list):
        return response["data"]
    return []


def _has_more(response: Any) -> bool:
    return isinstance(response, Mapping) and bool(response.get("has_more"))


def assemble_list_result(
    last_response: Any,
    items: list[Any],
    target_limit: int,
) -> dict[str, Any]:
    """Build the uniform list response returned to callers.

    Copies the last page (keeping its server metadata such as ``object``),
    replaces ``data`` with the first ``target_limit`` accumulated items and
    forces ``has_more`` to False. Inputs are not mutated.

    Args:
        last_response: Last page received, or None if no page was fetched
        items: Items accumulated across all pages, in server order
        target_limit: Maximum number of items to return

    Returns:
        List response dict with ``data`` and ``has_more=False``
    """
    final_data = list(items[:target_limit])

    if isinstance(last_response, Mapping) and isinstance(
        last_response.get("data"), list
    ):
        result = dict(last_response)
        result["data"] = final_data
        result["has_more"] = False
        return result

    return {"object": "list", "data": final_data, "has_more": False}


async def fetch_list(
    execute: RequestExecutor,
    url: str,
    list_options: ListOptions,
    api_key: str,
    item_index: int = 0,
    return_all: bool = False,
    limit: int | None = None,
    *,
    settings: PaginationSettings | None = None,
    rate_limiter: RateLimiter | None = None,
) -> dict[str, Any]:
    """Fetch a list endpoint across as many pages as needed.

    Stops when the requested count is reached, when the server reports no more
    data or returns an empty page, or when the last item of a page carries no
    cursor. Once paging forward, the run never switches to ``before``.

    Args:
        execute: Request executor performing the HTTP call
        url: Absolute list endpoint URL
        list_options: Starting cursor (at most one of after/before)
        api_key: Resend API key, sent as Bearer token
        item_index: Batch item index reported on validation errors
        return_all: Gather every item up to the return-all ceiling
        limit: Number of items to return when return_all is False
        settings: Pagination tunables (defaults apply when None)
        rate_limiter: Limiter spacing requests (a fresh per-run one when None)

    Returns:
        List response dict with at most the requested number of items and
        ``has_more=False``

    Raises:
        InvalidArgumentError: If both cursors are supplied or limit < 1; no
            request is made
        Exception: Whatever ``execute`` raises, propagated unchanged

    Example:
        >>> result = await fetch_list(client.execute, "https://api.resend.com/emails",
        ...                           ListOptions(), api_key, limit=10)
        >>> len(result["data"])
        10
    """
    settings = settings or PaginationSettings()

    try:
        validate_list_options(list_options, item_index)
        target_limit = settings.target_limit(return_all, limit, item_index)
    except InvalidArgumentError:
        list_requests_total.labels(status="invalid").inc()
        raise

    page_size = settings.page_size(target_limit)
    limiter = rate_limiter or RateLimiter(settings.request_interval_ms)
    cursor = Cursor.from_options(list_options)
    headers = {"Authorization": f"Bearer {api_key}"}

    accumulated: list[Any] = []
    last_response: Any = None
    pages = 0
    started = time.perf_counter()

    try:
        while True:
            await limiter.wait()

            params: dict[str, Any] = {"limit": page_size, **cursor.query_params()}
            last_response = await execute(url, "GET", headers, params)
            pages += 1
            list_pages_total.inc()

            page_data = _page_items(last_response)
            accumulated.extend(page_data)

            logger.info(
                "resend_list_page",
                extra={
                    "url": url,
                    "direction": cursor.direction.value,
                    "page_items": len(page_data),
                    "total_so_far": len(accumulated),
                    "target_limit": target_limit,
                },
            )

            if len(accumulated) >= target_limit:
                break

            if not _has_more(last_response) or not page_data:
                break

            last_id = settings.cursor_of(page_data[-1])
            if not last_id:
                logger.warning(
                    "resend_list_malformed_page",
                    extra={"url": url, "total_so_far": len(accumulated)},
                )
                break

            cursor = cursor.advance(last_id)
    except Exception:
        list_requests_total.labels(status="failed").inc()
        raise

    result = assemble_list_result(last_response, accumulated, target_limit)

    list_requests_total.labels(status="success").inc()
    list_items_total.inc(len(result["data"]))
    list_duration_seconds.observe(time.perf_counter() - started)
    logger.info(
        "resend_list_complete",
        extra={
            "url": url,
            "pages": pages,
            "total_items": len(result["data"]),
        },
    )
    return result
