"""Payload shaping helpers for Resend email and template requests."""

from collections.abc import Mapping
from typing import Any

from .list_options import InvalidArgumentError

__all__ = [
    "build_template_send_variables",
    "normalize_email_list",
    "parse_template_variables",
]


def normalize_email_list(value: Any) -> list[str]:
    """Normalize a recipient field into a list of addresses.

    Accepts a comma-separated string or a list. Entries are trimmed and blanks
    dropped; any other type yields an empty list.

    Example:
        >>> normalize_email_list("a@example.com, b@example.com,")
        ['a@example.com', 'b@example.com']
    """
    if isinstance(value, list):
        emails = (str(email).strip() for email in value)
    elif isinstance(value, str):
        emails = (email.strip() for email in value.split(","))
    else:
        return []
    return [email for email in emails if email]


def parse_template_variables(
    variables_input: Mapping[str, Any] | None,
    fallback_key: str = "fallbackValue",
    item_index: int = 0,
) -> list[dict[str, Any]] | None:
    """Convert template variable definitions into API entries.

    Each ``{"key", "type", "fallbackValue"}`` entry becomes ``{"key", "type"}``
    plus the fallback under ``fallback_key`` when one is set. Number-typed
    fallbacks are coerced to numbers.

    Args:
        variables_input: ``{"variables": [...]}`` collection, or None
        fallback_key: Output key for the fallback (``fallbackValue`` or
            ``fallback_value`` depending on endpoint)
        item_index: Batch item index reported on failure

    Returns:
        List of variable entries, or None when there are none

    Raises:
        InvalidArgumentError: If a number-typed fallback is not numeric
    """
    variables = (variables_input or {}).get("variables") or []
    if not variables:
        return None

    entries = []
    for variable in variables:
        entry: dict[str, Any] = {"key": variable.get("key"), "type": variable.get("type")}

        fallback = variable.get("fallbackValue")
        if fallback is not None and fallback != "":
            if variable.get("type") == "number":
                fallback = _to_number(fallback, variable.get("key"), item_index)
            entry[fallback_key] = fallback

        entries.append(entry)
    return entries


def _to_number(value: Any, key: str | None, item_index: int) -> int | float:
    if isinstance(value, (int, float)):
        return value
    try:
        number = float(str(value).strip())
    except ValueError:
        raise InvalidArgumentError(
            f'Variable "{key}" fallback value must be a number',
            item_index=item_index,
        ) from None
    if number != number:  # NaN
        raise InvalidArgumentError(
            f'Variable "{key}" fallback value must be a number',
            item_index=item_index,
        )
    return int(number) if number.is_integer() else number


def build_template_send_variables(
    variables_input: Mapping[str, Any] | None,
) -> dict[str, Any] | None:
    """Map ``{"variables": [{"key", "value"}]}`` to a ``{key: value}`` dict.

    Entries with a blank key are skipped and a missing value becomes ``""``.
    Returns None when nothing is left.
    """
    variables = (variables_input or {}).get("variables") or []
    result: dict[str, Any] = {}
    for variable in variables:
        key = variable.get("key")
        if not key:
            continue
        value = variable.get("value")
        result[key] = "" if value is None else value
    return result or None
