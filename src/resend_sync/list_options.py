"""Cursor list options and their pre-flight validation."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

__all__ = [
    "BOTH_CURSORS_MESSAGE",
    "InvalidArgumentError",
    "ListOptions",
    "validate_list_options",
]

BOTH_CURSORS_MESSAGE = 'You can only use either "After" or "Before", not both.'


class InvalidArgumentError(ValueError):
    """Raised when caller-supplied parameters are contradictory or malformed.

    Attributes:
        item_index: Index of the input item in the calling batch
    """

    def __init__(self, message: str, item_index: int = 0) -> None:
        self.item_index = item_index
        super().__init__(message)


@dataclass(frozen=True)
class ListOptions:
    """Cursor options for a list request.

    Empty strings are treated as absent.

    Attributes:
        after: Return items after this ID
        before: Return items before this ID
    """

    after: str | None = None
    before: str | None = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> "ListOptions":
        """Build options from a raw ``{"after": ..., "before": ...}`` collection."""
        if not raw:
            return cls()
        return cls(after=raw.get("after") or None, before=raw.get("before") or None)


def validate_list_options(options: ListOptions, item_index: int = 0) -> ListOptions:
    """Reject options carrying both cursors.

    Args:
        options: Options to check
        item_index: Batch item index reported on failure

    Returns:
        The same options, unchanged

    Raises:
        InvalidArgumentError: If both ``after`` and ``before`` are non-empty
    """
    if options.after and options.before:
        raise InvalidArgumentError(BOTH_CURSORS_MESSAGE, item_index=item_index)
    return options
