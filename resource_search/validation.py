"""Argument checks shared by the public search entry points."""

from typing import Any, Optional

from .errors import InvalidArgumentError


def require_query(query: Any) -> str:
    """Return query unchanged if it is a string, else raise InvalidArgumentError."""
    if not isinstance(query, str):
        raise InvalidArgumentError(
            f"Query must be a string, got {type(query).__name__}"
        )
    return query


def require_limit(limit: Any, allow_none: bool = True) -> Optional[int]:
    """Accept None (when allowed) or a non-negative int; bools are rejected."""
    if limit is None and allow_none:
        return None
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InvalidArgumentError(f"Limit must be an integer, got {limit!r}")
    if limit < 0:
        raise InvalidArgumentError(f"Limit must be >= 0, got {limit}")
    return limit
