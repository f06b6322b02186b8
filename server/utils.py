"""Pure helpers: response envelopes, limit clamping, query-string lists."""

from typing import Any, List, Optional

from resource_search.models import utc_now_iso

from .models import ApiResponse, ErrorResponse

# Page sizes per endpoint
DEFAULT_SEARCH_LIMIT = 20
MAX_SEARCH_LIMIT = 100
DEFAULT_SUGGESTION_LIMIT = 5
MAX_SUGGESTION_LIMIT = 10


def clamp_limit(limit: Optional[int], default: int, maximum: int) -> int:
    """Default when missing, capped at maximum. Zero passes through; negatives are rejected by Query(ge=0)."""
    if limit is None:
        return default
    return min(limit, maximum)


def split_csv(value: Optional[str]) -> List[str]:
    """'a, b,,c' -> ['a', 'b', 'c']"""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def success_response(
    data: Any,
    query: Optional[str] = None,
    limit: Optional[int] = None,
    valid_query: Optional[bool] = None,
) -> dict:
    envelope = ApiResponse(
        data=data,
        query=query,
        valid_query=valid_query,
        limit=limit,
        timestamp=utc_now_iso(),
    )
    body = envelope.model_dump(mode="json", by_alias=True, exclude_none=True)
    body.setdefault("data", None)
    return body


def error_response(message: str, error: str) -> dict:
    return ErrorResponse(message=message, error=error).model_dump()
