"""
Search models: parsed queries, suggestions, and history entries.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Operator = Literal["AND", "OR", "NOT"]
SuggestionType = Literal["resource", "tag", "category", "popular"]


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


class SearchQuery(BaseModel):
    """
    Parsed free-text query.

    operators[i] joins terms[i] and terms[i + 1]. filters is reserved for
    structured filters and is always empty from the parser.
    """

    model_config = ConfigDict(frozen=True)

    terms: List[str] = Field(default_factory=list)
    operators: List[Operator] = Field(default_factory=list)
    filters: Dict[str, str] = Field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.terms


class SuggestionResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str
    type: SuggestionType
    score: float = Field(ge=0.0, le=1.0)
    resource_id: Optional[str] = Field(default=None, alias="resourceId")
    metadata: Dict[str, Any] = Field(default_factory=dict)


class SearchHistoryItem(BaseModel):
    """One remembered query: when it was last run and how many times."""

    query: str
    timestamp: str = Field(default_factory=utc_now_iso)
    count: int = Field(default=1, ge=1)


class PopularSearch(BaseModel):
    query: str
    count: int = Field(default=1, ge=1)
    last_searched: str = Field(default_factory=utc_now_iso)
