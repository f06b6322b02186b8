"""Data models for the search and recommendation core."""

from .config import DEFAULT_CONFIG, RecommendationConfig, resolve_config
from .recommendation import (
    AlternativeSuggestion,
    RecommendationReason,
    RecommendationResult,
    UserPreferences,
)
from .resource import Resource, check_unique_ids, ensure_resources, find_resource
from .search import (
    PopularSearch,
    SearchHistoryItem,
    SearchQuery,
    SuggestionResult,
    utc_now_iso,
)

__all__ = [
    "AlternativeSuggestion",
    "DEFAULT_CONFIG",
    "PopularSearch",
    "RecommendationConfig",
    "RecommendationReason",
    "RecommendationResult",
    "Resource",
    "SearchHistoryItem",
    "SearchQuery",
    "SuggestionResult",
    "UserPreferences",
    "check_unique_ids",
    "ensure_resources",
    "find_resource",
    "resolve_config",
    "utc_now_iso",
]
