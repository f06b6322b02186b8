"""
Resource search and recommendation core.

Single entry point for the package:
- models/: Resource, RecommendationConfig, search and recommendation results
- search/: sanitizer, query parser, fuzzy index, facets, suggestions, history
- recommendation/: similarity, strategies, personalized blending, diversity
"""

from .errors import IndexNotBuiltError, InvalidArgumentError, SearchError
from .models import (
    DEFAULT_CONFIG,
    AlternativeSuggestion,
    PopularSearch,
    RecommendationConfig,
    RecommendationResult,
    Resource,
    SearchHistoryItem,
    SearchQuery,
    SuggestionResult,
    UserPreferences,
    ensure_resources,
    find_resource,
    resolve_config,
)
from .recommendation import RecommendationEngine, apply_diversity, calculate_similarity
from .search import (
    FacetDimension,
    FuzzyIndex,
    PopularSearches,
    SearchHistory,
    SuggestionEngine,
    advanced_search,
    build_index,
    count_all_facets,
    count_facet,
    create_search_snippet,
    filter_resources,
    parse_query,
    sanitize_and_highlight,
    sanitize_for_xss,
)

__all__ = [
    "AlternativeSuggestion",
    "DEFAULT_CONFIG",
    "FacetDimension",
    "FuzzyIndex",
    "IndexNotBuiltError",
    "InvalidArgumentError",
    "PopularSearch",
    "PopularSearches",
    "RecommendationConfig",
    "RecommendationEngine",
    "RecommendationResult",
    "Resource",
    "SearchError",
    "SearchHistory",
    "SearchHistoryItem",
    "SearchQuery",
    "SuggestionEngine",
    "SuggestionResult",
    "UserPreferences",
    "advanced_search",
    "apply_diversity",
    "build_index",
    "calculate_similarity",
    "count_all_facets",
    "count_facet",
    "create_search_snippet",
    "ensure_resources",
    "filter_resources",
    "find_resource",
    "parse_query",
    "resolve_config",
    "sanitize_and_highlight",
    "sanitize_for_xss",
]
