"""
Search: sanitization, query parsing, fuzzy index, facets, suggestions, history.
"""

from .advanced import advanced_search, filter_resources
from .facets import (
    UNSPECIFIED,
    FacetDimension,
    count_all_facets,
    count_facet,
    flatten_facet_counts,
    narrow_resources,
)
from .fuzzy_index import FIELD_WEIGHTS, FuzzyIndex, build_index
from .history import (
    MAX_POPULAR_SEARCHES,
    MAX_SEARCH_HISTORY,
    RECENT_SEARCH_LIMIT,
    HistoryStorage,
    JsonFileStorage,
    MemoryStorage,
    PopularSearches,
    SearchHistory,
)
from .query_parser import has_balanced_quotes, parse_query
from .sanitizer import create_search_snippet, sanitize_and_highlight, sanitize_for_xss
from .suggestions import SuggestionEngine, recent_suggestions

__all__ = [
    "FIELD_WEIGHTS",
    "MAX_POPULAR_SEARCHES",
    "MAX_SEARCH_HISTORY",
    "RECENT_SEARCH_LIMIT",
    "UNSPECIFIED",
    "FacetDimension",
    "FuzzyIndex",
    "HistoryStorage",
    "JsonFileStorage",
    "MemoryStorage",
    "PopularSearches",
    "SearchHistory",
    "SuggestionEngine",
    "advanced_search",
    "build_index",
    "count_all_facets",
    "count_facet",
    "create_search_snippet",
    "filter_resources",
    "flatten_facet_counts",
    "has_balanced_quotes",
    "narrow_resources",
    "parse_query",
    "recent_suggestions",
    "sanitize_and_highlight",
    "sanitize_for_xss",
]
