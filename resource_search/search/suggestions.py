"""
Search suggestions: merge fuzzy resource hits, tag and category matches, and
popular searches into one ranked list.

Priority bands:
- resource: 0.5 + 0.5 * fuzzy relevance
- tag:      0.7 (substring match, one entry per distinct tag)
- category: 0.6 (substring match, one entry per distinct category)
- popular:  0.9 - 0.1 * rank, only for queries shorter than 3 characters

Tag and category counts are computed once per snapshot when the engine is
built, so a suggest() call is a single pass over the distinct values.
suggest() never writes history; recording is the caller's job.
"""

from typing import Dict, List, Optional, Sequence

from ..models.resource import Resource
from ..models.search import SuggestionResult
from ..validation import require_limit, require_query
from .fuzzy_index import FuzzyIndex, build_index
from .history import RECENT_SEARCH_LIMIT, PopularSearches, SearchHistory

DEFAULT_SUGGESTION_LIMIT = 5
SHORT_QUERY_LENGTH = 3
TAG_SCORE = 0.7
CATEGORY_SCORE = 0.6
POPULAR_TOP_SCORE = 0.9
RECENT_TOP_SCORE = 0.8
RANK_STEP = 0.1
_DESCRIPTION_PREVIEW = 100


def _ranked_score(top: float, rank: int) -> float:
    return max(0.0, round(top - RANK_STEP * rank, 10))


def _preview(text: str) -> str:
    if len(text) <= _DESCRIPTION_PREVIEW:
        return text
    return text[:_DESCRIPTION_PREVIEW] + "..."


class SuggestionEngine:
    """
    Suggestion generator bound to one fuzzy index (and so one snapshot).

    Usage:
        engine = SuggestionEngine(build_index(resources), popular=popular)
        engine.suggest("vu", limit=5)
    """

    def __init__(self, index: FuzzyIndex, popular: Optional[PopularSearches] = None):
        self._index = index
        self._popular = popular
        self._tag_counts: Dict[str, int] = {}
        self._category_counts: Dict[str, int] = {}
        for resource in index.resources:
            for tag in dict.fromkeys(resource.tags):
                if tag:
                    self._tag_counts[tag] = self._tag_counts.get(tag, 0) + 1
            if resource.category:
                self._category_counts[resource.category] = (
                    self._category_counts.get(resource.category, 0) + 1
                )

    @classmethod
    def from_resources(
        cls,
        resources: Sequence[Resource],
        popular: Optional[PopularSearches] = None,
    ) -> "SuggestionEngine":
        return cls(build_index(resources), popular=popular)

    @property
    def index(self) -> FuzzyIndex:
        return self._index

    @property
    def tag_counts(self) -> Dict[str, int]:
        return dict(self._tag_counts)

    @property
    def category_counts(self) -> Dict[str, int]:
        return dict(self._category_counts)

    def _resource_suggestions(self, query: str, limit: int) -> List[SuggestionResult]:
        suggestions = []
        for resource, relevance in self._index.search(query, limit=limit * 2):
            suggestions.append(SuggestionResult(
                text=resource.title,
                type="resource",
                score=min(1.0, 0.5 + 0.5 * relevance),
                resource_id=resource.id,
                metadata={
                    "description": _preview(resource.description),
                    "category": resource.category,
                    "tags": list(resource.tags),
                    "url": resource.url,
                },
            ))
        return suggestions

    def _tag_suggestions(self, needle: str, limit: int) -> List[SuggestionResult]:
        suggestions = []
        for tag, count in self._tag_counts.items():
            if len(suggestions) >= limit:
                break
            if needle in tag.lower():
                suggestions.append(SuggestionResult(
                    text=tag,
                    type="tag",
                    score=TAG_SCORE,
                    metadata={"tag": tag, "count": count},
                ))
        return suggestions

    def _category_suggestions(self, needle: str) -> List[SuggestionResult]:
        return [
            SuggestionResult(
                text=category,
                type="category",
                score=CATEGORY_SCORE,
                metadata={"category": category, "count": count},
            )
            for category, count in self._category_counts.items()
            if needle in category.lower()
        ]

    def suggest(self, query: str, limit: int = DEFAULT_SUGGESTION_LIMIT) -> List[SuggestionResult]:
        """
        Ranked suggestions for query, best first, at most limit entries.

        Empty query or limit 0 returns []. Raises InvalidArgumentError for a
        non-string query or bad limit.
        """
        require_query(query)
        limit = require_limit(limit, allow_none=False)
        query = query.strip()
        if not query or limit == 0:
            return []

        needle = query.lower()
        suggestions = self._resource_suggestions(query, limit)
        suggestions.extend(self._tag_suggestions(needle, limit))
        suggestions.extend(self._category_suggestions(needle))
        if len(query) < SHORT_QUERY_LENGTH:
            suggestions.extend(self.popular_suggestions(limit))

        suggestions.sort(key=lambda s: s.score, reverse=True)
        return suggestions[:limit]

    def popular_suggestions(self, limit: int = DEFAULT_SUGGESTION_LIMIT) -> List[SuggestionResult]:
        """Popular searches as suggestions, most popular first."""
        limit = require_limit(limit, allow_none=False)
        if self._popular is None or limit == 0:
            return []
        return [
            SuggestionResult(
                text=popular.query,
                type="popular",
                score=_ranked_score(POPULAR_TOP_SCORE, rank),
                metadata={"count": popular.count, "popularity": rank + 1},
            )
            for rank, popular in enumerate(self._popular.top(limit))
        ]


def recent_suggestions(
    history: SearchHistory,
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> List[SuggestionResult]:
    """Recent searches as suggestions, newest first (typed as popular), at most RECENT_SEARCH_LIMIT."""
    limit = require_limit(limit, allow_none=False)
    return [
        SuggestionResult(
            text=item.query,
            type="popular",
            score=_ranked_score(RECENT_TOP_SCORE, rank),
            metadata={"count": item.count, "recent": True},
        )
        for rank, item in enumerate(history.items()[:min(limit, RECENT_SEARCH_LIMIT)])
    ]
