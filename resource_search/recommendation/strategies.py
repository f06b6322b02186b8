"""
Single-signal recommendation strategies: content-based, category-based,
trending, and popular.

Each takes the resource snapshot and config, excludes the target resource,
and caps output at config.max_recommendations. Sorting is stable, so equal
scores keep collection order.

Trending and popular both rank by the popularity field; there is no separate
recency signal. Trending accepts an optional window_days to restrict to
recently added resources, off by default.
"""

from typing import List, Optional, Sequence

from ..models.config import RecommendationConfig
from ..models.recommendation import RecommendationResult
from ..models.resource import Resource
from .scoring import days_since
from .similarity import calculate_similarity


def _by_score(results: List[RecommendationResult], cap: int) -> List[RecommendationResult]:
    results.sort(key=lambda r: r.score, reverse=True)
    return results[:cap]


def content_based_recommendations(
    resources: Sequence[Resource],
    target: Resource,
    config: RecommendationConfig,
) -> List[RecommendationResult]:
    """Resources at least min_similarity_score similar to target."""
    results = []
    for resource in resources:
        if resource.id == target.id:
            continue
        similarity = calculate_similarity(target, resource)
        if similarity >= config.min_similarity_score:
            results.append(RecommendationResult(
                resource=resource,
                score=similarity,
                reason="content-based",
                explanation=f"Similar to {target.title} based on category, tags, and technology",
            ))
    return _by_score(results, config.max_recommendations)


def category_based_recommendations(
    resources: Sequence[Resource],
    category: str,
    config: RecommendationConfig,
    exclude_id: Optional[str] = None,
) -> List[RecommendationResult]:
    """Resources in exactly this category, most popular first."""
    results = [
        RecommendationResult(
            resource=resource,
            score=resource.popularity,
            reason="content-based",
            explanation=f"Popular in {category}",
        )
        for resource in resources
        if resource.category == category and resource.id != exclude_id
    ]
    return _by_score(results, config.max_recommendations)


def trending_recommendations(
    resources: Sequence[Resource],
    config: RecommendationConfig,
    exclude_id: Optional[str] = None,
    window_days: Optional[int] = None,
) -> List[RecommendationResult]:
    results = [
        RecommendationResult(
            resource=resource,
            score=resource.popularity,
            reason="trending",
            explanation="Trending now",
        )
        for resource in resources
        if resource.id != exclude_id
        and (window_days is None or days_since(resource.date_added) <= window_days)
    ]
    return _by_score(results, config.max_recommendations)


def popular_recommendations(
    resources: Sequence[Resource],
    config: RecommendationConfig,
    exclude_id: Optional[str] = None,
) -> List[RecommendationResult]:
    results = [
        RecommendationResult(
            resource=resource,
            score=resource.popularity,
            reason="popular",
            explanation="Popular among all users",
        )
        for resource in resources
        if resource.id != exclude_id
    ]
    return _by_score(results, config.max_recommendations)
