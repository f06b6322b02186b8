"""
Personalized blending: weighted sum of content, interest, collaborative,
popularity, and skill signals per candidate.

final = similarity(current, r)  * content_based_weight
      + interest_match(r)       * personalization_weight
      + collaborative(r)        * collaborative_weight
      + popularity(r) / 10      * popularity_weight
      + skill_match(r)          * 0.1

Candidates below min_similarity_score are dropped. The largest of the first
four terms names the reason; ties go to personalized, then content-based,
then collaborative, then popular.
"""

import random
from typing import Dict, List, Optional, Sequence

from ..models.config import RecommendationConfig
from ..models.recommendation import RecommendationResult, UserPreferences
from ..models.resource import Resource
from .diversity import apply_diversity
from .scoring import (
    SKILL_WEIGHT,
    collaborative_score,
    interest_match,
    popularity_score,
    skill_match,
)
from .similarity import calculate_similarity

# Tie-break order for the dominant term.
REASON_PRIORITY = ("personalized", "content-based", "collaborative", "popular")


def _explanation(reason: str, resource: Resource, current: Optional[Resource]) -> str:
    if reason == "personalized":
        return f"This resource matches your interests in {resource.category} and related technologies"
    if reason == "content-based":
        if current is not None:
            return f"Similar to {current.title} based on category, tags, and technology"
        return "Based on similarity to resources you might like"
    if reason == "collaborative":
        return "Based on resources you viewed or bookmarked"
    return "Popular among all users"


def blend_terms(
    resource: Resource,
    config: RecommendationConfig,
    preferences: Optional[UserPreferences],
    current: Optional[Resource] = None,
) -> Dict[str, float]:
    """Weighted contribution of each reason-bearing signal for one candidate."""
    content = calculate_similarity(current, resource) if current is not None else 0.0
    return {
        "personalized": interest_match(resource, preferences) * config.personalization_weight,
        "content-based": content * config.content_based_weight,
        "collaborative": collaborative_score(resource.id, preferences) * config.collaborative_weight,
        "popular": popularity_score(resource) * config.popularity_weight,
    }


def dominant_reason(terms: Dict[str, float]) -> str:
    # max() keeps the first maximal key, so REASON_PRIORITY breaks ties.
    return max(REASON_PRIORITY, key=lambda reason: terms[reason])


def personalized_recommendations(
    resources: Sequence[Resource],
    config: RecommendationConfig,
    preferences: Optional[UserPreferences],
    current: Optional[Resource] = None,
    rng: Optional[random.Random] = None,
) -> List[RecommendationResult]:
    """Blend all signals, drop weak candidates, diversify, and cap."""
    scored: List[RecommendationResult] = []
    for resource in resources:
        if current is not None and resource.id == current.id:
            continue
        terms = blend_terms(resource, config, preferences, current)
        final = sum(terms.values()) + skill_match(resource, preferences) * SKILL_WEIGHT
        if final < config.min_similarity_score:
            continue
        reason = dominant_reason(terms)
        scored.append(RecommendationResult(
            resource=resource,
            score=final,
            reason=reason,
            explanation=_explanation(reason, resource, current),
        ))

    scored.sort(key=lambda r: r.score, reverse=True)
    diverse = apply_diversity(scored, config.diversity_factor, config.max_recommendations, rng)
    return diverse[: config.max_recommendations]
