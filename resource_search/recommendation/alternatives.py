"""
Alternatives for a resource: explicit cross-references plus similar resources.

A resource is an explicit alternative when either side lists the other's id in
its alternatives; those score 1.0. Others qualify at min_score similarity and
are labelled by band.
"""

from typing import List, Sequence

from ..models.recommendation import AlternativeSuggestion
from ..models.resource import Resource
from .similarity import calculate_similarity, similarity_factors

HIGH_SIMILARITY = 0.7
MEDIUM_SIMILARITY = 0.5
LOW_SIMILARITY = 0.3
DEFAULT_MAX_ALTERNATIVES = 6


def similarity_reason(score: float) -> str:
    if score >= HIGH_SIMILARITY:
        return "High similarity"
    if score >= MEDIUM_SIMILARITY:
        return "Medium similarity"
    return "Low similarity"


def is_explicit_alternative(target: Resource, other: Resource) -> bool:
    return other.id in target.alternatives or target.id in other.alternatives


def get_alternatives(
    resources: Sequence[Resource],
    target: Resource,
    max_alternatives: int = DEFAULT_MAX_ALTERNATIVES,
    min_score: float = LOW_SIMILARITY,
) -> List[AlternativeSuggestion]:
    if max_alternatives <= 0:
        return []
    suggestions: List[AlternativeSuggestion] = []
    for resource in resources:
        if resource.id == target.id:
            continue
        explicit = is_explicit_alternative(target, resource)
        score = calculate_similarity(target, resource)
        if not explicit and score < min_score:
            continue
        suggestions.append(AlternativeSuggestion(
            resource=resource,
            score=1.0 if explicit else score,
            reason="Marked as alternative" if explicit else similarity_reason(score),
            is_explicit=explicit,
            similarity_factors=similarity_factors(target, resource),
        ))
    suggestions.sort(key=lambda s: s.score, reverse=True)
    return suggestions[:max_alternatives]
