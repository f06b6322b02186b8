"""
Attribute similarity between two resources.

similarity = 0.5 * same_category
           + 0.3 * |tags_a & tags_b| / max(|tags_a|, |tags_b|)
           + 0.2 * |tech_a & tech_b| / max(|tech_a|, |tech_b|)
clamped to 1.0. Tags and technology use set semantics, so the measure is
symmetric and similarity(x, x) == 1.
"""

from typing import FrozenSet, List

from ..models.resource import Resource

CATEGORY_WEIGHT = 0.5
TAG_WEIGHT = 0.3
TECHNOLOGY_WEIGHT = 0.2


def _overlap(a: FrozenSet[str], b: FrozenSet[str]) -> float:
    if not a or not b:
        return 0.0
    return len(a & b) / max(len(a), len(b))


def calculate_similarity(resource_a: Resource, resource_b: Resource) -> float:
    """Similarity in [0, 1]; 1.0 for the same resource id."""
    if resource_a.id == resource_b.id:
        return 1.0
    score = 0.0
    if resource_a.category and resource_a.category == resource_b.category:
        score += CATEGORY_WEIGHT
    score += TAG_WEIGHT * _overlap(resource_a.tag_set, resource_b.tag_set)
    score += TECHNOLOGY_WEIGHT * _overlap(resource_a.technology_set, resource_b.technology_set)
    return min(1.0, score)


def similarity_factors(resource_a: Resource, resource_b: Resource) -> List[str]:
    """Human-readable reasons two resources are alike."""
    factors = []
    if resource_a.category and resource_a.category == resource_b.category:
        factors.append("Same category")
    if resource_a.tag_set & resource_b.tag_set:
        factors.append("Shared tags")
    if resource_a.technology_set & resource_b.technology_set:
        factors.append("Similar technology")
    return factors
