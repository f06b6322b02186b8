"""
Diversity re-ranking: thin out category/technology monoculture.

Walks an already score-sorted list and admits the first three items
unconditionally; later items are admitted if they bring a new category or an
unseen technology, or with probability diversity_factor. Output is
deterministic when diversity_factor is 0 or a seeded rng is supplied.
"""

import random
from typing import List, Optional, Sequence, Set

from ..models.recommendation import RecommendationResult

ALWAYS_ADMIT = 3


def apply_diversity(
    recommendations: Sequence[RecommendationResult],
    diversity_factor: float,
    max_results: int,
    rng: Optional[random.Random] = None,
) -> List[RecommendationResult]:
    """
    Select up to max_results diverse items, preserving input order.

    Args:
        recommendations: Candidates sorted by score (desc). Not mutated.
        diversity_factor: Probability in [0, 1] of admitting a non-diverse item.
        max_results: Stop after this many admissions.
        rng: Source for the relaxation draw; defaults to the random module.
    """
    if max_results <= 0:
        return []
    draw = (rng or random).random
    selected: List[RecommendationResult] = []
    categories: Set[str] = set()
    technologies: Set[str] = set()

    for rec in recommendations:
        resource = rec.resource
        new_category = resource.category not in categories
        new_technology = any(t not in technologies for t in resource.technology)
        if (
            len(selected) < ALWAYS_ADMIT
            or new_category
            or new_technology
            or (diversity_factor > 0 and draw() < diversity_factor)
        ):
            selected.append(rec)
            categories.add(resource.category)
            technologies.update(resource.technology)
            if len(selected) >= max_results:
                break
    return selected
