"""
Recommendation engine: facade over the strategy, blending, diversity, and
alternatives modules for one resource snapshot.

The engine owns its config and a random.Random seeded from
config.random_seed, so a fixed seed gives reproducible diversity draws.
"""

import logging
import random
from typing import Any, Dict, Iterable, List, Optional, Union

from ..models.config import RecommendationConfig, resolve_config
from ..models.recommendation import (
    AlternativeSuggestion,
    RecommendationResult,
    UserPreferences,
)
from ..models.resource import Resource, check_unique_ids, ensure_resources
from .alternatives import DEFAULT_MAX_ALTERNATIVES, LOW_SIMILARITY, get_alternatives
from .diversity import apply_diversity
from .personalized import personalized_recommendations
from .similarity import calculate_similarity
from .strategies import (
    category_based_recommendations,
    content_based_recommendations,
    popular_recommendations,
    trending_recommendations,
)

logger = logging.getLogger(__name__)

# Trending/popular picks folded into the diverse blend.
DIVERSE_TOP_N = 3

PreferencesLike = Union[UserPreferences, Dict[str, Any]]


def _ensure_preferences(preferences: Optional[PreferencesLike]) -> Optional[UserPreferences]:
    if preferences is None or isinstance(preferences, UserPreferences):
        return preferences
    return UserPreferences.model_validate(preferences)


class RecommendationEngine:
    """
    Recommendations over a fixed list of resources.

    Every strategy excludes the target resource and caps its output at
    config.max_recommendations.
    """

    def __init__(
        self,
        resources: Iterable[Union[Dict[str, Any], Resource]],
        config: Optional[RecommendationConfig] = None,
        preferences: Optional[PreferencesLike] = None,
    ):
        self._resources = ensure_resources(resources)
        check_unique_ids(self._resources)
        self._config = resolve_config(config)
        self._preferences = _ensure_preferences(preferences)
        self._rng = random.Random(self._config.random_seed)
        logger.debug("Recommendation engine ready for %d resources", len(self._resources))

    @property
    def resources(self):
        return self._resources

    @property
    def config(self) -> RecommendationConfig:
        return self._config

    @property
    def preferences(self) -> Optional[UserPreferences]:
        return self._preferences

    def update_config(self, **changes: Any) -> RecommendationConfig:
        """Merge the given fields into the config; untouched fields keep their values."""
        self._config = self._config.updated(**changes)
        self._rng = random.Random(self._config.random_seed)
        return self._config

    def update_preferences(self, preferences: Optional[PreferencesLike]) -> None:
        self._preferences = _ensure_preferences(preferences)

    def calculate_similarity(self, resource_a: Resource, resource_b: Resource) -> float:
        return calculate_similarity(resource_a, resource_b)

    def get_content_based_recommendations(self, resource: Resource) -> List[RecommendationResult]:
        return content_based_recommendations(self._resources, resource, self._config)

    def get_category_based_recommendations(
        self, category: str, exclude_id: Optional[str] = None
    ) -> List[RecommendationResult]:
        return category_based_recommendations(self._resources, category, self._config, exclude_id)

    def get_trending_recommendations(
        self, exclude_id: Optional[str] = None, window_days: Optional[int] = None
    ) -> List[RecommendationResult]:
        return trending_recommendations(self._resources, self._config, exclude_id, window_days)

    def get_popular_recommendations(self, exclude_id: Optional[str] = None) -> List[RecommendationResult]:
        return popular_recommendations(self._resources, self._config, exclude_id)

    def get_diverse_recommendations(
        self,
        resource: Optional[Resource] = None,
        category: Optional[str] = None,
    ) -> List[RecommendationResult]:
        """
        Blend content, category, trending, and popular picks into one list.

        Duplicates keep their first occurrence, in that strategy order. The
        merged list is sorted by score then passed through apply_diversity.
        """
        exclude_id = resource.id if resource is not None else None
        merged: List[RecommendationResult] = []
        seen = set()

        def extend(results: List[RecommendationResult], limit: Optional[int] = None) -> None:
            added = 0
            for rec in results:
                if limit is not None and added >= limit:
                    break
                if rec.resource.id in seen or rec.resource.id == exclude_id:
                    continue
                seen.add(rec.resource.id)
                merged.append(rec)
                added += 1

        if resource is not None:
            extend(self.get_content_based_recommendations(resource))
        if category:
            extend(self.get_category_based_recommendations(category, exclude_id))
        extend(self.get_trending_recommendations(exclude_id), DIVERSE_TOP_N)
        extend(self.get_popular_recommendations(exclude_id), DIVERSE_TOP_N)

        merged.sort(key=lambda r: r.score, reverse=True)
        return apply_diversity(
            merged,
            self._config.diversity_factor,
            self._config.max_recommendations,
            self._rng,
        )

    def get_personalized_recommendations(
        self,
        resource: Optional[Resource] = None,
        category: Optional[str] = None,
        preferences: Optional[PreferencesLike] = None,
    ) -> List[RecommendationResult]:
        """
        Weighted blend of every signal for the given (or stored) preferences.

        Without any preferences this is get_diverse_recommendations.
        """
        prefs = _ensure_preferences(preferences) or self._preferences
        if prefs is None:
            return self.get_diverse_recommendations(resource, category)
        return personalized_recommendations(
            self._resources, self._config, prefs, current=resource, rng=self._rng
        )

    def get_alternatives(
        self,
        resource: Resource,
        max_alternatives: int = DEFAULT_MAX_ALTERNATIVES,
        min_score: float = LOW_SIMILARITY,
    ) -> List[AlternativeSuggestion]:
        return get_alternatives(self._resources, resource, max_alternatives, min_score)
