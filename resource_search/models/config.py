"""
Recommendation configuration: strategy weights, output cap, and diversity.

RecommendationConfig defaults are defined here. The server may pass a dict
(e.g. from a JSON file named by RECOMMENDATION_CONFIG_PATH); from_dict()
merges it with these defaults. updated() is the runtime partial update.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..errors import InvalidArgumentError


class RecommendationConfig(BaseModel):
    """Configuration for the recommendation engine."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # -------------------------------------------------------------------------
    # Strategy weights (used by personalized blending)
    # Conventionally sum to <= 1.0; not enforced.
    # -------------------------------------------------------------------------

    # Weight for the binary "already viewed or bookmarked" signal.
    collaborative_weight: float = Field(default=0.3, alias="collaborativeWeight")
    # Weight for similarity to the resource currently being viewed.
    content_based_weight: float = Field(default=0.3, alias="contentBasedWeight")
    # Weight for popularity / 10.
    popularity_weight: float = Field(default=0.2, alias="popularityWeight")
    # Weight for overlap with the user's declared interests.
    personalization_weight: float = Field(default=0.2, alias="personalizationWeight")

    # -------------------------------------------------------------------------
    # Output limits
    # -------------------------------------------------------------------------

    # Hard cap on results returned by every strategy.
    max_recommendations: int = Field(default=10, gt=0, alias="maxRecommendations")
    # Content-based and personalized candidates below this are dropped.
    min_similarity_score: float = Field(default=0.3, alias="minSimilarityScore")

    # -------------------------------------------------------------------------
    # Diversity re-ranking
    # Probability of admitting an item that adds no new category or technology.
    # -------------------------------------------------------------------------

    diversity_factor: float = Field(default=0.3, ge=0.0, le=1.0, alias="diversityFactor")
    # Seed for the relaxation draw. None = non-deterministic.
    random_seed: Optional[int] = Field(default=None, alias="randomSeed")

    @model_validator(mode="after")
    def weights_non_negative(self):
        for name in (
            "collaborative_weight",
            "content_based_weight",
            "popularity_weight",
            "personalization_weight",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")
        return self

    def updated(self, **changes: Any) -> "RecommendationConfig":
        """
        Return a copy with only the given fields replaced.

        Accepts snake_case or camelCase names; unknown names raise
        InvalidArgumentError. Values are re-validated.
        """
        merged = self.model_dump()
        for key, value in changes.items():
            merged[_field_name(key)] = value
        try:
            return type(self).model_validate(merged)
        except ValueError as e:
            raise InvalidArgumentError(str(e)) from e

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "RecommendationConfig":
        """Create config from dictionary (e.g., loaded from JSON)."""
        flat: Dict[str, Any] = {}
        for section in ("weights", "limits", "diversity"):
            if isinstance(config_dict.get(section), dict):
                flat.update(config_dict[section])
        for key, value in config_dict.items():
            if not isinstance(value, dict):
                flat[key] = value
        if "seed" in flat:
            flat["random_seed"] = flat.pop("seed")
        allowed = set(cls.model_fields)
        filtered = {}
        for key, value in flat.items():
            name = _ALIASES.get(key, key)
            if name in allowed:
                filtered[name] = value
        return cls.model_validate(filtered)


_ALIASES = {
    field.alias: name
    for name, field in RecommendationConfig.model_fields.items()
    if field.alias
}


def _field_name(key: str) -> str:
    name = _ALIASES.get(key, key)
    if name not in RecommendationConfig.model_fields:
        raise InvalidArgumentError(f"Unknown recommendation config field: {key}")
    return name


DEFAULT_CONFIG = RecommendationConfig()


def resolve_config(config: Optional["RecommendationConfig"]) -> "RecommendationConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
