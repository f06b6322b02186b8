"""
Recommendation models: results, user preferences, and alternatives.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .resource import Resource

RecommendationReason = Literal[
    "collaborative",
    "content-based",
    "trending",
    "popular",
    "personalized",
    "serendipity",
]


class RecommendationResult(BaseModel):
    """
    A resource with its blended score and the strategy that produced it.

    Scores are comparable only within one call; strategies use different scales
    (similarity in [0, 1], raw popularity, weighted sums).
    """

    resource: Resource
    score: float
    reason: RecommendationReason
    explanation: Optional[str] = None


class UserPreferences(BaseModel):
    """Declared interests and past interactions used for personalization."""

    model_config = ConfigDict(populate_by_name=True)

    interests: List[str] = Field(default_factory=list)
    viewed_resources: List[str] = Field(default_factory=list, alias="viewedResources")
    bookmarked_resources: List[str] = Field(default_factory=list, alias="bookmarkedResources")
    skill_level: Optional[str] = Field(default=None, alias="skillLevel")


class AlternativeSuggestion(BaseModel):
    resource: Resource
    score: float
    reason: str
    is_explicit: bool = False
    similarity_factors: List[str] = Field(default_factory=list)
