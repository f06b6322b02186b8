"""Similarity scoring, recommendation strategies, and diversity re-ranking."""

from .alternatives import get_alternatives, similarity_reason
from .diversity import apply_diversity
from .engine import RecommendationEngine
from .personalized import personalized_recommendations
from .similarity import calculate_similarity, similarity_factors
from .strategies import (
    category_based_recommendations,
    content_based_recommendations,
    popular_recommendations,
    trending_recommendations,
)

__all__ = [
    "RecommendationEngine",
    "apply_diversity",
    "calculate_similarity",
    "category_based_recommendations",
    "content_based_recommendations",
    "get_alternatives",
    "personalized_recommendations",
    "popular_recommendations",
    "similarity_factors",
    "similarity_reason",
    "trending_recommendations",
]
