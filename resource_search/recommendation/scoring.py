"""
Per-candidate signals for personalized blending: interest match,
collaborative signal, popularity, and skill match.
"""

from datetime import datetime, timezone
from typing import Optional

from ..models.recommendation import UserPreferences
from ..models.resource import Resource

INTEREST_CATEGORY_WEIGHT = 0.4
INTEREST_TAG_WEIGHT = 0.3
INTEREST_TECHNOLOGY_WEIGHT = 0.3
SKILL_WEIGHT = 0.1
NEUTRAL_SCORE = 0.5
POPULARITY_SCALE = 10.0


def interest_match(resource: Resource, preferences: Optional[UserPreferences]) -> float:
    """
    Overlap of category, tags, and technology with declared interests.

    Each matching axis contributes its weight (0.4 / 0.3 / 0.3) scaled by the
    fraction of matching values; the sum is normalized by the weights of the
    axes that matched. No interests declared: neutral 0.5. None matched: 0.
    """
    if preferences is None or not preferences.interests:
        return NEUTRAL_SCORE
    interests = set(preferences.interests)
    score = 0.0
    total = 0.0

    if resource.category in interests:
        score += INTEREST_CATEGORY_WEIGHT
        total += INTEREST_CATEGORY_WEIGHT

    tags = resource.tag_set
    matching_tags = len(tags & interests)
    if matching_tags:
        score += matching_tags / len(tags) * INTEREST_TAG_WEIGHT
        total += INTEREST_TAG_WEIGHT

    tech = resource.technology_set
    matching_tech = len(tech & interests)
    if matching_tech:
        score += matching_tech / len(tech) * INTEREST_TECHNOLOGY_WEIGHT
        total += INTEREST_TECHNOLOGY_WEIGHT

    return score / total if total > 0 else 0.0


def collaborative_score(resource_id: str, preferences: Optional[UserPreferences]) -> float:
    """1.0 if the user viewed or bookmarked the resource, else 0.0."""
    if preferences is None:
        return 0.0
    if resource_id in preferences.viewed_resources or resource_id in preferences.bookmarked_resources:
        return 1.0
    return 0.0


def popularity_score(resource: Resource) -> float:
    return resource.popularity / POPULARITY_SCALE


def skill_match(resource: Resource, preferences: Optional[UserPreferences]) -> float:
    """
    Skill-level fit. Difficulty data is too sparse to rank on, so this is a
    neutral constant whether or not a skill level is declared.
    """
    return NEUTRAL_SCORE


def days_since(date_str: Optional[str]) -> int:
    """Days since an ISO date string; 999 when missing or unparseable."""
    if not date_str:
        return 999
    try:
        dt = datetime.fromisoformat(date_str.replace("Z", "+00:00"))
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return (datetime.now(timezone.utc) - dt).days
    except ValueError:
        return 999
