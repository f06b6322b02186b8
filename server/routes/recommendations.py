"""Recommendation endpoints."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from resource_search.errors import InvalidArgumentError
from resource_search.models import UserPreferences, find_resource

from ..state import get_state
from ..utils import split_csv, success_response

router = APIRouter()

RECOMMENDATION_TYPES = ("personalized", "related", "trending", "popular", "diverse")
MAX_RECOMMENDATION_LIMIT = 50


def _lookup(resource_id: Optional[str]):
    if resource_id is None:
        return None
    resource = find_resource(get_state().resources, resource_id)
    if resource is None:
        raise HTTPException(status_code=404, detail=f"Resource not found: {resource_id}")
    return resource


@router.get("")
def recommendations(
    rec_type: str = Query("personalized", alias="type", description=" | ".join(RECOMMENDATION_TYPES)),
    resource_id: Optional[str] = Query(None, alias="resourceId"),
    category: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=0, le=MAX_RECOMMENDATION_LIMIT),
    interests: Optional[str] = Query(None, description="Comma-separated interests"),
):
    """
    Recommendations of one strategy.

    personalized: blended score for the given interests (diverse blend without).
    related: content-based, requires resourceId.
    trending / popular: by popularity.
    diverse: content, category, trending, and popular picks re-ranked for variety.
    """
    if rec_type not in RECOMMENDATION_TYPES:
        raise InvalidArgumentError(
            f"Unknown recommendation type: {rec_type!r}. Expected one of {', '.join(RECOMMENDATION_TYPES)}"
        )
    engine = get_state().get_recommendation_engine()
    resource = _lookup(resource_id)
    exclude_id = resource.id if resource is not None else None

    if rec_type == "personalized":
        interest_list = split_csv(interests)
        preferences = UserPreferences(interests=interest_list) if interest_list else None
        results = engine.get_personalized_recommendations(resource, category, preferences)
    elif rec_type == "related":
        if resource is None:
            raise InvalidArgumentError("resourceId is required for related recommendations")
        results = engine.get_content_based_recommendations(resource)
    elif rec_type == "trending":
        results = engine.get_trending_recommendations(exclude_id)
    elif rec_type == "popular":
        results = engine.get_popular_recommendations(exclude_id)
    else:
        results = engine.get_diverse_recommendations(resource, category)

    if limit is not None:
        results = results[:limit]
    return success_response(results, limit=limit)
