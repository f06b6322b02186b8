"""Resource lookup and alternatives."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from resource_search.models import find_resource
from resource_search.recommendation.alternatives import DEFAULT_MAX_ALTERNATIVES, LOW_SIMILARITY

from ..state import get_state
from ..utils import success_response

router = APIRouter()

MAX_ALTERNATIVES_LIMIT = 20


def _get_or_404(resource_id: str):
    resource = find_resource(get_state().resources, resource_id)
    if resource is None:
        raise HTTPException(status_code=404, detail=f"Resource not found: {resource_id}")
    return resource


@router.get("/{resource_id}")
def get_resource(resource_id: str):
    return success_response(_get_or_404(resource_id))


@router.get("/{resource_id}/alternatives")
def get_alternatives(
    resource_id: str,
    limit: Optional[int] = Query(None, ge=0, le=MAX_ALTERNATIVES_LIMIT),
    min_score: float = Query(LOW_SIMILARITY, alias="minScore", ge=0, le=1),
):
    """Explicitly linked alternatives first, then similar resources."""
    resource = _get_or_404(resource_id)
    engine = get_state().get_recommendation_engine()
    max_alternatives = limit if limit is not None else DEFAULT_MAX_ALTERNATIVES
    alternatives = engine.get_alternatives(resource, max_alternatives, min_score)
    return success_response(alternatives, limit=max_alternatives)
