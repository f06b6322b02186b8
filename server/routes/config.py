"""Recommendation config endpoints: read and partial update."""

from typing import Any, Dict

from fastapi import APIRouter, Body

from ..state import get_state
from ..utils import success_response

router = APIRouter()


@router.get("/recommendation")
def get_recommendation_config():
    return success_response(get_state().recommendation_config)


@router.patch("/recommendation")
def update_recommendation_config(changes: Dict[str, Any] = Body(...)):
    """Merge the given fields (snake_case or camelCase); others keep their values."""
    config = get_state().update_recommendation_config(**changes)
    return success_response(config)
