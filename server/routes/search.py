"""Search endpoints: query, suggestions, facets, and search history."""

from typing import Optional

from fastapi import APIRouter, Query

from resource_search.search import (
    advanced_search,
    count_all_facets,
    create_search_snippet,
    filter_resources,
    flatten_facet_counts,
    has_balanced_quotes,
    recent_suggestions,
    sanitize_and_highlight,
)

from ..models import RecordSearchRequest
from ..state import get_state
from ..utils import (
    DEFAULT_SEARCH_LIMIT,
    DEFAULT_SUGGESTION_LIMIT,
    MAX_SEARCH_LIMIT,
    MAX_SUGGESTION_LIMIT,
    clamp_limit,
    split_csv,
    success_response,
)

router = APIRouter()


def _facet_filters(category, pricing, difficulty, tags) -> dict:
    return {
        "category": [category] if category else [],
        "pricing": [pricing] if pricing else [],
        "difficulty": [difficulty] if difficulty else [],
        "tags": split_csv(tags),
    }


@router.get("")
def search(
    q: str = Query("", description="Search query; AND / OR / NOT are operators"),
    limit: Optional[int] = Query(None, ge=0),
    category: Optional[str] = None,
    pricing: Optional[str] = None,
    difficulty: Optional[str] = None,
    tags: Optional[str] = Query(None, description="Comma-separated tags"),
):
    """
    Boolean fuzzy search, then facet filters. Non-empty queries are recorded.

    validQuery is false when q has unbalanced double quotes; the search still runs.
    """
    state = get_state()
    limit = clamp_limit(limit, DEFAULT_SEARCH_LIMIT, MAX_SEARCH_LIMIT)
    hits = advanced_search(state.get_index(), q)

    allowed = filter_resources(
        [resource for resource, _ in hits],
        _facet_filters(category, pricing, difficulty, tags),
    )
    allowed_ids = {r.id for r in allowed}
    hits = [(r, score) for r, score in hits if r.id in allowed_ids]

    if q.strip():
        state.record_search(q)

    results = [
        {
            "resource": resource,
            "score": round(score, 4),
            "highlightedTitle": sanitize_and_highlight(resource.title, q),
            "snippet": create_search_snippet(resource.description, q),
        }
        for resource, score in hits[:limit]
    ]
    return success_response(results, query=q, limit=limit, valid_query=has_balanced_quotes(q))


@router.get("/suggestions")
def suggestions(
    q: str = Query(""),
    limit: Optional[int] = Query(None, ge=0),
):
    """Ranked suggestions for q; recent searches when q is empty."""
    state = get_state()
    limit = clamp_limit(limit, DEFAULT_SUGGESTION_LIMIT, MAX_SUGGESTION_LIMIT)
    if q.strip():
        results = state.get_suggestion_engine().suggest(q, limit)
    else:
        results = recent_suggestions(state.search_history, limit)
    return success_response(results, query=q, limit=limit)


@router.get("/facets")
def facets(
    q: Optional[str] = None,
    category: Optional[str] = None,
    pricing: Optional[str] = None,
    difficulty: Optional[str] = None,
    tags: Optional[str] = Query(None, description="Comma-separated tags"),
):
    """Facet counts over the filtered, query-narrowed resource set."""
    state = get_state()
    filtered = filter_resources(
        state.resources, _facet_filters(category, pricing, difficulty, tags)
    )
    counts = count_all_facets(filtered, q)
    data = {
        "facetCounts": flatten_facet_counts(counts),
        "totalResults": counts["total_results"],
    }
    return success_response(data, query=q)


@router.get("/history")
def get_history(limit: Optional[int] = Query(None, ge=0)):
    state = get_state()
    items = state.search_history.items()
    if limit is not None:
        items = items[:limit]
    return success_response(items, limit=limit)


@router.post("/history")
def record_history(request: RecordSearchRequest):
    state = get_state()
    state.record_search(request.query)
    return success_response(state.search_history.items())


@router.delete("/history")
def clear_history():
    state = get_state()
    state.search_history.clear()
    return success_response({"cleared": True})
