"""Root and health endpoints."""

from fastapi import APIRouter

from ..state import get_state

router = APIRouter()


@router.get("/")
def root():
    state = get_state()
    return {
        "name": "Resource Search API",
        "version": "1.0.0",
        "status": "loaded" if state.resources else "empty",
        "resources": len(state.resources),
        "endpoints": {
            "search": [
                "/api/search",
                "/api/search/suggestions",
                "/api/search/facets",
                "/api/search/history",
            ],
            "recommendations": [
                "/api/recommendations",
                "/api/resources/{id}/alternatives",
            ],
            "config": ["/api/config/recommendation"],
        },
    }


@router.get("/api/health")
def health():
    state = get_state()
    return {
        "status": "healthy",
        "resources": len(state.resources),
        "index_built": state.get_index().is_built,
    }
