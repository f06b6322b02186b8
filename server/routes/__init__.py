"""Register all route modules on the FastAPI app."""

from fastapi import FastAPI

from .root import router as root_router
from .config import router as config_router
from .search import router as search_router
from .recommendations import router as recommendations_router
from .resources import router as resources_router


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the app."""
    app.include_router(root_router)
    app.include_router(config_router, prefix="/api/config", tags=["config"])
    app.include_router(search_router, prefix="/api/search", tags=["search"])
    app.include_router(recommendations_router, prefix="/api/recommendations", tags=["recommendations"])
    app.include_router(resources_router, prefix="/api/resources", tags=["resources"])
