"""
Resource Search API: FastAPI app factory.

Use: uvicorn server.app:app
Or:  from server import app
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from resource_search.errors import InvalidArgumentError

from .config import get_config
from .routes import register_routes
from .state import AppState, get_state, set_state
from .utils import error_response

logger = logging.getLogger(__name__)

_STATUS_ERRORS = {
    400: "Bad Request",
    404: "Not Found",
    405: "Method Not Allowed",
    500: "Internal Server Error",
}


def _register_exception_handlers(app: FastAPI) -> None:
    """Every failure leaves as {success: false, message, error}."""

    @app.exception_handler(InvalidArgumentError)
    async def invalid_argument(request: Request, exc: InvalidArgumentError):
        return JSONResponse(status_code=400, content=error_response(str(exc), "Bad Request"))

    @app.exception_handler(RequestValidationError)
    async def request_validation(request: Request, exc: RequestValidationError):
        messages = []
        for err in exc.errors():
            loc = ".".join(str(part) for part in err.get("loc", ()) if part not in ("query", "body"))
            messages.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
        return JSONResponse(
            status_code=400,
            content=error_response("; ".join(messages) or "Invalid request", "Bad Request"),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(str(exc.detail), _STATUS_ERRORS.get(exc.status_code, "Error")),
        )

    @app.exception_handler(Exception)
    async def unhandled(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=error_response("Internal server error", "Internal Server Error"),
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: log config problems and counts, then warm the index."""
    state = get_state()
    _, errors = state.config.validate()
    for error in errors:
        logger.warning("[startup] %s", error)
    logger.info("Resource Search API starting...")
    logger.info("Resources: %d from %s", len(state.resources), state.config.resources_json_path)
    logger.info("History: %s", state.config.history_path)
    # Warm the index
    state.get_index()
    yield
    logger.info("Resource Search API stopped")


def create_app(state: Optional[AppState] = None) -> FastAPI:
    """Build FastAPI app with CORS, routes, error envelopes, and startup logging."""
    config = state.config if state is not None else get_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if state is not None:
        set_state(state)

    app = FastAPI(
        title="Resource Search API",
        description="Fuzzy search, suggestions, facets, and recommendations over a resource catalogue",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_routes(app)
    _register_exception_handlers(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    config = get_config()
    uvicorn.run("server.app:app", host=config.host, port=config.port, log_level=config.log_level.lower())
