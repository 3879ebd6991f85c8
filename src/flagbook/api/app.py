"""
FastAPI Application Factory & Configuration.

This module initializes the Flagbook application instance. It is responsible for:
1.  **Middleware Setup**: CORS (Cross-Origin Resource Sharing) for the browser client.
2.  **Exception Handling**: Global handlers so every error comes back as JSON.
3.  **Routing**: Mounting the grid, message and upload routers.
4.  **Lifecycle**: Warming up the message store before the first request.

Design Pattern
--------------
We use an **Application Factory** pattern (`create_app`). This allows for:
-   Easy testing (separate app instances and dependency overrides per test).
-   Configuration injection through `Settings`.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from flagbook import __version__
from flagbook.api.i18n import pick_lang, translate
from flagbook.api.routers import grid, messages, uploads
from flagbook.api.schemas import HealthStatus
from flagbook.core.settings import get_logger, load_settings
from flagbook.core.store.messages import MessageStore

logger = get_logger("flagbook.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    ASGI Lifespan context manager.

    - **Startup**: Build the process-wide message store (loads the JSON file
      if one is configured) so the first request does not pay for it.
    - **Shutdown**: Nothing to release; every insert is already flushed.
    """
    store = MessageStore.get_instance()
    logger.info("Flagbook API starting with %d messages", len(store))
    yield
    logger.info("Flagbook API shutting down")


def create_app() -> FastAPI:
    """
    Construct and configure the Flagbook FastAPI application.

    Returns
    -------
    FastAPI
        The configured ASGI application ready to be served by Uvicorn.
    """
    app = FastAPI(
        title="Flagbook API",
        description="Sign the flag: claim a free cell and leave a message.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # -----------------------------------------------------------------------
    # Middleware
    # -----------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, restrict this to the site's domain.
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -----------------------------------------------------------------------
    # Global Exception Handlers
    # -----------------------------------------------------------------------
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Return structured JSON instead of a bare 500 page."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "detail": str(exc),
                "path": request.url.path,
            },
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        """Map Python ValueErrors to HTTP 400 Bad Request."""
        return JSONResponse(
            status_code=400,
            content={
                "error": "Bad Request",
                "detail": str(exc),
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Missing or malformed fields are a plain 400 with a readable message."""
        lang = pick_lang(request.headers.get("accept-language"))
        return JSONResponse(
            status_code=400,
            content={
                "error": "Bad Request",
                "detail": translate("all_required", lang),
                "errors": jsonable_encoder(exc.errors()),
            },
        )

    # -----------------------------------------------------------------------
    # Routes
    # -----------------------------------------------------------------------
    app.include_router(grid.router)
    app.include_router(messages.router)
    app.include_router(uploads.router)

    @app.get("/health", response_model=HealthStatus, tags=["System"])
    async def health_check() -> HealthStatus:
        """Simple liveness probe."""
        return HealthStatus(
            status="ok", environment=load_settings().environment, version=__version__
        )

    return app


# Alias kept for callers that prefer the "get" spelling.
get_app = create_app

__all__ = ["create_app", "get_app"]
