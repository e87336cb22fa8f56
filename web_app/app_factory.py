"""FastAPI application factory."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import api_router
from .web import web_router
from .middleware.logging import LoggingMiddleware


API_PREFIX = "/api/v1"


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Same envelope as domain errors: {"error": ..., "messages": [...]}
    messages = [error.get("msg", "Invalid value") for error in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error": "Invalid request", "messages": messages},
    )


def create_app(service_instance, config, lifespan=None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        service_instance: Shortlink service (None when a lifespan builds it)
        config: Configuration instance
        lifespan: Optional lifespan context manager

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Shortlink",
        description="Short links with collision-safe slugs and SSRF-safe destinations",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    app.state.service = service_instance
    app.state.config = config

    # The API carries no cookies or credentials
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )
    app.add_middleware(LoggingMiddleware)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    # API routes first; the web router ends in a catch-all /{slug}
    app.include_router(api_router, prefix=API_PREFIX, tags=["API"])
    app.include_router(web_router, tags=["Web"])

    return app
