"""API routes implementation."""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from datetime import datetime, timezone

from .schemas import (
    EncodeRequest,
    EncodeResponse,
    DecodeResponse,
    HealthResponse,
    ErrorResponse,
)
from shortlink.common.logging_config import get_logger
from shortlink.common.public_url import public_base_url, short_url_for
from shortlink.errors import ErrorKind, ShortlinkError, ShortlinkNotFoundError

router = APIRouter()

logger = get_logger("web.api")

# Any other ShortlinkError is a client input problem
ERROR_STATUS = {
    ErrorKind.SLUG_TAKEN: status.HTTP_409_CONFLICT,
    ErrorKind.ALLOCATION_EXHAUSTED: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _error_response(status_code: int, error: str, *messages: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, messages=list(messages)).model_dump(),
    )


@router.post(
    "/encode",
    response_model=EncodeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ErrorResponse, "description": "Slug already taken"},
        422: {"model": ErrorResponse, "description": "Invalid destination or slug"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
        503: {"model": ErrorResponse, "description": "No free slug could be allocated"},
    },
    summary="Create short link",
    description="Shorten a destination URL. Optionally provide a custom slug.",
)
async def encode(request: Request, body: EncodeRequest):
    """Create a short link."""
    service = request.app.state.service
    config = request.app.state.config

    try:
        short_link = await service.create(body.url, body.slug)
    except ShortlinkError as e:
        return _error_response(
            ERROR_STATUS.get(e.kind, status.HTTP_422_UNPROCESSABLE_ENTITY),
            "Failed to create shortlink",
            e.message,
        )
    except Exception as e:
        logger.exception(f"Unexpected error creating short link: {e}")
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to create shortlink",
            "Internal error",
        )

    base_url = public_base_url(
        headers=request.headers,
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )

    short_url = short_url_for(short_link.slug, base_url, config.path_prefix)

    return EncodeResponse(
        slug=short_link.slug,
        short_url=short_url,
        destination=short_link.destination,
        created_at=short_link.created_at,
    )


@router.get(
    "/decode/{slug}",
    response_model=DecodeResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Slug not found"},
    },
    summary="Decode short link",
    description="Look up a short link by slug (case-insensitive).",
)
async def decode(request: Request, slug: str):
    """Get details of a short link."""
    service = request.app.state.service

    try:
        short_link = await service.resolve(slug)
    except ShortlinkNotFoundError as e:
        return _error_response(status.HTTP_404_NOT_FOUND, e.message)

    return DecodeResponse(
        slug=short_link.slug,
        destination=short_link.destination,
        custom=short_link.custom,
        created_at=short_link.created_at,
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        cache="healthy" if health["cache"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
