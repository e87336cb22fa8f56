"""Redirect and liveness routes."""

from html import escape

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import HTMLResponse, RedirectResponse

from shortlink.errors import ShortlinkNotFoundError

router = APIRouter()

NOT_FOUND_PAGE = """<!DOCTYPE html>
<html>
<head><title>Shortlink not found</title></head>
<body>
<h1>404</h1>
<p>The short link '{slug}' does not exist.</p>
</body>
</html>
"""


@router.get("/up", include_in_schema=False)
async def health_check_web(request: Request):
    """Liveness endpoint for load balancers."""
    service = request.app.state.service

    health = await service.health_check()

    if health["overall"]:
        return {"status": "healthy"}

    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Service unhealthy",
    )


@router.get("/{slug}", include_in_schema=False)
async def redirect_to_destination(request: Request, slug: str):
    """Redirect to the destination of a short link."""
    service = request.app.state.service

    try:
        short_link = await service.resolve(slug)
    except ShortlinkNotFoundError:
        return HTMLResponse(
            content=NOT_FOUND_PAGE.format(slug=escape(slug)),
            status_code=status.HTTP_404_NOT_FOUND,
        )

    # Temporary redirect
    return RedirectResponse(url=short_link.destination, status_code=status.HTTP_302_FOUND)
