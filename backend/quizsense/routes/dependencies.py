"""Shared request dependencies for the route factories."""

from typing import Optional

from fastapi import Header, HTTPException, Request

from ..errors import SubmissionError
from ..services import ServiceContainer

STATUS_BY_CATEGORY = {
    "validation": 400,
    "not_found": 404,
    "data_integrity": 409,
    "extraction": 422,
    "question_lookup": 503,
    "persistence": 500,
}


def get_services(request: Request) -> ServiceContainer:
    """Services attached to the app at startup."""
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise HTTPException(status_code=503, detail="Services not initialized")
    return services


async def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """Caller identity. Authentication happens upstream of this service."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return x_user_id


def to_http_exception(error: SubmissionError) -> HTTPException:
    return HTTPException(
        status_code=STATUS_BY_CATEGORY.get(error.category, 500),
        detail=error.to_detail()
    )
