"""
Result routes.

Endpoints:
- GET /api/tests/{test_id}/results
"""

from typing import List

from fastapi import APIRouter, Depends

from ..models import Result
from ..services import ServiceContainer
from .dependencies import get_current_user_id, get_services


def create_results_routes() -> APIRouter:
    """Create result listing routes."""
    
    router = APIRouter(prefix="/api/tests", tags=["tests"])
    
    @router.get("/{test_id}/results", response_model=List[Result])
    async def get_test_results(
        test_id: str,
        user_id: str = Depends(get_current_user_id),
        services: ServiceContainer = Depends(get_services)
    ):
        """All results recorded for a test, newest first."""
        return await services.evaluator.get_test_results(test_id)
    
    return router
