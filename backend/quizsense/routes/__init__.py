"""API route factories."""

from .dependencies import get_current_user_id, get_services, to_http_exception
from .evaluation_routes import create_evaluation_routes
from .question_routes import create_question_routes
from .results_routes import create_results_routes

__all__ = [
    "get_services",
    "get_current_user_id",
    "to_http_exception",
    "create_evaluation_routes",
    "create_question_routes",
    "create_results_routes",
]
