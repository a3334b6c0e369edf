"""
Evaluation routes.

Endpoints:
- POST /api/evaluation/submit
- POST /api/evaluation/handwritten
- GET /api/evaluation/results
"""

from typing import List

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from ..config.settings import settings
from ..errors import SubmissionError
from ..models import HandwrittenEvaluation, Result, TestSubmission
from ..services import ServiceContainer
from ..utils import validate_file_size, validate_file_type
from .dependencies import get_current_user_id, get_services, to_http_exception


def create_evaluation_routes() -> APIRouter:
    """Create evaluation routes."""
    
    router = APIRouter(prefix="/api/evaluation", tags=["evaluation"])
    
    @router.post("/submit", response_model=Result, status_code=201)
    async def submit_test(
        submission: TestSubmission,
        user_id: str = Depends(get_current_user_id),
        services: ServiceContainer = Depends(get_services)
    ):
        """Grade a test submission and store the result."""
        try:
            return await services.evaluator.submit_test(
                test_id=submission.test_id,
                user_id=user_id,
                answers=submission.answers,
                time_taken=submission.time_taken,
                started_at=submission.started_at
            )
        except SubmissionError as e:
            raise to_http_exception(e)
    
    @router.post("/handwritten", response_model=HandwrittenEvaluation)
    async def evaluate_handwritten_answer(
        question_id: str = Form(...),
        file: UploadFile = File(...),
        user_id: str = Depends(get_current_user_id),
        services: ServiceContainer = Depends(get_services)
    ):
        """Transcribe a handwritten answer image and grade it."""
        is_valid, msg = validate_file_type(file.filename, settings.ALLOWED_IMAGE_EXTENSIONS)
        if not is_valid:
            raise HTTPException(status_code=400, detail=msg)
        
        image_bytes = await file.read()
        
        is_valid, msg = validate_file_size(image_bytes, settings.MAX_FILE_SIZE_MB)
        if not is_valid:
            raise HTTPException(status_code=400, detail=msg)
        
        try:
            return await services.handwriting.evaluate(question_id, image_bytes)
        except SubmissionError as e:
            raise to_http_exception(e)
    
    @router.get("/results", response_model=List[Result])
    async def get_user_results(
        user_id: str = Depends(get_current_user_id),
        services: ServiceContainer = Depends(get_services)
    ):
        """Results of the calling user, newest first."""
        return await services.evaluator.get_user_results(user_id)
    
    return router
