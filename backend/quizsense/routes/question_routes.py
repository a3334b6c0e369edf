"""
Question routes.

Endpoints:
- POST /api/questions/extract
"""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from ..config.settings import settings
from ..errors import SubmissionError
from ..services import ServiceContainer
from ..utils import validate_file_size, validate_file_type
from .dependencies import get_current_user_id, get_services, to_http_exception


def create_question_routes() -> APIRouter:
    """Create question routes."""
    
    router = APIRouter(prefix="/api/questions", tags=["questions"])
    
    @router.post("/extract", status_code=201)
    async def extract_questions(
        file: UploadFile = File(...),
        user_id: str = Depends(get_current_user_id),
        services: ServiceContainer = Depends(get_services)
    ):
        """Generate questions from an uploaded PDF and store them."""
        is_valid, msg = validate_file_type(file.filename, settings.ALLOWED_PDF_EXTENSIONS)
        if not is_valid:
            raise HTTPException(status_code=400, detail=msg)
        
        file_bytes = await file.read()
        
        is_valid, msg = validate_file_size(file_bytes, settings.MAX_FILE_SIZE_MB)
        if not is_valid:
            raise HTTPException(status_code=400, detail=msg)
        
        try:
            questions = await services.question_extraction.extract_and_store(file_bytes, user_id)
        except SubmissionError as e:
            raise to_http_exception(e)
        
        return {
            "success": True,
            "question_count": len(questions),
            "questions": [q.model_dump() for q in questions]
        }
    
    return router
