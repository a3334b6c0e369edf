"""
Handwritten answer evaluation - OCR with Gemini vision, then grading.
"""

import asyncio
import io
import logging
from typing import Optional

from PIL import Image, UnidentifiedImageError

from ..config.settings import settings
from ..errors import DataIntegrityError, ExtractionError, QuestionNotFoundError
from ..models import HandwrittenEvaluation
from .gemini import GeminiClient
from .subjective_grading import evaluate_or_fallback

logger = logging.getLogger(__name__)


class GeminiHandwritingRecognizer:
    """ExternalTextRecognizer that transcribes handwriting with Gemini."""
    
    OCR_PROMPT = """Transcribe the handwritten text in this image exactly as written.
Return only the transcribed text, with no commentary or formatting."""
    
    def __init__(self, client: Optional[GeminiClient] = None):
        self.client = client or GeminiClient()
        self.jpeg_quality = settings.JPEG_QUALITY
    
    async def recognize(self, image_bytes: bytes) -> str:
        """
        Extract text from an answer image.
        
        Raises:
            ExtractionError: If the image is unreadable or OCR fails
        """
        jpeg_bytes = await asyncio.to_thread(self._to_jpeg, image_bytes)
        
        try:
            text = await self.client.generate(
                [self.OCR_PROMPT, {"mime_type": "image/jpeg", "data": jpeg_bytes}],
                max_output_tokens=2000
            )
        except Exception as e:
            logger.error(f"Handwriting recognition failed: {e}")
            raise ExtractionError(f"Handwriting recognition failed: {e}") from e
        
        if not text:
            raise ExtractionError("No text could be recognised in the image")
        return text
    
    def _to_jpeg(self, image_bytes: bytes) -> bytes:
        """Normalise any supported image to RGB JPEG (run in thread pool)."""
        try:
            img = Image.open(io.BytesIO(image_bytes))
            img = img.convert("RGB")
        except (UnidentifiedImageError, OSError) as e:
            raise ExtractionError(f"Invalid image: {e}") from e
        
        buffer = io.BytesIO()
        img.save(buffer, format="JPEG", quality=self.jpeg_quality, optimize=True)
        return buffer.getvalue()


class HandwrittenAnswerService:
    """Evaluates a handwritten answer image against a stored question."""
    
    def __init__(self, question_store, recognizer, external_grader):
        self.question_store = question_store
        self.recognizer = recognizer
        self.external_grader = external_grader
    
    async def evaluate(self, question_id: str, image_bytes: bytes) -> HandwrittenEvaluation:
        """
        Transcribe the image and grade the text. Nothing is persisted.
        
        Raises:
            QuestionNotFoundError: Unknown question_id
            ExtractionError: The image could not be transcribed
        """
        question = await self.question_store.find_question(question_id)
        if question is None:
            raise QuestionNotFoundError(f"Question {question_id} not found")
        
        extracted_text = await self.recognizer.recognize(image_bytes)
        
        correct_answer = question.correct_answer
        if not correct_answer and question.is_objective:
            correct = [opt.text for opt in question.options if opt.is_correct]
            correct_answer = correct[0] if len(correct) == 1 else None
        if not correct_answer:
            raise DataIntegrityError(
                f"Question {question_id} has no correct answer to grade against",
                question_id=question_id
            )
        
        evaluation, auto_evaluated = await evaluate_or_fallback(
            self.external_grader,
            extracted_text,
            correct_answer
        )
        
        return HandwrittenEvaluation(
            question_id=question_id,
            extracted_text=extracted_text,
            evaluation=evaluation,
            auto_evaluated=auto_evaluated
        )
