"""
Gemini answer grader - compares a student's answer with the model answer.
"""

import asyncio
import json
import logging
from typing import Optional

from pydantic import ValidationError

from ..concurrency import retry_with_exponential_backoff
from ..config.settings import settings
from ..errors import ExternalGraderError
from ..models import AnswerEvaluation
from ..utils import extract_json
from .gemini import GeminiClient

logger = logging.getLogger(__name__)


class GeminiAnswerGrader:
    """ExternalAnswerGrader backed by Gemini."""
    
    EVALUATION_PROMPT = """You are an expert teacher grading a student's answer.
Analyze the "Student Answer" and compare it to the "Correct Answer".

Provide your evaluation as a VALID JSON object with this structure:
{{
  "isCorrect": true,
  "marks": 0.8,
  "similarity": 0.85,
  "feedback": "Your answer is good, but you missed a key point about cellular respiration."
}}

- "isCorrect": boolean. True if the answer is mostly correct (similarity > 0.7).
- "marks": float between 0.0 and 1.0 (0.0 for wrong, 1.0 for perfect).
- "similarity": float between 0.0 and 1.0, how semantically similar the answers are.
- "feedback": short, constructive feedback for the student.

Return ONLY the JSON object.

---
STUDENT ANSWER:
---
{student_answer}

---
CORRECT ANSWER:
---
{correct_answer}"""
    
    def __init__(self, client: Optional[GeminiClient] = None, max_retries: Optional[int] = None):
        self.client = client or GeminiClient()
        self.max_retries = settings.LLM_MAX_RETRIES if max_retries is None else max_retries
    
    async def evaluate(self, student_answer: str, correct_answer: str) -> AnswerEvaluation:
        """
        Grade one answer.
        
        Transient API failures are retried with backoff. Malformed responses
        are not retried.
        
        Raises:
            ExternalGraderError: If Gemini fails or returns malformed data
        """
        prompt = self.EVALUATION_PROMPT.format(
            student_answer=student_answer,
            correct_answer=correct_answer
        )
        
        try:
            response_text = await retry_with_exponential_backoff(
                self.client.generate,
                prompt,
                max_retries=self.max_retries
            )
        except asyncio.TimeoutError:
            raise ExternalGraderError(f"Grading timed out after {self.client.timeout}s") from None
        except Exception as e:
            raise ExternalGraderError(f"Gemini grading failed: {e}") from e
        
        return self._parse_evaluation(response_text)
    
    @staticmethod
    def _parse_evaluation(response_text: str) -> AnswerEvaluation:
        try:
            data = extract_json(response_text)
        except json.JSONDecodeError as e:
            logger.warning(f"Unparseable grading response: {response_text[:200]}")
            raise ExternalGraderError(f"Failed to parse grading response as JSON: {e}") from e
        
        if not isinstance(data, dict):
            raise ExternalGraderError("Grading response is not a JSON object")
        
        try:
            evaluation = AnswerEvaluation.model_validate(data)
        except ValidationError as e:
            raise ExternalGraderError(f"Invalid grading response: {e}") from e
        
        return evaluation.model_copy(update={
            "marks": round(evaluation.marks, 2),
            "similarity": round(evaluation.similarity, 2)
        })
