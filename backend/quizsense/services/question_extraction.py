"""
Question extraction service - generates practice questions from a PDF.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import fitz  # PyMuPDF
from pydantic import ValidationError

from ..concurrency import bounded_gather
from ..config.settings import settings
from ..errors import ExtractionError
from ..models import Question, QuestionCreate
from ..utils import extract_json
from .gemini import GeminiClient

logger = logging.getLogger(__name__)


def chunk_text(text: str, chunk_size: int) -> List[str]:
    return [text[i:i + chunk_size] for i in range(0, len(text), chunk_size)]


class QuestionExtractionService:
    """ExternalQuestionExtractor: PDF text in, structured questions out."""

    EXTRACTION_PROMPT = """You are an expert teacher.
Goal: Create a set of practice questions based on the provided text.

Instructions:
1. Generate at least 5 unique questions from the text below.
2. VARY the difficulty: include "easy", "medium" and "hard" questions.
3. VARY the type: include "mcq", "true-false" and "short-answer".
4. Output MUST be a valid JSON array. Do not add any markdown formatting.

REQUIRED JSON STRUCTURE:
[
  {{
    "question": "Question text here?",
    "type": "mcq",
    "difficulty": "medium",
    "subject": "General",
    "topic": "Extracted Topic",
    "options": [{{"text": "Option A", "is_correct": true}}, {{"text": "Option B", "is_correct": false}}],
    "correct_answer": "Option A",
    "marks": 5
  }}
]

Text to analyze:
\"\"\"{text}\"\"\""""

    def __init__(self, question_store, client: Optional[GeminiClient] = None):
        self.question_store = question_store
        self.client = client or GeminiClient()
        self.chunk_size = settings.PDF_CHUNK_SIZE
        self.min_text_length = settings.MIN_PDF_TEXT_LENGTH
        self.concurrency = settings.GRADING_CONCURRENCY

    async def extract_and_store(self, pdf_bytes: bytes, created_by: str) -> List[Question]:
        """Extract questions from a PDF and store them for `created_by`."""
        drafts = await self.extract_questions(pdf_bytes)
        stored = await self.question_store.insert_questions(drafts, created_by)
        logger.info(f"✅ Stored {len(stored)} extracted questions for {created_by}")
        return stored

    async def extract_questions(self, pdf_bytes: bytes) -> List[QuestionCreate]:
        """
        Extract questions from PDF text, one Gemini call per text chunk.

        Raises:
            ExtractionError: If the PDF has no usable text or no questions came back
        """
        text = (await asyncio.to_thread(self._extract_text, pdf_bytes)).strip()

        if len(text) < self.min_text_length:
            raise ExtractionError(
                "The uploaded PDF appears to be a scanned image or empty. Please upload a text-based PDF."
            )

        chunks = chunk_text(text, self.chunk_size)
        logger.info(f"🔍 Split PDF into {len(chunks)} chunks")

        results = await bounded_gather(
            (self._extract_from_chunk(chunk, i, len(chunks)) for i, chunk in enumerate(chunks)),
            self.concurrency
        )
        questions = [q for chunk_questions in results for q in chunk_questions]

        if not questions:
            raise ExtractionError("The text was processed but no questions were generated")

        logger.info(f"✅ Extracted {len(questions)} questions")
        return questions

    @staticmethod
    def _extract_text(pdf_bytes: bytes) -> str:
        """Synchronous PDF text extraction (run in thread pool)."""
        try:
            pdf_document = fitz.open(stream=pdf_bytes, filetype="pdf")
        except Exception as e:
            raise ExtractionError(f"Invalid PDF: {e}") from e

        try:
            return "\n".join(page.get_text() for page in pdf_document)
        finally:
            pdf_document.close()

    async def _extract_from_chunk(self, chunk: str, index: int, total: int) -> List[QuestionCreate]:
        """A failed chunk contributes no questions."""
        logger.info(f"Processing chunk {index + 1}/{total}...")

        try:
            response_text = await self.client.generate(
                self.EXTRACTION_PROMPT.format(text=chunk),
                max_output_tokens=4000
            )
            items = extract_json(response_text)
        except Exception as e:
            logger.warning(f"⚠️ Chunk {index + 1}: extraction failed: {e}")
            return []

        if isinstance(items, dict):
            items = items.get("questions", [])
        if not isinstance(items, list):
            logger.warning(f"⚠️ Chunk {index + 1}: response is not a list of questions")
            return []

        return self._parse_questions(items)

    @staticmethod
    def _parse_questions(items: List[Any]) -> List[QuestionCreate]:
        questions = []
        for item in items:
            if not isinstance(item, dict):
                continue
            try:
                questions.append(QuestionCreate.model_validate(_normalize_keys(item)))
            except ValidationError as e:
                logger.debug(f"Skipping invalid question draft: {e}")
        return questions


def _normalize_keys(item: Dict[str, Any]) -> Dict[str, Any]:
    """Accept the camelCase keys Gemini sometimes returns."""
    item = dict(item)
    if "correctAnswer" in item and "correct_answer" not in item:
        item["correct_answer"] = item.pop("correctAnswer")
    options = item.get("options") or []
    item["options"] = [
        {
            "text": opt.get("text", ""),
            "is_correct": _parse_flag(opt.get("is_correct", opt.get("isCorrect", False)))
        }
        for opt in options
        if isinstance(opt, dict)
    ]
    if item.get("type") == "true-false" and not item["options"]:
        answer = str(item.get("correct_answer", "")).strip().lower()
        if answer in ("true", "false"):
            item["options"] = [
                {"text": "True", "is_correct": answer == "true"},
                {"text": "False", "is_correct": answer == "false"},
            ]
    return item


def _parse_flag(value: Any) -> Any:
    """Map "true"/"false" strings to bools. Other non-bool values are left for validation to reject."""
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    return value
