"""Submission request models"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SubmittedAnswer(BaseModel):
    model_config = ConfigDict(extra="ignore")

    question_id: str
    user_answer: Any = None
    time_spent: float = Field(default=0, ge=0)  # seconds


class TestSubmission(BaseModel):
    """Body of a test submission. Required fields are checked by the evaluator."""
    __test__ = False  # not a pytest class
    model_config = ConfigDict(extra="ignore")

    test_id: Optional[str] = None
    answers: Optional[List[Any]] = None  # Items validated by the evaluator
    time_taken: Optional[float] = None  # seconds
    started_at: Optional[datetime] = None
