"""Question-related Pydantic models"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class QuestionType(str, Enum):
    MCQ = "mcq"
    TRUE_FALSE = "true-false"
    SHORT_ANSWER = "short-answer"
    DESCRIPTIVE = "descriptive"


OBJECTIVE_TYPES = {QuestionType.MCQ.value, QuestionType.TRUE_FALSE.value}


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class QuestionOption(BaseModel):
    text: str
    is_correct: bool = Field(default=False, strict=True)


class QuestionBase(BaseModel):
    model_config = ConfigDict(extra="ignore", use_enum_values=True)

    type: QuestionType
    question: str
    options: List[QuestionOption] = []  # Objective types only
    correct_answer: Optional[str] = None  # Canonical answer for subjective types
    explanation: Optional[str] = None
    difficulty: Difficulty = Difficulty.MEDIUM.value
    tags: List[str] = []
    subject: str = "General"
    topic: Optional[str] = None
    marks: float = Field(default=1, ge=0.01)

    @property
    def is_objective(self) -> bool:
        return self.type in OBJECTIVE_TYPES


class QuestionCreate(QuestionBase):
    """Model for a new question, e.g. one produced by PDF extraction"""

    @model_validator(mode="after")
    def _check_answer_source(self):
        if self.is_objective:
            if not self.options:
                raise ValueError(f"{self.type} question requires options")
            correct = sum(1 for opt in self.options if opt.is_correct)
            if correct != 1:
                raise ValueError(f"{self.type} question needs exactly one correct option, got {correct}")
        elif not self.correct_answer:
            raise ValueError(f"{self.type} question requires correct_answer")
        return self


class Question(QuestionBase):
    """Stored question. Grading reads a snapshot of this model."""
    question_id: str
    created_by: Optional[str] = None
