"""Result-related Pydantic models"""

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .question import Question


class ResultStatus(str, Enum):
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class GradedAnswer(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    question: Question  # Snapshot at submission time
    user_answer: Any = None
    is_correct: bool = False
    marks_obtained: float = 0
    feedback: str = ""
    time_spent: float = 0  # seconds
    auto_evaluated: bool = True  # False when the fallback grade was used
    grading_error: Optional[str] = None  # Set when the answer could not be graded

    @property
    def is_graded(self) -> bool:
        return self.grading_error is None


class Evaluation(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    weak_areas: List[str] = []
    strengths: List[str] = []
    recommendations: List[str] = []
    overall_feedback: Optional[str] = None


class TestInfo(BaseModel):
    __test__ = False  # not a pytest class
    model_config = ConfigDict(extra="ignore", frozen=True)

    test_id: str
    title: str
    description: Optional[str] = None
    passing_score: float = 60  # percent


class Result(BaseModel):
    """Append-only record of a completed submission."""
    model_config = ConfigDict(extra="ignore", use_enum_values=True, frozen=True)

    result_id: Optional[str] = None  # Assigned by the result store
    test_id: str
    user_id: str
    answers: List[GradedAnswer] = []
    score: float
    total_marks: float
    percentage: float
    time_taken: float  # seconds
    started_at: datetime
    submitted_at: Optional[datetime] = None  # Assigned by the result store
    status: ResultStatus = ResultStatus.IN_PROGRESS.value
    evaluation: Evaluation = Field(default_factory=Evaluation)
    test: Optional[TestInfo] = None  # Populated on return, not persisted
