"""Pydantic models for QuizSense"""

from .question import (
    QuestionType,
    Difficulty,
    QuestionOption,
    QuestionCreate,
    Question,
    OBJECTIVE_TYPES
)
from .submission import SubmittedAnswer, TestSubmission
from .evaluation import AnswerEvaluation, HandwrittenEvaluation
from .result import (
    ResultStatus,
    GradedAnswer,
    Evaluation,
    TestInfo,
    Result
)

__all__ = [
    # Question models
    "QuestionType",
    "Difficulty",
    "QuestionOption",
    "QuestionCreate",
    "Question",
    "OBJECTIVE_TYPES",
    
    # Submission models
    "SubmittedAnswer",
    "TestSubmission",
    
    # External grader models
    "AnswerEvaluation",
    "HandwrittenEvaluation",
    
    # Result models
    "ResultStatus",
    "GradedAnswer",
    "Evaluation",
    "TestInfo",
    "Result",
]
