"""
Subjective grading - short-answer and descriptive answers graded by an
external answer grader.
"""

import logging
from typing import Any, Protocol

from ..errors import DataIntegrityError
from ..models import AnswerEvaluation, GradedAnswer
from ..utils import round_marks
from .answer_resolver import ResolvedAnswer

logger = logging.getLogger(__name__)

FALLBACK_FEEDBACK = "Automatic evaluation unavailable. This answer needs manual review."


class ExternalAnswerGrader(Protocol):
    async def evaluate(self, student_answer: str, correct_answer: str) -> Any:
        """Return an AnswerEvaluation (or a dict in its shape)."""


def fallback_evaluation() -> AnswerEvaluation:
    """Deterministic verdict used whenever the external grader fails."""
    return AnswerEvaluation(
        is_correct=False,
        marks=0.0,
        similarity=0.0,
        feedback=FALLBACK_FEEDBACK
    )


async def evaluate_or_fallback(grader, student_answer: str, correct_answer: str):
    """
    Run the external grader once.
    
    Returns:
        (evaluation, auto_evaluated) - auto_evaluated is False for fallbacks
    """
    try:
        evaluation = await grader.evaluate(student_answer, correct_answer)
        if not isinstance(evaluation, AnswerEvaluation):
            evaluation = AnswerEvaluation.model_validate(evaluation)
        return evaluation, True
    except Exception as e:
        logger.warning(f"⚠️ External grading failed, using fallback grade: {e}")
        return fallback_evaluation(), False


class SubjectiveGrader:
    """Grades free-text answers through an ExternalAnswerGrader."""
    
    def __init__(self, external_grader: ExternalAnswerGrader):
        self.external_grader = external_grader
    
    async def grade(self, resolved: ResolvedAnswer) -> GradedAnswer:
        answer, question = resolved
        
        if not question.correct_answer:
            raise DataIntegrityError(
                f"Question {question.question_id} has no correct answer to grade against",
                question_id=question.question_id
            )
        
        student_answer = "" if answer.user_answer is None else str(answer.user_answer)
        evaluation, auto_evaluated = await evaluate_or_fallback(
            self.external_grader,
            student_answer,
            question.correct_answer
        )
        
        return GradedAnswer(
            question=question,
            user_answer=answer.user_answer,
            is_correct=evaluation.is_correct,
            marks_obtained=round_marks(evaluation.marks * question.marks, question.marks),
            feedback=evaluation.feedback,
            time_spent=answer.time_spent,
            auto_evaluated=auto_evaluated
        )
