"""
Score aggregation over graded answers.
"""

from typing import Iterable, NamedTuple

from ..models import GradedAnswer


class ScoreSummary(NamedTuple):
    total_score: float
    total_marks: float
    percentage: float


def compute_percentage(score: float, total_marks: float) -> float:
    """score / total_marks * 100, or 0 when there is nothing to score."""
    if total_marks <= 0:
        return 0.0
    return (score / total_marks) * 100


def aggregate_scores(graded_answers: Iterable[GradedAnswer]) -> ScoreSummary:
    """
    Sum obtained marks and available marks over graded answers.
    
    total_marks sums each question's own marks value, never marks_obtained.
    Answers that could not be graded (grading_error set) count towards neither.
    """
    graded = [a for a in graded_answers if a.is_graded]
    
    total_score = round(sum(a.marks_obtained for a in graded), 2)
    total_marks = round(sum(a.question.marks for a in graded), 2)
    
    return ScoreSummary(
        total_score=total_score,
        total_marks=total_marks,
        percentage=compute_percentage(total_score, total_marks)
    )
