"""
Topic analysis - weak areas, strengths and recommendations.

Pure functions over graded answers; no external calls.
"""

from typing import Iterable, List, Optional

from ..models import Evaluation, GradedAnswer

MAX_TOPICS = 3
UNKNOWN_TOPIC = "Unknown"

LOW_ACCURACY = 0.5
HIGH_ACCURACY = 0.8

EXCELLENT_PERCENTAGE = 85
GOOD_PERCENTAGE = 70
DEFAULT_PASSING_PERCENTAGE = 60

LOW_ACCURACY_RECOMMENDATIONS = [
    "Focus on fundamental concepts",
    "Practice more basic questions",
]
MEDIUM_ACCURACY_RECOMMENDATIONS = [
    "Work on time management",
    "Focus on weak areas identified",
]
HIGH_ACCURACY_RECOMMENDATIONS = [
    "Excellent performance! Maintain consistency",
]


def _distinct_topics(answers: Iterable[GradedAnswer]) -> List[str]:
    # First-seen order, not frequency
    topics = dict.fromkeys(a.question.topic or UNKNOWN_TOPIC for a in answers)
    return list(topics)[:MAX_TOPICS]


def identify_weak_areas(answers: List[GradedAnswer]) -> List[str]:
    """Topics of incorrect answers, first 3 distinct in answer order."""
    return _distinct_topics(a for a in answers if not a.is_correct)


def identify_strengths(answers: List[GradedAnswer]) -> List[str]:
    """Topics of correct answers, first 3 distinct in answer order."""
    return _distinct_topics(a for a in answers if a.is_correct)


def accuracy_ratio(answers: List[GradedAnswer]) -> float:
    if not answers:
        return 0.0
    return sum(1 for a in answers if a.is_correct) / len(answers)


def generate_recommendations(answers: List[GradedAnswer]) -> List[str]:
    ratio = accuracy_ratio(answers)
    
    if ratio < LOW_ACCURACY:
        return list(LOW_ACCURACY_RECOMMENDATIONS)
    if ratio < HIGH_ACCURACY:
        return list(MEDIUM_ACCURACY_RECOMMENDATIONS)
    return list(HIGH_ACCURACY_RECOMMENDATIONS)


def generate_overall_feedback(
    percentage: float,
    passing_score: float = DEFAULT_PASSING_PERCENTAGE
) -> str:
    if percentage >= EXCELLENT_PERCENTAGE:
        return f"Excellent work! You scored {percentage:.1f}%."
    if percentage >= GOOD_PERCENTAGE:
        return f"Good job. You scored {percentage:.1f}%, a little more practice will take you further."
    if percentage >= passing_score:
        return f"You passed with {percentage:.1f}%. Review the weak areas to improve."
    return (
        f"You scored {percentage:.1f}%, below the passing score of {passing_score:g}%. "
        "Revisit the weak areas and try again."
    )


def analyze_performance(
    answers: List[GradedAnswer],
    percentage: float,
    passing_score: Optional[float] = None
) -> Evaluation:
    """Build the evaluation summary. Ungraded answers are ignored."""
    graded = [a for a in answers if a.is_graded]
    
    return Evaluation(
        weak_areas=identify_weak_areas(graded),
        strengths=identify_strengths(graded),
        recommendations=generate_recommendations(graded),
        overall_feedback=generate_overall_feedback(
            percentage,
            DEFAULT_PASSING_PERCENTAGE if passing_score is None else passing_score
        )
    )
