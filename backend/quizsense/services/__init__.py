"""Services for grading submissions and processing uploaded documents."""

from dataclasses import dataclass
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from ..stores import MongoQuestionStore, MongoResultStore, MongoTestStore
from .answer_grading import GeminiAnswerGrader
from .answer_resolver import AnswerResolver, ResolvedAnswer, Resolution
from .aggregation import ScoreSummary, aggregate_scores, compute_percentage
from .gemini import GeminiClient
from .handwriting import GeminiHandwritingRecognizer, HandwrittenAnswerService
from .objective_grading import ObjectiveGrader
from .question_extraction import QuestionExtractionService
from .result_writer import ResultWriter
from .subjective_grading import ExternalAnswerGrader, SubjectiveGrader, FALLBACK_FEEDBACK
from .submission_evaluation import SubmissionEvaluator
from .topic_analysis import analyze_performance


@dataclass
class ServiceContainer:
    """Services shared by the route handlers."""
    evaluator: SubmissionEvaluator
    handwriting: HandwrittenAnswerService
    question_extraction: QuestionExtractionService


def build_services(db: AsyncIOMotorDatabase, client: Optional[GeminiClient] = None) -> ServiceContainer:
    """Wire the Mongo stores and Gemini adapters together."""
    client = client or GeminiClient()
    question_store = MongoQuestionStore(db)
    grader = GeminiAnswerGrader(client)
    
    return ServiceContainer(
        evaluator=SubmissionEvaluator(
            question_store=question_store,
            result_store=MongoResultStore(db),
            external_grader=grader,
            test_store=MongoTestStore(db)
        ),
        handwriting=HandwrittenAnswerService(
            question_store=question_store,
            recognizer=GeminiHandwritingRecognizer(client),
            external_grader=grader
        ),
        question_extraction=QuestionExtractionService(question_store, client)
    )


__all__ = [
    "AnswerResolver",
    "ResolvedAnswer",
    "Resolution",
    "ObjectiveGrader",
    "SubjectiveGrader",
    "ExternalAnswerGrader",
    "FALLBACK_FEEDBACK",
    "GeminiAnswerGrader",
    "GeminiClient",
    "ScoreSummary",
    "aggregate_scores",
    "compute_percentage",
    "analyze_performance",
    "ResultWriter",
    "SubmissionEvaluator",
    "GeminiHandwritingRecognizer",
    "HandwrittenAnswerService",
    "QuestionExtractionService",
    "ServiceContainer",
    "build_services",
]
