"""
Submission evaluator - the test submission scoring pipeline.

FLOW:
1. Validate the submission
2. Resolve answers to questions (one batch lookup, fail fast)
3. Grade answers concurrently
   - objective: exact match against the correct option
   - subjective: external grader, bounded fan-out, fallback on failure
4. Aggregate scores
5. Analyse topics and build recommendations
6. Persist the result once
"""

import asyncio
import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional, Sequence

from pydantic import ValidationError

from ..config.settings import settings
from ..errors import DataIntegrityError, SubmissionValidationError
from ..models import GradedAnswer, Result, SubmittedAnswer, TestInfo
from .aggregation import aggregate_scores
from .answer_resolver import AnswerResolver, ResolvedAnswer
from .objective_grading import ObjectiveGrader
from .result_writer import ResultWriter
from .subjective_grading import SubjectiveGrader
from .topic_analysis import analyze_performance

logger = logging.getLogger(__name__)


class SubmissionEvaluator:
    """Grades a test submission and records the result."""

    def __init__(
        self,
        question_store,
        result_store,
        external_grader,
        test_store=None,
        grading_concurrency: Optional[int] = None
    ):
        self.result_store = result_store
        self.test_store = test_store
        self.resolver = AnswerResolver(question_store)
        self.objective_grader = ObjectiveGrader()
        self.subjective_grader = SubjectiveGrader(external_grader)
        self.writer = ResultWriter(result_store)
        self.grading_concurrency = grading_concurrency or settings.GRADING_CONCURRENCY

    async def submit_test(
        self,
        test_id: str,
        user_id: str,
        answers: Sequence[Any],
        time_taken: float,
        started_at: Optional[datetime] = None
    ) -> Result:
        """
        Grade and persist one submission.

        Args:
            test_id: Test being submitted
            user_id: Submitting user
            answers: SubmittedAnswer models or dicts with question_id,
                user_answer and time_spent
            time_taken: Total time in seconds
            started_at: Start time; estimated from time_taken when missing

        Raises:
            SubmissionValidationError: Missing or invalid submission fields
            QuestionLookupError: The question lookup failed
            PersistenceError: The result could not be stored
        """
        submitted = self._validate(test_id, user_id, answers, time_taken)
        if started_at is None:
            try:
                started_at = datetime.now(timezone.utc) - timedelta(seconds=time_taken)
            except OverflowError as e:
                raise SubmissionValidationError(f"time_taken is out of range: {time_taken}") from e

        logger.info(f"⏳ Evaluating submission for test {test_id}: {len(submitted)} answers")

        resolution = await self.resolver.resolve(submitted)
        test_info = await self._load_test(test_id)

        graded = await self.grade_answers(resolution.resolved)

        summary = aggregate_scores(graded)
        evaluation = analyze_performance(
            graded,
            summary.percentage,
            test_info.passing_score if test_info else None
        )

        result = await self.writer.write(
            test_id=test_id,
            user_id=user_id,
            answers=graded,
            summary=summary,
            evaluation=evaluation,
            time_taken=time_taken,
            started_at=started_at,
            test=test_info
        )

        logger.info(
            f"✅ Test {test_id} by {user_id}: {summary.total_score}/{summary.total_marks} "
            f"({len(graded)} graded, {len(resolution.missing_question_ids)} dropped)"
        )
        return result

    async def grade_answers(self, resolved: List[ResolvedAnswer]) -> List[GradedAnswer]:
        """Grade all answers concurrently, preserving submission order."""
        semaphore = asyncio.Semaphore(self.grading_concurrency)
        return list(await asyncio.gather(
            *(self._grade_one(item, semaphore) for item in resolved)
        ))

    async def _grade_one(self, resolved: ResolvedAnswer, semaphore: asyncio.Semaphore) -> GradedAnswer:
        try:
            if resolved.question.is_objective:
                return self.objective_grader.grade(resolved)

            async with semaphore:
                return await self.subjective_grader.grade(resolved)
        except DataIntegrityError as e:
            logger.error(f"❌ {e.message}")
            return GradedAnswer(
                question=resolved.question,
                user_answer=resolved.answer.user_answer,
                is_correct=False,
                marks_obtained=0,
                feedback="This question could not be graded because of a problem with its answer key.",
                time_spent=resolved.answer.time_spent,
                auto_evaluated=False,
                grading_error=e.message
            )

    async def _load_test(self, test_id: str) -> Optional[TestInfo]:
        if self.test_store is None:
            return None
        try:
            return await self.test_store.find_test(test_id)
        except Exception as e:
            # Test metadata only feeds overall feedback
            logger.warning(f"⚠️ Could not load test {test_id}: {e}")
            return None

    @staticmethod
    def _validate(
        test_id: str,
        user_id: str,
        answers: Sequence[Any],
        time_taken: float
    ) -> List[SubmittedAnswer]:
        missing = []
        if not test_id:
            missing.append("test_id")
        if not user_id:
            missing.append("user_id")
        if not answers:
            missing.append("answers")
        if time_taken is None:
            missing.append("time_taken")
        if missing:
            raise SubmissionValidationError(f"Missing required fields: {', '.join(missing)}")

        if not math.isfinite(time_taken) or time_taken < 0:
            raise SubmissionValidationError("time_taken must be a non-negative number of seconds")

        try:
            return [
                a if isinstance(a, SubmittedAnswer) else SubmittedAnswer.model_validate(a)
                for a in answers
            ]
        except ValidationError as e:
            raise SubmissionValidationError(f"Invalid answer: {e}") from e

    async def get_user_results(self, user_id: str) -> List[Result]:
        return await self.result_store.find_by_user(user_id)

    async def get_test_results(self, test_id: str) -> List[Result]:
        return await self.result_store.find_by_test(test_id)
