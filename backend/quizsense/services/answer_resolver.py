"""
Answer resolver - maps submitted answers to their questions.
"""

import logging
from typing import List, NamedTuple

from ..errors import QuestionLookupError
from ..models import Question, SubmittedAnswer

logger = logging.getLogger(__name__)


class ResolvedAnswer(NamedTuple):
    answer: SubmittedAnswer
    question: Question


class Resolution(NamedTuple):
    resolved: List[ResolvedAnswer]
    missing_question_ids: List[str]


class AnswerResolver:
    """Resolves answers against the question store with one batch lookup."""
    
    def __init__(self, question_store):
        self.question_store = question_store
    
    async def resolve(self, answers: List[SubmittedAnswer]) -> Resolution:
        """
        Pair each answer with its full question.
        
        Answers whose question cannot be found are dropped, not failed.
        
        Raises:
            QuestionLookupError: If the batch lookup itself fails
        """
        question_ids = list(dict.fromkeys(a.question_id for a in answers))
        
        try:
            questions = await self.question_store.find_questions_by_ids(question_ids)
        except Exception as e:
            logger.error(f"Question lookup failed for {len(question_ids)} ids: {e}")
            raise QuestionLookupError(f"Could not load questions: {e}") from e
        
        question_map = {q.question_id: q for q in questions}
        
        resolved = []
        missing = []
        for answer in answers:
            question = question_map.get(answer.question_id)
            if question is None:
                missing.append(answer.question_id)
                continue
            resolved.append(ResolvedAnswer(answer, question))
        
        if missing:
            logger.warning(f"⚠️ Dropping {len(missing)} answers with unknown questions: {missing}")
        
        return Resolution(resolved, missing)
