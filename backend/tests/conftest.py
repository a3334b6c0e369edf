"""Shared fixtures and in-memory fakes for the evaluation pipeline."""

import asyncio
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest

from quizsense.models import AnswerEvaluation, Question, QuestionCreate, Result, TestInfo


def make_question(
    question_id: Optional[str] = None,
    qtype: str = "mcq",
    marks: float = 1,
    topic: Optional[str] = "General",
    correct: str = "Paris",
    options: Optional[List[str]] = None,
    correct_answer: Optional[str] = None,
    **extra
) -> Question:
    """Build a question. Objective types get options with `correct` marked."""
    if qtype in ("mcq", "true-false"):
        texts = options if options is not None else [correct, "London", "Berlin"]
        extra.setdefault("options", [{"text": t, "is_correct": t == correct} for t in texts])
    else:
        extra.setdefault("correct_answer", correct_answer or "The canonical answer")
    
    return Question(
        question_id=question_id or str(uuid.uuid4()),
        type=qtype,
        question=f"Question about {topic}?",
        marks=marks,
        topic=topic,
        subject="Geography",
        **extra
    )


class FakeQuestionStore:
    def __init__(self, questions: List[Question] = None, fail: bool = False):
        self.questions: Dict[str, Question] = {q.question_id: q for q in questions or []}
        self.fail = fail
        self.batch_calls: List[List[str]] = []
    
    async def find_questions_by_ids(self, question_ids):
        self.batch_calls.append(list(question_ids))
        if self.fail:
            raise ConnectionError("database unavailable")
        return [self.questions[qid] for qid in question_ids if qid in self.questions]
    
    async def find_question(self, question_id):
        return self.questions.get(question_id)
    
    async def insert_questions(self, questions: List[QuestionCreate], created_by):
        stored = [
            Question(question_id=str(uuid.uuid4()), created_by=created_by, **q.model_dump())
            for q in questions
        ]
        for q in stored:
            self.questions[q.question_id] = q
        return stored


class FakeResultStore:
    def __init__(self, fail: bool = False):
        self.results: List[Result] = []
        self.fail = fail
    
    async def create(self, result: Result) -> Result:
        if self.fail:
            raise ConnectionError("write rejected")
        stored = result.model_copy(update={
            "result_id": str(uuid.uuid4()),
            "submitted_at": datetime.now(timezone.utc)
        })
        self.results.append(stored)
        return stored
    
    async def find_by_user(self, user_id):
        return [r for r in reversed(self.results) if r.user_id == user_id]
    
    async def find_by_test(self, test_id):
        return [r for r in reversed(self.results) if r.test_id == test_id]


class FakeTestStore:
    def __init__(self, tests: List[TestInfo] = None):
        self.tests = {t.test_id: t for t in tests or []}
    
    async def find_test(self, test_id):
        return self.tests.get(test_id)


class ScriptedGrader:
    """External grader returning a fixed evaluation, or raising `error`."""
    
    def __init__(self, evaluation=None, error: Exception = None, delay: float = 0):
        self.evaluation = evaluation or AnswerEvaluation(
            is_correct=True, marks=1.0, similarity=1.0, feedback="Good"
        )
        self.error = error
        self.delay = delay
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0
    
    async def evaluate(self, student_answer, correct_answer):
        self.calls.append((student_answer, correct_answer))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if self.error is not None:
                raise self.error
            return self.evaluation
        finally:
            self.in_flight -= 1


@pytest.fixture
def question_store():
    return FakeQuestionStore()


@pytest.fixture
def result_store():
    return FakeResultStore()


@pytest.fixture
def grader():
    return ScriptedGrader()
