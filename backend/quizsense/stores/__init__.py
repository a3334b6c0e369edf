"""Persistence boundaries of the evaluation pipeline."""

from typing import List, Optional, Protocol

from ..models import Question, QuestionCreate, Result, TestInfo
from .mongo import MongoQuestionStore, MongoResultStore, MongoTestStore


class QuestionStore(Protocol):
    async def find_questions_by_ids(self, question_ids: List[str]) -> List[Question]:
        """Batch lookup. Unknown ids are simply absent from the result."""

    async def find_question(self, question_id: str) -> Optional[Question]:
        ...

    async def insert_questions(self, questions: List[QuestionCreate], created_by: str) -> List[Question]:
        ...


class ResultStore(Protocol):
    async def create(self, result: Result) -> Result:
        """Persist a new result, assigning result_id and submitted_at."""

    async def find_by_user(self, user_id: str) -> List[Result]:
        ...

    async def find_by_test(self, test_id: str) -> List[Result]:
        ...


class TestStore(Protocol):

    async def find_test(self, test_id: str) -> Optional[TestInfo]:
        ...


__all__ = [
    "QuestionStore",
    "ResultStore",
    "TestStore",
    "MongoQuestionStore",
    "MongoResultStore",
    "MongoTestStore",
]
