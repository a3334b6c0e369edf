"""MongoDB stores for questions, tests and results."""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from ..models import Question, QuestionCreate, Result, TestInfo

logger = logging.getLogger(__name__)


class MongoQuestionStore:
    """Reads and inserts questions in the `questions` collection."""
    
    COLLECTION = "questions"
    
    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db[self.COLLECTION]
    
    async def find_questions_by_ids(self, question_ids: List[str]) -> List[Question]:
        """Fetch all referenced questions in a single query."""
        if not question_ids:
            return []
        
        cursor = self.collection.find(
            {"question_id": {"$in": list(question_ids)}},
            {"_id": 0}
        )
        docs = await cursor.to_list(length=None)
        return [Question(**doc) for doc in docs]
    
    async def find_question(self, question_id: str) -> Optional[Question]:
        doc = await self.collection.find_one({"question_id": question_id}, {"_id": 0})
        return Question(**doc) if doc else None
    
    async def insert_questions(
        self,
        questions: List[QuestionCreate],
        created_by: str
    ) -> List[Question]:
        """Store new questions, assigning ids. Returns the stored questions."""
        stored = [
            Question(
                question_id=str(uuid.uuid4()),
                created_by=created_by,
                **q.model_dump()
            )
            for q in questions
        ]
        if stored:
            await self.collection.insert_many([q.model_dump() for q in stored])
        return stored


class MongoTestStore:
    """Read-only access to test metadata in the `tests` collection."""
    
    COLLECTION = "tests"
    
    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db[self.COLLECTION]
    
    async def find_test(self, test_id: str) -> Optional[TestInfo]:
        doc = await self.collection.find_one({"test_id": test_id}, {"_id": 0})
        if not doc:
            return None
        
        passing_score = (doc.get("settings") or {}).get("passing_score", 60)
        return TestInfo(
            test_id=doc["test_id"],
            title=doc.get("title", ""),
            description=doc.get("description"),
            passing_score=passing_score
        )


class MongoResultStore:
    """
    Append-only store for results in the `results` collection.
    
    Results are written once at submission. No update method is exposed.
    """
    
    COLLECTION = "results"
    
    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db[self.COLLECTION]
    
    async def create(self, result: Result) -> Result:
        stored = result.model_copy(update={
            "result_id": str(uuid.uuid4()),
            "submitted_at": datetime.now(timezone.utc)
        })
        await self.collection.insert_one(stored.model_dump(exclude={"test"}))
        logger.info(f"Stored result {stored.result_id} for test {stored.test_id}")
        return stored
    
    async def find_by_user(self, user_id: str) -> List[Result]:
        return await self._find({"user_id": user_id})
    
    async def find_by_test(self, test_id: str) -> List[Result]:
        return await self._find({"test_id": test_id})
    
    async def _find(self, query: dict) -> List[Result]:
        cursor = self.collection.find(query, {"_id": 0}).sort("submitted_at", -1)
        docs = await cursor.to_list(length=None)
        return [Result(**doc) for doc in docs]
