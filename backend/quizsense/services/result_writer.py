"""
Result writer - persists the completed result exactly once.
"""

import logging
from datetime import datetime
from typing import List, Optional

from ..errors import PersistenceError
from ..models import Evaluation, GradedAnswer, Result, ResultStatus, TestInfo
from .aggregation import ScoreSummary, compute_percentage

logger = logging.getLogger(__name__)


class ResultWriter:
    """Builds and stores the append-only Result record."""
    
    def __init__(self, result_store):
        self.result_store = result_store
    
    async def write(
        self,
        test_id: str,
        user_id: str,
        answers: List[GradedAnswer],
        summary: ScoreSummary,
        evaluation: Evaluation,
        time_taken: float,
        started_at: datetime,
        test: Optional[TestInfo] = None
    ) -> Result:
        """
        Persist the result and return it populated with the test summary.
        
        Raises:
            PersistenceError: If the store rejects the write
        """
        result = Result(
            test_id=test_id,
            user_id=user_id,
            answers=answers,
            score=summary.total_score,
            total_marks=summary.total_marks,
            percentage=compute_percentage(summary.total_score, summary.total_marks),
            time_taken=time_taken,
            started_at=started_at,
            status=ResultStatus.COMPLETED.value,
            evaluation=evaluation
        )
        
        try:
            stored = await self.result_store.create(result)
        except Exception as e:
            logger.error(f"❌ Failed to store result for test {test_id}, user {user_id}: {e}")
            raise PersistenceError(f"Could not save result: {e}") from e
        
        if test is not None:
            stored = stored.model_copy(update={"test": test})
        return stored
