import asyncio
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from quizsense.errors import PersistenceError
from quizsense.models import Evaluation, GradedAnswer, TestInfo
from quizsense.services import ResultWriter, ScoreSummary

from conftest import FakeResultStore, make_question

STARTED_AT = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


def _write(store, summary, test=None):
    answers = [GradedAnswer(question=make_question(marks=4), is_correct=True, marks_obtained=4)]
    return asyncio.run(ResultWriter(store).write(
        test_id="t1",
        user_id="u1",
        answers=answers,
        summary=summary,
        evaluation=Evaluation(recommendations=["Keep going"]),
        time_taken=600,
        started_at=STARTED_AT,
        test=test
    ))


def test_writes_completed_result_once():
    store = FakeResultStore()
    
    result = _write(store, ScoreSummary(3, 4, 75.0))
    
    assert len(store.results) == 1
    assert result.result_id is not None
    assert result.submitted_at is not None
    assert result.status == "completed"
    assert result.score == 3
    assert result.total_marks == 4
    assert result.percentage == 75.0
    assert result.started_at == STARTED_AT
    assert result.evaluation.recommendations == ["Keep going"]


def test_percentage_computed_at_persist_time():
    result = _write(FakeResultStore(), ScoreSummary(0, 0, 0))
    assert result.percentage == 0


def test_populates_test_info():
    info = TestInfo(test_id="t1", title="Capitals quiz")
    result = _write(FakeResultStore(), ScoreSummary(1, 1, 100.0), test=info)
    
    assert result.test == info


def test_store_failure_is_persistence_error():
    with pytest.raises(PersistenceError) as exc:
        _write(FakeResultStore(fail=True), ScoreSummary(1, 1, 100.0))
    
    assert exc.value.category == "persistence"


def test_result_is_immutable():
    result = _write(FakeResultStore(), ScoreSummary(1, 1, 100.0))
    
    with pytest.raises(ValidationError):
        result.score = 99
