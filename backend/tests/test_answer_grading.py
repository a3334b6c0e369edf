import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from quizsense.errors import ExternalGraderError
from quizsense.services import GeminiAnswerGrader


def _grader(*responses, max_retries=0):
    client = MagicMock()
    client.timeout = 5
    client.generate = AsyncMock(side_effect=list(responses))
    return GeminiAnswerGrader(client=client, max_retries=max_retries), client


def test_parses_fenced_json():
    grader, client = _grader(
        '```json\n{"isCorrect": true, "marks": 0.756, "similarity": 0.9, "feedback": "Nice"}\n```'
    )
    
    evaluation = asyncio.run(grader.evaluate("student text", "model text"))
    
    assert evaluation.is_correct is True
    assert evaluation.marks == 0.76
    assert evaluation.similarity == 0.9
    assert evaluation.feedback == "Nice"
    prompt = client.generate.call_args.args[0]
    assert "student text" in prompt
    assert "model text" in prompt


def test_integer_marks_are_accepted():
    grader, _ = _grader('{"isCorrect": false, "marks": 0, "similarity": 0, "feedback": "Wrong"}')
    
    evaluation = asyncio.run(grader.evaluate("a", "b"))
    
    assert evaluation.marks == 0
    assert evaluation.is_correct is False


@pytest.mark.parametrize("response", [
    "I think the answer is mostly right.",
    '{"isCorrect": "true", "marks": 0.5, "feedback": "x"}',
    '{"isCorrect": true, "marks": 2, "feedback": "x"}',
    '[{"isCorrect": true, "marks": 0.5}]',
])
def test_malformed_response_raises(response):
    grader, _ = _grader(response)
    
    with pytest.raises(ExternalGraderError):
        asyncio.run(grader.evaluate("a", "b"))


def test_timeout_raises_grader_error():
    grader, _ = _grader(asyncio.TimeoutError())
    
    with pytest.raises(ExternalGraderError) as exc:
        asyncio.run(grader.evaluate("a", "b"))
    
    assert "timed out" in exc.value.message


def test_transient_failure_is_retried(monkeypatch):
    monkeypatch.setattr("quizsense.concurrency.RETRY_BASE_DELAY", 0)
    grader, client = _grader(
        ConnectionError("429 rate limit"),
        '{"isCorrect": true, "marks": 1, "similarity": 1, "feedback": "Perfect"}',
        max_retries=1
    )
    
    evaluation = asyncio.run(grader.evaluate("a", "b"))
    
    assert evaluation.marks == 1
    assert client.generate.await_count == 2
