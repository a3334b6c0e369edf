import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import fitz
import pytest

from quizsense.errors import ExtractionError
from quizsense.services import QuestionExtractionService
from quizsense.services.question_extraction import chunk_text

from conftest import FakeQuestionStore

MCQ = {
    "question": "What is the capital of France?",
    "type": "mcq",
    "difficulty": "easy",
    "subject": "Geography",
    "topic": "Capitals",
    "options": [{"text": "Paris", "isCorrect": True}, {"text": "Rome", "isCorrect": False}],
    "correctAnswer": "Paris",
    "marks": 2,
}
SHORT = {
    "question": "Name the longest river in Africa.",
    "type": "short-answer",
    "topic": "Rivers",
    "correct_answer": "The Nile",
}


def _service(*responses, text=None, store=None):
    client = MagicMock()
    client.generate = AsyncMock(side_effect=list(responses))
    service = QuestionExtractionService(store or FakeQuestionStore(), client=client)
    if text is not None:
        service._extract_text = lambda pdf_bytes: text
    return service, client


def _pdf(text):
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


def test_extracts_questions_from_real_pdf():
    text = "The Nile is the longest river in Africa.\nParis is the capital of France.\n"
    service, client = _service(json.dumps([MCQ, SHORT]))
    
    questions = asyncio.run(service.extract_questions(_pdf(text)))
    
    assert [q.type for q in questions] == ["mcq", "short-answer"]
    assert questions[0].options[0].is_correct is True
    assert questions[0].correct_answer == "Paris"
    assert "Nile" in client.generate.call_args.args[0]


def test_short_text_is_rejected_as_scanned():
    service, client = _service(text="   too short  ")
    
    with pytest.raises(ExtractionError):
        asyncio.run(service.extract_questions(b"%PDF"))
    
    client.generate.assert_not_called()


def test_invalid_pdf_is_extraction_error():
    service, _ = _service()
    
    with pytest.raises(ExtractionError):
        asyncio.run(service.extract_questions(b"definitely not a pdf"))


def test_failed_chunks_contribute_nothing():
    service, client = _service(
        RuntimeError("quota"),
        "not json at all",
        "```json\n" + json.dumps([SHORT]) + "\n```",
        text="x" * 250
    )
    service.chunk_size = 100
    
    questions = asyncio.run(service.extract_questions(b"%PDF"))
    
    assert client.generate.await_count == 3
    assert len(questions) == 1
    assert questions[0].correct_answer == "The Nile"


def test_no_questions_is_an_error():
    service, _ = _service("[]", text="y" * 80)
    
    with pytest.raises(ExtractionError):
        asyncio.run(service.extract_questions(b"%PDF"))


def test_invalid_drafts_are_skipped():
    drafts = [
        {"question": "Missing options", "type": "mcq"},
        {"question": "No answer", "type": "descriptive"},
        {"question": "Bad marks", "type": "short-answer", "correct_answer": "x", "marks": 0},
        "just a string",
        {"question": "Is water wet?", "type": "true-false", "correct_answer": "True"},
    ]
    service, _ = _service(json.dumps({"questions": drafts}), text="z" * 80)
    
    questions = asyncio.run(service.extract_questions(b"%PDF"))
    
    assert len(questions) == 1
    assert [(o.text, o.is_correct) for o in questions[0].options] == [("True", True), ("False", False)]


def test_extract_and_store_assigns_creator():
    store = FakeQuestionStore()
    service, _ = _service(json.dumps([MCQ]), text="w" * 80, store=store)
    
    stored = asyncio.run(service.extract_and_store(b"%PDF", "teacher-1"))
    
    assert stored[0].created_by == "teacher-1"
    assert stored[0].question_id in store.questions


def test_chunk_text():
    assert chunk_text("abcdefg", 3) == ["abc", "def", "g"]
    assert chunk_text("", 3) == []


def test_drafts_without_a_single_correct_option_are_skipped():
    def mcq(question, *flags):
        return {
            "question": question,
            "type": "mcq",
            "options": [{"text": text, "is_correct": flag} for text, flag in zip(["Paris", "Rome"], flags)],
        }
    
    drafts = [
        mcq("None correct?", False, False),
        mcq("Both correct?", True, True),
        mcq("String flags?", "false", "true"),
        mcq("Unreadable flag?", "yes", False),
    ]
    
    questions = QuestionExtractionService._parse_questions(drafts)
    
    assert [q.question for q in questions] == ["String flags?"]
    assert [(o.text, o.is_correct) for o in questions[0].options] == [("Paris", False), ("Rome", True)]
