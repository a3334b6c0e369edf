"""Models exchanged with the external answer grader"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class AnswerEvaluation(BaseModel):
    """Verdict of the external grader for one subjective answer."""
    model_config = ConfigDict(strict=True, frozen=True)

    is_correct: bool = Field(validation_alias=AliasChoices("is_correct", "isCorrect"))
    marks: float = Field(ge=0, le=1)  # Fraction of the question's marks
    similarity: float = Field(default=0.0, ge=0, le=1)  # Informational only
    feedback: str = ""


class HandwrittenEvaluation(BaseModel):
    question_id: str
    extracted_text: str
    evaluation: AnswerEvaluation
    auto_evaluated: bool = True
