"""Error taxonomy for the submission pipeline."""


class SubmissionError(Exception):
    """Base class for errors surfaced to callers of the evaluation pipeline."""

    category = "submission"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_detail(self) -> dict:
        return {"category": self.category, "message": self.message}


class SubmissionValidationError(SubmissionError):
    """Required submission fields are missing or invalid."""

    category = "validation"


class DataIntegrityError(SubmissionError):
    """An objective question does not have exactly one correct option."""

    category = "data_integrity"

    def __init__(self, message: str, question_id: str = None):
        super().__init__(message)
        self.question_id = question_id


class ExternalGraderError(SubmissionError):
    """The external grading service failed or returned malformed data."""

    category = "external_grader"


class QuestionLookupError(SubmissionError):
    """The batch question lookup failed."""

    category = "question_lookup"


class PersistenceError(SubmissionError):
    """The result record could not be written."""

    category = "persistence"


class ExtractionError(SubmissionError):
    """Text or questions could not be extracted from an uploaded document."""

    category = "extraction"


class QuestionNotFoundError(SubmissionError):
    """A single requested question does not exist."""

    category = "not_found"
