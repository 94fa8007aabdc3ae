"""
Error taxonomy for the Structured Feedback Model.

    - ValidationError            malformed survey definition or payload
    - NotFoundError              no response slot for a question id
    - IncompleteSubmissionError  response set breaks the completeness rule
    - DataIntegrityError         bad aggregation input (collected, not raised)
"""
from __future__ import annotations

from typing import Optional


class SurveyError(Exception):
    """Base class for every error raised by this package."""
    pass


class ValidationError(SurveyError):
    """Raised when a survey definition or payload is malformed.

    `field` names the first offending field, e.g. "title" or
    "questions[2].options".
    """

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class NotFoundError(SurveyError):
    """Raised when no response slot exists for a question id."""

    def __init__(self, question_id: int):
        super().__init__(f"No response slot for question {question_id}")
        self.question_id = question_id


class IncompleteSubmissionError(SurveyError):
    """Raised when a response set cannot be submitted for a survey."""

    def __init__(self, message: str, question_id: Optional[int] = None):
        super().__init__(message)
        self.question_id = question_id


class DataIntegrityError(SurveyError):
    """
    A single response that aggregation could not use.

    Aggregation never raises this. It records one instance per skipped
    response in `SurveyResults.errors`.
    """

    def __init__(self, question_id: int, answer: str, reason: str):
        super().__init__(f"Question {question_id}, answer {answer!r}: {reason}")
        self.question_id = question_id
        self.answer = answer
        self.reason = reason

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataIntegrityError):
            return NotImplemented
        return (self.question_id, self.answer, self.reason) == (
            other.question_id, other.answer, other.reason
        )

    def __hash__(self) -> int:
        return hash((self.question_id, self.answer, self.reason))
