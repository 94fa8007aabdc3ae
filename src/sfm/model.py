"""
Core Survey Model Objects

Defines the fundamental data structures of the Structured Feedback Model.

These are pure value classes representing:
    - Options (selectable choices of a rating question)
    - Questions (rating or free text)
    - Surveys (root container)
    - Responses (one answer to one question)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about HTTP, forms or charts
        - Are immutable (every edit returns a new value)
        - Are fully serializable
        - Represent structure, not behavior
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from .errors import ValidationError


class QuestionType(Enum):
    """The two kinds of question a survey can hold."""

    RATING = "rating"
    TEXT = "text"


@dataclass(frozen=True)
class Option:
    """
    One selectable choice of a rating question.

    Properties:
        text:
            Display label (e.g. "Very Poor")

        value:
            Numeric weight, used both for aggregation and display.
            Values are distinct within a question.

        id:
            Storage identifier. None while the option is a draft.
    """

    text: str
    value: int
    id: Optional[int] = None

    @property
    def is_persisted(self) -> bool:
        return self.id is not None


@dataclass(frozen=True)
class RatingQuestion:
    """
    A closed numeric-choice question.

    Properties:
        text:
            The prompt shown to respondents

        options:
            Ordered option set. Never empty; the declared order is
            the order used by result distributions.

        id:
            Storage identifier. None while the question is a draft.

    INVARIANT:
        A rating question without options cannot be constructed.
    """

    text: str
    options: Tuple[Option, ...]
    id: Optional[int] = None

    def __post_init__(self):
        # Accept any sequence but always store a tuple
        object.__setattr__(self, "options", tuple(self.options))
        if not self.options:
            raise ValidationError("options", "rating question requires at least one option")

    @property
    def type(self) -> QuestionType:
        return QuestionType.RATING

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def get_option(self, answer: str) -> Optional[Option]:
        """
        Retrieve the option a rating answer selects.

        Args:
            answer: Answer string, the exact string form of an option value

        Returns:
            Option object or None if no option value matches
        """
        for option in self.options:
            if str(option.value) == answer:
                return option
        return None


@dataclass(frozen=True)
class TextQuestion:
    """
    A free-form question. Any string is an acceptable answer.

    Properties:
        text: The prompt shown to respondents
        id: Storage identifier. None while the question is a draft.
    """

    text: str
    id: Optional[int] = None

    @property
    def type(self) -> QuestionType:
        return QuestionType.TEXT

    @property
    def options(self) -> Tuple[Option, ...]:
        return ()

    @property
    def is_persisted(self) -> bool:
        return self.id is not None


Question = Union[RatingQuestion, TextQuestion]


@dataclass(frozen=True)
class Survey:
    """
    Root container for a feedback survey.

    Properties:
        title:
            Survey title. May be empty while drafting; validation
            rejects an empty title.

        description:
            Free text shown above the questions

        questions:
            Ordered questions. The order is both the presentation
            order and the results report order.

        id:
            Storage identifier. None while the survey is a draft.

    LIFECYCLE:
        Created by an author as a draft, persisted by the external
        store (which assigns every id), then read-only for respondents.
        Questions must not change once responses exist.
    """

    title: str = ""
    description: str = ""
    questions: Tuple[Question, ...] = field(default_factory=tuple)
    id: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "questions", tuple(self.questions))

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def get_question(self, question_id: int) -> Optional[Question]:
        """
        Retrieve a question by ID.

        Args:
            question_id: Question identifier

        Returns:
            Question object or None if not found
        """
        for question in self.questions:
            if question.id == question_id:
                return question
        return None


@dataclass(frozen=True)
class Response:
    """
    One respondent's answer to one question.

    For rating questions `answer` is the string form of an option value
    (e.g. "3"). For text questions it is unconstrained, empty included.
    """

    question_id: int
    answer: str = ""


def require_persisted(survey: Survey) -> Survey:
    """
    Ensure every question and option of a survey carries a storage id.

    Response collection and aggregation key everything by question id,
    so they only accept surveys that came back from the store. The
    survey's own id is not required.

    Question ids must be unique within the survey and option ids unique
    within their question.

    Raises:
        ValidationError: naming the first entity without an id or
            reusing an id
    """
    question_ids = set()
    for i, question in enumerate(survey.questions):
        if not question.is_persisted:
            raise ValidationError(f"questions[{i}].id", "question has not been persisted")
        if question.id in question_ids:
            raise ValidationError(f"questions[{i}].id", f"duplicate question id {question.id}")
        question_ids.add(question.id)

        option_ids = set()
        for j, option in enumerate(question.options):
            if not option.is_persisted:
                raise ValidationError(
                    f"questions[{i}].options[{j}].id", "option has not been persisted"
                )
            if option.id in option_ids:
                raise ValidationError(
                    f"questions[{i}].options[{j}].id", f"duplicate option id {option.id}"
                )
            option_ids.add(option.id)
    return survey
