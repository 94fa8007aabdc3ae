"""
Survey Definition: authoring operations and validation.

Every operation takes a Survey and returns a new Survey. Nothing is
mutated in place; the caller keeps the latest value.

Ids are never assigned here. New questions and options are drafts
until the external store persists the survey.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Optional, Tuple, Union

from sfm.config import DEFAULT_CONFIG, SurveyConfig
from sfm.errors import ValidationError
from sfm.model import Option, Question, QuestionType, RatingQuestion, Survey, TextQuestion


EDITABLE_QUESTION_FIELDS = ("text", "type")


def default_options(config: Optional[SurveyConfig] = None) -> Tuple[Option, ...]:
    """Option set for a new rating question, taken from the rating scale."""
    config = config or DEFAULT_CONFIG
    return tuple(Option(text=point.text, value=point.value) for point in config.rating_scale)


def _build_question(
    question_type: QuestionType,
    text: str = "",
    question_id: Optional[int] = None,
    config: Optional[SurveyConfig] = None,
) -> Question:
    if question_type is QuestionType.RATING:
        return RatingQuestion(text=text, options=default_options(config), id=question_id)
    return TextQuestion(text=text, id=question_id)


def new_survey(title: str = "", description: str = "") -> Survey:
    """Empty draft survey."""
    return Survey(title=title, description=description)


def update_survey(survey: Survey, **fields: str) -> Survey:
    """
    Replace the title and/or description of a survey.

    Raises:
        ValueError: If any other field is given
    """
    unknown = set(fields) - {"title", "description"}
    if unknown:
        raise ValueError(f"Cannot update survey field(s): {', '.join(sorted(unknown))}")
    return replace(survey, **fields)


def add_question(
    survey: Survey,
    question_type: Union[QuestionType, str],
    config: Optional[SurveyConfig] = None,
) -> Survey:
    """
    Append a question with an empty prompt.

    Rating questions start with the configured rating scale
    (five points, "Very Poor" to "Excellent", by default).
    Text questions have no options.
    """
    question_type = QuestionType(question_type)
    question = _build_question(question_type, config=config)
    return replace(survey, questions=survey.questions + (question,))


def update_question(
    survey: Survey,
    index: int,
    field: str,
    value: Union[str, QuestionType],
    config: Optional[SurveyConfig] = None,
) -> Survey:
    """
    Set the prompt or the type of the question at `index`.

    Changing the type builds a new question of the other kind: a rating
    question gets the configured rating scale and a text question drops
    its options. The question id and prompt carry over. Setting the type
    a question already has leaves its options untouched.

    Raises:
        IndexError: If index is outside [0, len(questions))
        ValueError: If field is not "text" or "type", or the type is unknown
    """
    if not 0 <= index < len(survey.questions):
        raise IndexError(
            f"Question index {index} out of range for {len(survey.questions)} question(s)"
        )
    if field not in EDITABLE_QUESTION_FIELDS:
        raise ValueError(f"Cannot update question field {field!r}")

    question = survey.questions[index]
    if field == "text":
        updated = replace(question, text=value)
    else:
        new_type = QuestionType(value)
        if new_type is question.type:
            return survey
        updated = _build_question(new_type, text=question.text, question_id=question.id, config=config)

    questions = list(survey.questions)
    questions[index] = updated
    return replace(survey, questions=tuple(questions))


def validate(survey: Survey) -> Survey:
    """
    Check a survey before it is persisted.

    Checked in order:
        - title is non-empty
        - every question has a non-empty prompt
        - every rating question has options with distinct values

    Returns:
        The survey, unchanged

    Raises:
        ValidationError: naming the first offending field
    """
    if not survey.title.strip():
        raise ValidationError("title", "survey title must not be empty")

    for i, question in enumerate(survey.questions):
        if not question.text.strip():
            raise ValidationError(f"questions[{i}].text", "question text must not be empty")
        if question.type is QuestionType.RATING:
            # Non-empty options are guaranteed by RatingQuestion itself
            values = [option.value for option in question.options]
            if len(values) != len(set(values)):
                duplicates = sorted({v for v in values if values.count(v) > 1})
                raise ValidationError(
                    f"questions[{i}].options",
                    f"duplicate option values: {duplicates}",
                )
    return survey
