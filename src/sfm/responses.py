"""
Response Collection: answer slots for one respondent.

A respondent's submission is a tuple of Response values, one per
question. `init_responses` creates the empty slots, `set_answer`
fills them, and `check_submission` decides whether the tuple may be
sent to the store.

Submission policy:
    - rating questions need exactly one of their option values
    - text questions accept any string; an empty answer is allowed
      unless `SurveyConfig.allow_empty_text_answers` is False
"""
from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional, Set, Tuple

from sfm.config import DEFAULT_CONFIG, SurveyConfig
from sfm.errors import IncompleteSubmissionError, NotFoundError
from sfm.model import QuestionType, Response, Survey, require_persisted


def init_responses(survey: Survey) -> Tuple[Response, ...]:
    """
    One empty response slot per question, in question order.

    Raises:
        ValidationError: If the survey has not been persisted
    """
    require_persisted(survey)
    return tuple(Response(question_id=q.id, answer="") for q in survey.questions)


def set_answer(responses: Iterable[Response], question_id: int, answer: str) -> Tuple[Response, ...]:
    """
    Replace the answer of the slot for `question_id`.

    Raises:
        NotFoundError: If no slot has that question id
    """
    responses = tuple(responses)
    for i, response in enumerate(responses):
        if response.question_id == question_id:
            return responses[:i] + (replace(response, answer=answer),) + responses[i + 1:]
    raise NotFoundError(question_id)


def check_submission(
    survey: Survey,
    responses: Iterable[Response],
    config: Optional[SurveyConfig] = None,
) -> None:
    """
    Verify that a response set may be submitted for a survey.

    The ids must match the survey's question ids exactly (no unknown
    ids, no duplicates, no omissions) and every answer must satisfy
    the submission policy of its question.

    Raises:
        IncompleteSubmissionError: describing the first problem found
        ValidationError: If the survey has not been persisted
    """
    config = config or DEFAULT_CONFIG
    require_persisted(survey)

    seen: Set[int] = set()
    for response in responses:
        question = survey.get_question(response.question_id)
        if question is None:
            raise IncompleteSubmissionError(
                f"Response references unknown question {response.question_id}",
                question_id=response.question_id,
            )
        if response.question_id in seen:
            raise IncompleteSubmissionError(
                f"More than one response for question {response.question_id}",
                question_id=response.question_id,
            )
        seen.add(response.question_id)

        if question.type is QuestionType.RATING:
            if question.get_option(response.answer) is None:
                allowed = [str(option.value) for option in question.options]
                raise IncompleteSubmissionError(
                    f"Question {question.id} needs one of {allowed}, got {response.answer!r}",
                    question_id=question.id,
                )
        elif not response.answer and not config.allow_empty_text_answers:
            raise IncompleteSubmissionError(
                f"Question {question.id} needs a text answer",
                question_id=question.id,
            )

    for question in survey.questions:
        if question.id not in seen:
            raise IncompleteSubmissionError(
                f"Missing response for question {question.id}",
                question_id=question.id,
            )


def is_submittable(
    survey: Survey,
    responses: Iterable[Response],
    config: Optional[SurveyConfig] = None,
) -> bool:
    """True if `check_submission` accepts the response set."""
    try:
        check_submission(survey, responses, config)
    except IncompleteSubmissionError:
        return False
    return True
