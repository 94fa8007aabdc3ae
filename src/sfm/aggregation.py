"""
Results Aggregation: per-question summaries of all submitted responses.

Given a survey and every response received for it, this module produces:
    - rating questions: mean of the valid answers and a count per option value
    - text questions: the raw answers in the order they were received

IMPORTANT: This is a read-only computation. It does NOT modify the survey
or the responses, and it always runs over the complete response set.
The same inputs always give the same SurveyResults.

A response that cannot be used (unknown question id, rating answer that
matches no option) is skipped, logged, and recorded in
`SurveyResults.errors`. It never stops the rest of the report.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple, Union

from sfm.errors import DataIntegrityError
from sfm.logs import get_logger
from sfm.model import QuestionType, RatingQuestion, Response, Survey, TextQuestion, require_persisted

logger = get_logger(__name__)


@dataclass(frozen=True)
class RatingResult:
    """Summary of one rating question.

    `average` is None when no valid answer was received.
    `distribution` maps every declared option value, in declared order,
    to its count.
    """
    question: str
    average: Optional[float]
    distribution: Dict[int, int]
    type: QuestionType = QuestionType.RATING

    @property
    def total(self) -> int:
        return sum(self.distribution.values())


@dataclass(frozen=True)
class TextResult:
    """Summary of one text question: every answer, in received order."""
    question: str
    answers: Tuple[str, ...]
    type: QuestionType = QuestionType.TEXT


ResultItem = Union[RatingResult, TextResult]


@dataclass(frozen=True)
class SurveyResults:
    """Aggregation output, one item per question in survey order."""

    results: Tuple[ResultItem, ...] = ()
    errors: Tuple[DataIntegrityError, ...] = field(default_factory=tuple)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


def _aggregate_rating(
    question: RatingQuestion,
    answers: List[str],
    errors: List[DataIntegrityError],
) -> RatingResult:
    distribution = {option.value: 0 for option in question.options}

    values: List[int] = []
    for answer in answers:
        option = question.get_option(answer)
        if option is None:
            error = DataIntegrityError(question.id, answer, "answer matches no option value")
            logger.warning(
                "Skipping rating answer that matches no option",
                extra={"question_id": question.id, "answer": answer},
            )
            errors.append(error)
            continue
        values.append(option.value)
        distribution[option.value] += 1

    average = sum(values) / len(values) if values else None
    return RatingResult(question=question.text, average=average, distribution=distribution)


def _aggregate_text(question: TextQuestion, answers: List[str]) -> TextResult:
    return TextResult(question=question.text, answers=tuple(answers))


def aggregate_results(survey: Survey, responses: Iterable[Response]) -> SurveyResults:
    """
    Summarize every response received for a survey.

    Args:
        survey: Persisted survey, for question metadata and report order
        responses: All responses from all respondents, in received order

    Returns:
        SurveyResults with one item per question and the skipped responses

    Raises:
        ValidationError: If the survey has not been persisted
    """
    require_persisted(survey)
    errors: List[DataIntegrityError] = []

    # =========================================================================
    # 1. GROUP ANSWERS BY QUESTION (keeping received order)
    # =========================================================================

    known_ids = {question.id for question in survey.questions}
    answers_by_question: Dict[int, List[str]] = defaultdict(list)

    for response in responses:
        if response.question_id not in known_ids:
            logger.warning(
                "Skipping response for unknown question",
                extra={"question_id": response.question_id, "answer": response.answer},
            )
            errors.append(
                DataIntegrityError(response.question_id, response.answer, "unknown question id")
            )
            continue
        answers_by_question[response.question_id].append(response.answer)

    # =========================================================================
    # 2. SUMMARIZE EACH QUESTION (in survey order)
    # =========================================================================

    results: List[ResultItem] = []
    for question in survey.questions:
        answers = answers_by_question.get(question.id, [])
        if question.type is QuestionType.RATING:
            results.append(_aggregate_rating(question, answers, errors))
        else:
            results.append(_aggregate_text(question, answers))

    logger.debug(
        "Aggregated survey results",
        extra={"survey_id": survey.id, "questions": len(results), "skipped": len(errors)},
    )
    return SurveyResults(results=tuple(results), errors=tuple(errors))
