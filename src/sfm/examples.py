"""
Example survey builder for demos and tests.

Builds a short course-feedback survey with the default rating scale and
one text question, and a stand-in for the external store that assigns
ids the way a persisted survey comes back from it.
"""
from dataclasses import replace
from itertools import count
from typing import Iterator, List, Sequence, Tuple

from sfm.definition import add_question, new_survey, update_question, validate
from sfm.model import Option, Question, QuestionType, Response, Survey


def persist_survey(survey: Survey, survey_id: int = 1, first_id: int = 1) -> Survey:
    """
    Return a copy of the survey with every missing id filled in.

    Questions and options draw from one counter starting at `first_id`.
    Existing ids are kept.
    """
    ids: Iterator[int] = count(first_id)

    def persist_question(question: Question) -> Question:
        question_id = question.id if question.id is not None else next(ids)
        if question.type is QuestionType.TEXT:
            return replace(question, id=question_id)
        options: List[Option] = [
            o if o.id is not None else replace(o, id=next(ids)) for o in question.options
        ]
        return replace(question, id=question_id, options=tuple(options))

    return replace(
        survey,
        id=survey.id if survey.id is not None else survey_id,
        questions=tuple(persist_question(q) for q in survey.questions),
    )


def build_example_feedback_survey() -> Survey:
    survey = new_survey(
        title="Course Feedback",
        description="Tell us how the workshop went.",
    )
    prompts: Sequence[Tuple[QuestionType, str]] = [
        (QuestionType.RATING, "How would you rate the content?"),
        (QuestionType.RATING, "How would you rate the instructor?"),
        (QuestionType.TEXT, "What should we change next time?"),
    ]
    for i, (question_type, prompt) in enumerate(prompts):
        survey = add_question(survey, question_type)
        survey = update_question(survey, i, "text", prompt)

    return persist_survey(validate(survey))


def build_example_responses(survey: Survey, submissions: Sequence[Sequence[str]]) -> List[Response]:
    """
    Flatten per-respondent answer lists into responses in received order.

    Each entry of `submissions` holds one answer per question, in
    question order.
    """
    responses: List[Response] = []
    for answers in submissions:
        for question, answer in zip(survey.questions, answers):
            responses.append(Response(question_id=question.id, answer=answer))
    return responses
