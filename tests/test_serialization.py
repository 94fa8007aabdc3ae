"""
Tests for serialization and deserialization of SFM objects.

These tests cover the payload shapes exchanged with the storage and
rendering layers, plus lossless JSON/YAML round-trip of surveys.
"""

import json

import pytest
from sfm.aggregation import aggregate_results
from sfm.definition import add_question, new_survey, update_question
from sfm.errors import ValidationError
from sfm.examples import build_example_feedback_survey
from sfm.model import QuestionType, RatingQuestion, Response, TextQuestion
from sfm.serialization import (
    responses_from_dict,
    responses_to_dict,
    results_to_dict,
    results_to_json,
    survey_from_dict,
    survey_from_json,
    survey_from_yaml,
    survey_to_dict,
    survey_to_json,
    survey_to_yaml,
)


def test_json_roundtrip():
    survey = build_example_feedback_survey()
    before = survey_to_dict(survey)
    restored = survey_from_json(survey_to_json(survey))
    assert survey_to_dict(restored) == before
    assert restored == survey


def test_yaml_roundtrip():
    survey = build_example_feedback_survey()
    restored = survey_from_yaml(survey_to_yaml(survey))
    assert restored == survey


def test_draft_payload_has_no_ids():
    survey = add_question(new_survey(title="Draft"), QuestionType.RATING)
    survey = update_question(survey, 0, "text", "Rate us")

    d = survey_to_dict(survey)

    assert "id" not in d
    assert "id" not in d["questions"][0]
    assert d["questions"][0]["type"] == "rating"
    assert d["questions"][0]["options"][0] == {"text": "Very Poor", "value": 1}


def test_persisted_payload():
    payload = {
        "id": 1,
        "title": "Feedback",
        "description": "",
        "questions": [
            {
                "id": 10,
                "text": "Rate us",
                "type": "rating",
                "options": [{"id": 11, "text": "Poor", "value": 1}, {"id": 12, "text": "Great", "value": 2}],
            },
            {"id": 20, "text": "Why?", "type": "text", "options": []},
        ],
    }

    survey = survey_from_dict(payload)

    assert survey.id == 1
    assert isinstance(survey.questions[0], RatingQuestion)
    assert survey.questions[0].options[1].id == 12
    assert isinstance(survey.questions[1], TextQuestion)
    assert survey_to_dict(survey) == payload


def test_unknown_question_type():
    payload = {"title": "T", "questions": [{"text": "Q", "type": "slider", "options": []}]}
    with pytest.raises(ValidationError) as exc_info:
        survey_from_dict(payload)
    assert exc_info.value.field == "questions[0].type"


def test_rating_without_options():
    payload = {"title": "T", "questions": [{"text": "Q", "type": "rating", "options": []}]}
    with pytest.raises(ValidationError) as exc_info:
        survey_from_dict(payload)
    assert exc_info.value.field == "questions[0].options"


def test_text_with_options():
    payload = {"title": "T", "questions": [{"text": "Q", "type": "text", "options": [{"text": "A", "value": 1}]}]}
    with pytest.raises(ValidationError):
        survey_from_dict(payload)


def test_non_integer_option_value():
    payload = {"title": "T", "questions": [{"text": "Q", "type": "rating", "options": [{"text": "A", "value": "1"}]}]}
    with pytest.raises(ValidationError) as exc_info:
        survey_from_dict(payload)
    assert exc_info.value.field == "questions[0].options[0].value"


def test_responses_payload():
    responses = [Response(1, "3"), Response(2, "")]
    d = responses_to_dict(responses)
    assert d == {"responses": [{"question_id": 1, "answer": "3"}, {"question_id": 2, "answer": ""}]}
    assert responses_from_dict(d) == tuple(responses)


def test_responses_payload_rejects_bad_question_id():
    with pytest.raises(ValidationError) as exc_info:
        responses_from_dict({"responses": [{"question_id": "one", "answer": "3"}]})
    assert exc_info.value.field == "responses[0].question_id"


def test_results_payload():
    survey = build_example_feedback_survey()
    content, instructor, comments = survey.questions
    responses = [
        Response(content.id, "4"),
        Response(instructor.id, "9"),
        Response(comments.id, "More labs"),
    ]

    d = results_to_dict(aggregate_results(survey, responses))

    assert d["results"][0] == {
        "question": "How would you rate the content?",
        "type": "rating",
        "average": 4.0,
        "distribution": {"1": 0, "2": 0, "3": 0, "4": 1, "5": 0},
    }
    assert d["results"][1]["average"] is None
    assert d["results"][2] == {
        "question": "What should we change next time?",
        "type": "text",
        "answers": ["More labs"],
    }
    assert d["errors"] == [
        {"question_id": instructor.id, "answer": "9", "reason": "answer matches no option value"}
    ]


def test_results_json_without_errors():
    survey = build_example_feedback_survey()
    d = json.loads(results_to_json(aggregate_results(survey, [])))
    assert "errors" not in d
    assert len(d["results"]) == 3


@pytest.mark.parametrize(
    "payload, field",
    [
        ({"title": "T", "questions": None}, "questions"),
        ({"title": "T", "questions": "Q1"}, "questions"),
        ({"title": None, "questions": []}, "title"),
        ({"title": "T", "description": 5, "questions": []}, "description"),
        ({"title": "T", "questions": [3]}, "questions[0]"),
        ({"title": "T", "questions": [{"text": None, "type": "text"}]}, "questions[0].text"),
        (
            {"title": "T", "questions": [{"text": "Q", "type": "rating", "options": [3]}]},
            "questions[0].options[0]",
        ),
        (
            {"title": "T", "questions": [{"text": "Q", "type": "rating", "options": {"text": "A", "value": 1}}]},
            "questions[0].options",
        ),
        (
            {"title": "T", "questions": [{"text": "Q", "type": "rating", "options": [{"text": None, "value": 1}]}]},
            "questions[0].options[0].text",
        ),
    ],
)
def test_malformed_survey_payload(payload, field):
    with pytest.raises(ValidationError) as exc_info:
        survey_from_dict(payload)
    assert exc_info.value.field == field


def test_survey_payload_not_a_mapping():
    with pytest.raises(ValidationError) as exc_info:
        survey_from_yaml("- a\n- b\n")
    assert exc_info.value.field == "survey"


def test_text_question_with_null_options():
    survey = survey_from_dict({"title": "T", "questions": [{"text": "Why?", "type": "text", "options": None}]})
    assert isinstance(survey.questions[0], TextQuestion)


@pytest.mark.parametrize(
    "payload, field",
    [
        (None, "submission"),
        ({"responses": None}, "responses"),
        ({"responses": ["1"]}, "responses[0]"),
        ({"responses": [{"question_id": 1, "answer": None}]}, "responses[0].answer"),
        ({"responses": [{"question_id": 1, "answer": 3}]}, "responses[0].answer"),
    ],
)
def test_malformed_responses_payload(payload, field):
    with pytest.raises(ValidationError) as exc_info:
        responses_from_dict(payload)
    assert exc_info.value.field == field
