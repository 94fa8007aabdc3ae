"""
Serialization helpers for SFM objects (Survey, Response, SurveyResults).

Converts between model objects and the plain payloads exchanged with the
storage and rendering layers, with JSON/YAML wrappers on top of the dict
form. `id` keys are written only for persisted entities and are optional
on input.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Tuple

import yaml

from sfm.aggregation import RatingResult, ResultItem, SurveyResults, TextResult
from sfm.errors import ValidationError
from sfm.model import (
    Option,
    Question,
    QuestionType,
    RatingQuestion,
    Response,
    Survey,
    TextQuestion,
)


def _with_id(d: Dict[str, Any], entity_id: Any) -> Dict[str, Any]:
    if entity_id is not None:
        d["id"] = entity_id
    return d


def _mapping(d: Any, path: str) -> Dict[str, Any]:
    if not isinstance(d, dict):
        raise ValidationError(path, f"expected a mapping, got {d!r}")
    return d


def _list_field(d: Dict[str, Any], key: str, path: str) -> List[Any]:
    value = d.get(key, [])
    if not isinstance(value, list):
        raise ValidationError(path, f"expected a list, got {value!r}")
    return value


def _str_field(d: Dict[str, Any], key: str, path: str) -> str:
    value = d.get(key, "")
    if not isinstance(value, str):
        raise ValidationError(path, f"expected a string, got {value!r}")
    return value


def _int_field(d: Dict[str, Any], key: str, path: str, required: bool = True) -> Any:
    value = d.get(key)
    if value is None and not required:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(path, f"expected an integer, got {value!r}")
    return value


def option_to_dict(o: Option) -> Dict[str, Any]:
    return _with_id({"text": o.text, "value": o.value}, o.id)


def option_from_dict(d: Any, path: str = "option") -> Option:
    d = _mapping(d, path)
    return Option(
        text=_str_field(d, "text", f"{path}.text"),
        value=_int_field(d, "value", f"{path}.value"),
        id=_int_field(d, "id", f"{path}.id", required=False),
    )


def question_to_dict(q: Question) -> Dict[str, Any]:
    return _with_id(
        {
            "text": q.text,
            "type": q.type.value,
            "options": [option_to_dict(o) for o in q.options],
        },
        q.id,
    )


def question_from_dict(d: Any, path: str = "question") -> Question:
    d = _mapping(d, path)
    try:
        question_type = QuestionType(d.get("type"))
    except ValueError:
        raise ValidationError(f"{path}.type", f"unknown question type {d.get('type')!r}")

    text = _str_field(d, "text", f"{path}.text")
    question_id = _int_field(d, "id", f"{path}.id", required=False)
    # Text questions may send "options": null
    raw_options = [] if d.get("options") is None else _list_field(d, "options", f"{path}.options")

    if question_type is QuestionType.TEXT:
        if raw_options:
            raise ValidationError(f"{path}.options", "text question must not have options")
        return TextQuestion(text=text, id=question_id)

    if not raw_options:
        raise ValidationError(f"{path}.options", "rating question requires options")
    options = [option_from_dict(o, f"{path}.options[{i}]") for i, o in enumerate(raw_options)]
    return RatingQuestion(text=text, options=options, id=question_id)


def survey_to_dict(s: Survey) -> Dict[str, Any]:
    return _with_id(
        {
            "title": s.title,
            "description": s.description,
            "questions": [question_to_dict(q) for q in s.questions],
        },
        s.id,
    )


def survey_from_dict(d: Any) -> Survey:
    d = _mapping(d, "survey")
    raw_questions = _list_field(d, "questions", "questions")
    return Survey(
        title=_str_field(d, "title", "title"),
        description=_str_field(d, "description", "description"),
        questions=[question_from_dict(q, f"questions[{i}]") for i, q in enumerate(raw_questions)],
        id=_int_field(d, "id", "id", required=False),
    )


def survey_to_json(s: Survey) -> str:
    return json.dumps(survey_to_dict(s), sort_keys=True)


def survey_from_json(s: str) -> Survey:
    d = json.loads(s)
    return survey_from_dict(d)


def survey_to_yaml(s: Survey) -> str:
    return yaml.safe_dump(survey_to_dict(s), sort_keys=False)


def survey_from_yaml(s: str) -> Survey:
    d = yaml.safe_load(s)
    return survey_from_dict(d)


def responses_to_dict(responses: Iterable[Response]) -> Dict[str, Any]:
    return {
        "responses": [{"question_id": r.question_id, "answer": r.answer} for r in responses]
    }


def responses_from_dict(d: Any) -> Tuple[Response, ...]:
    d = _mapping(d, "submission")
    responses: List[Response] = []
    for i, r in enumerate(_list_field(d, "responses", "responses")):
        r = _mapping(r, f"responses[{i}]")
        question_id = _int_field(r, "question_id", f"responses[{i}].question_id")
        answer = _str_field(r, "answer", f"responses[{i}].answer")
        responses.append(Response(question_id=question_id, answer=answer))
    return tuple(responses)


def result_item_to_dict(item: ResultItem) -> Dict[str, Any]:
    if isinstance(item, RatingResult):
        return {
            "question": item.question,
            "type": item.type.value,
            "average": item.average,
            # JSON object keys are strings
            "distribution": {str(value): count for value, count in item.distribution.items()},
        }
    if isinstance(item, TextResult):
        return {"question": item.question, "type": item.type.value, "answers": list(item.answers)}
    raise TypeError(f"Unsupported result type: {type(item)}")


def results_to_dict(results: SurveyResults) -> Dict[str, Any]:
    d: Dict[str, Any] = {"results": [result_item_to_dict(item) for item in results.results]}
    if results.errors:
        d["errors"] = [
            {"question_id": e.question_id, "answer": e.answer, "reason": e.reason}
            for e in results.errors
        ]
    return d


def results_to_json(results: SurveyResults) -> str:
    return json.dumps(results_to_dict(results))
