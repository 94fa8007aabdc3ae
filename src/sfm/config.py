"""
Configuration for survey authoring and response collection.

Settings live in a small YAML document:

    rating_scale:
      - {text: Very Poor, value: 1}
      - {text: Poor, value: 2}
      - {text: Average, value: 3}
      - {text: Good, value: 4}
      - {text: Excellent, value: 5}
    allow_empty_text_answers: true
    log_level: INFO

Every key is optional; missing keys keep their defaults.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import pydantic
import yaml
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, field_validator

from sfm.errors import ValidationError


class RatingPoint(BaseModel):
    """One (label, value) point of the rating scale."""

    model_config = ConfigDict(frozen=True)

    text: str
    value: StrictInt


DEFAULT_RATING_SCALE: Tuple[RatingPoint, ...] = (
    RatingPoint(text="Very Poor", value=1),
    RatingPoint(text="Poor", value=2),
    RatingPoint(text="Average", value=3),
    RatingPoint(text="Good", value=4),
    RatingPoint(text="Excellent", value=5),
)


class SurveyConfig(BaseModel):
    """
    Properties:
        rating_scale:
            Ordered points given to every new rating question

        allow_empty_text_answers:
            Submission policy for text questions. Rating questions always
            require a selected option.

        log_level:
            Level name passed to `sfm.logs.setup_logging`
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    rating_scale: Tuple[RatingPoint, ...] = Field(
        default=DEFAULT_RATING_SCALE,
        description="Default option set of new rating questions",
    )
    allow_empty_text_answers: StrictBool = True
    log_level: str = "INFO"

    @field_validator("rating_scale")
    @classmethod
    def validate_rating_scale(cls, v: Tuple[RatingPoint, ...]) -> Tuple[RatingPoint, ...]:
        """Require a non-empty scale with distinct values."""
        if not v:
            raise ValueError("must be a non-empty list")
        values = [point.value for point in v]
        if len(values) != len(set(values)):
            raise ValueError("values must be distinct")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown level {v!r}")
        return level


DEFAULT_CONFIG = SurveyConfig()


def _field_path(loc: Tuple[Any, ...]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "config"


def config_from_dict(d: Optional[Dict[str, Any]]) -> SurveyConfig:
    """Build a SurveyConfig from a mapping, validating each known key."""
    if not d:
        return DEFAULT_CONFIG
    if not isinstance(d, dict):
        raise ValidationError("config", "expected a mapping")
    try:
        return SurveyConfig.model_validate(d)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        raise ValidationError(_field_path(first["loc"]), first["msg"]) from e


def config_from_yaml(s: str) -> SurveyConfig:
    return config_from_dict(yaml.safe_load(s))


def load_config(filepath: Optional[str] = None) -> SurveyConfig:
    """
    Load configuration from a YAML file.

    Args:
        filepath: Path to the YAML file. None returns the defaults.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If a setting is malformed
    """
    if filepath is None:
        return DEFAULT_CONFIG
    with open(filepath, "r", encoding="utf-8") as f:
        return config_from_yaml(f.read())
