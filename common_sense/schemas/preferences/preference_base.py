from typing import List, Optional

from pydantic import Field, StrictFloat, field_validator

from common_sense.schemas.common.camel import CamelModel
from common_sense.schemas.match.match_base import MatchOut

MIN_OPINION_VALUE = -10
MAX_OPINION_VALUE = 10


class OpinionOption(CamelModel):
    label: str
    value: float


class OpinionQuestionOut(CamelModel):
    id: str
    prompt: str
    options: List[OpinionOption]


class OpinionResponseIn(CamelModel):
    question_id: str = Field(min_length=1)
    value: StrictFloat

    @field_validator("value")
    @classmethod
    def value_in_range(cls, value: float) -> float:
        if not MIN_OPINION_VALUE <= value <= MAX_OPINION_VALUE:
            raise ValueError(
                f"Answers must be between {MIN_OPINION_VALUE} and {MAX_OPINION_VALUE}."
            )
        return value


class PreferencesIn(CamelModel):
    responses: List[OpinionResponseIn]

    @field_validator("responses")
    @classmethod
    def at_least_one(cls, responses: List[OpinionResponseIn]) -> List[OpinionResponseIn]:
        if not responses:
            raise ValueError("Answer at least one question to generate a match.")
        return responses


class PreferencesOut(CamelModel):
    orientation_score: float
    match: Optional[MatchOut] = None
