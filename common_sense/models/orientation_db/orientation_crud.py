import logging
from typing import Iterable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from common_sense.core.database import atomic, upsert
from common_sense.core.errors import NotFoundError, ValidationError
from common_sense.models.orientation_db.opinion_question_db import OpinionQuestion
from common_sense.models.orientation_db.opinion_response_db import OpinionResponse
from common_sense.models.orientation_db.orientation_profile_db import OrientationProfile
from common_sense.schemas.preferences.preference_base import (
    MAX_OPINION_VALUE,
    MIN_OPINION_VALUE,
    OpinionQuestionOut,
)
from common_sense.services.opinion_options import parse_opinion_options


logger = logging.getLogger(__name__)

# getOrientationScore result for members that never answered
UNSCORED = None


def submit_responses(db: Session, member_id: UUID, responses: Iterable[Tuple[str, float]]) -> float:
    """Upsert the member's answers and recompute their orientation score.

    Later answers to the same question replace earlier ones. The score is the
    mean of every answer the member currently has on record, not only the
    ones in this submission.
    """
    latest = {}
    for question_id, value in responses:
        numeric = isinstance(value, (int, float)) and not isinstance(value, bool)
        if not numeric or not MIN_OPINION_VALUE <= value <= MAX_OPINION_VALUE:
            raise ValidationError(
                f"Answers must be between {MIN_OPINION_VALUE} and {MAX_OPINION_VALUE}."
            )
        latest[question_id] = float(value)

    if not latest:
        raise ValidationError("Answer at least one question to generate a match.")

    known = set(db.scalars(select(OpinionQuestion.id).where(OpinionQuestion.id.in_(list(latest)))))
    if known != set(latest):
        raise NotFoundError("We could not find one of those questions.")

    with atomic(db):
        for question_id, value in latest.items():
            upsert(
                db,
                OpinionResponse,
                {"member_id": member_id, "question_id": question_id, "selected_value": value},
                conflict_keys=("member_id", "question_id"),
                update={"selected_value": None, "submitted_at": func.now()},
            )

        score = db.scalar(
            select(func.avg(OpinionResponse.selected_value)).where(OpinionResponse.member_id == member_id)
        )
        score = float(score)

        upsert(
            db,
            OrientationProfile,
            {"member_id": member_id, "score": score},
            conflict_keys=("member_id",),
            update={"score": None, "updated_at": func.now()},
        )

    logger.info("Orientation score for member %s recomputed from %d answers", member_id, len(latest))
    return score


def get_orientation_score(db: Session, member_id: UUID) -> Optional[float]:
    score = db.scalar(select(OrientationProfile.score).where(OrientationProfile.member_id == member_id))
    return UNSCORED if score is None else float(score)


def list_opinion_questions(db: Session) -> List[OpinionQuestionOut]:
    questions = db.scalars(select(OpinionQuestion).order_by(OpinionQuestion.position, OpinionQuestion.id))
    return [
        OpinionQuestionOut(id=q.id, prompt=q.prompt, options=parse_opinion_options(q.options))
        for q in questions
    ]
