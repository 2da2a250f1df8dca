from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from common_sense.core.config import Settings
from common_sense.core.database import get_db
from common_sense.core.security import get_current_member, get_settings
from common_sense.models.match_db.match_crud import attempt_match, get_active_match
from common_sense.models.member_db.member_db import Member
from common_sense.models.orientation_db.orientation_crud import list_opinion_questions, submit_responses
from common_sense.schemas.preferences.preference_base import OpinionQuestionOut, PreferencesIn, PreferencesOut

preference_router = APIRouter(prefix="/preferences", tags=["Preferences"])


@preference_router.get("/questions", response_model=List[OpinionQuestionOut])
def get_questions(
    db: Session = Depends(get_db),
    current_member: Member = Depends(get_current_member),
):
    return list_opinion_questions(db)


@preference_router.post("", response_model=PreferencesOut)
def save_preferences(
    payload: PreferencesIn,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    current_member: Member = Depends(get_current_member),
):
    member_id = current_member.id
    score = submit_responses(db, member_id, [(r.question_id, r.value) for r in payload.responses])
    attempt_match(db, member_id, score, min_gap=settings.MATCH_MIN_ORIENTATION_GAP)
    return PreferencesOut(orientation_score=score, match=get_active_match(db, member_id))
