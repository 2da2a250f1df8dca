from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from common_sense.core.database import get_db
from common_sense.core.security import get_current_member
from common_sense.models.match_db.match_crud import get_active_match
from common_sense.models.member_db.member_db import Member
from common_sense.models.orientation_db.orientation_crud import get_orientation_score
from common_sense.schemas.match.match_base import ActiveMatchOut


match_router = APIRouter(prefix="/match", tags=["Matching"])


@match_router.get("", response_model=ActiveMatchOut)
def get_match(
    db: Session = Depends(get_db),
    current_member: Member = Depends(get_current_member),
):
    return ActiveMatchOut(
        match=get_active_match(db, current_member.id),
        orientation_score=get_orientation_score(db, current_member.id),
    )
