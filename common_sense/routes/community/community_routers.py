from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from common_sense.core.database import get_db
from common_sense.core.security import get_current_member
from common_sense.models.member_db.member_db import Member
from common_sense.models.message_db.direct_message_crud import list_community_members
from common_sense.schemas.messages.message_base import CommunityOut


community_router = APIRouter(prefix="/community", tags=["Community"])


@community_router.get("", response_model=CommunityOut)
def get_community(
    db: Session = Depends(get_db),
    current_member: Member = Depends(get_current_member),
):
    return CommunityOut(members=list_community_members(db, current_member.id))
