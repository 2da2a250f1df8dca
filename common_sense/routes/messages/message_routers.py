from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from common_sense.core.database import get_db
from common_sense.core.security import get_current_member
from common_sense.models.member_db.member_db import Member
from common_sense.models.message_db.match_message_crud import DEFAULT_MESSAGE_LIMIT, add_message, list_messages
from common_sense.schemas.messages.message_base import MatchMessageList, MatchMessageSent, MessageIn


message_router = APIRouter(prefix="/messages", tags=["Match chat"])


@message_router.get("/{match_id}", response_model=MatchMessageList)
def get_messages(
    match_id: UUID,
    limit: int = Query(DEFAULT_MESSAGE_LIMIT, ge=1),
    db: Session = Depends(get_db),
    current_member: Member = Depends(get_current_member),
):
    return MatchMessageList(messages=list_messages(db, match_id, current_member.id, limit=limit))


@message_router.post("/{match_id}", response_model=MatchMessageSent)
def post_message(
    match_id: UUID,
    payload: MessageIn,
    db: Session = Depends(get_db),
    current_member: Member = Depends(get_current_member),
):
    return MatchMessageSent(message=add_message(db, match_id, current_member.id, payload.content))
