from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from common_sense.core.database import get_db
from common_sense.core.security import get_current_member
from common_sense.models.member_db.member_db import Member
from common_sense.models.message_db.direct_message_crud import list_conversation, send_message
from common_sense.schemas.members.member_base import MemberSummary
from common_sense.schemas.messages.message_base import DirectConversationOut, DirectMessageSent, MessageIn


dm_router = APIRouter(prefix="/dm", tags=["Direct messages"])


@dm_router.get("/{member_id}", response_model=DirectConversationOut)
def get_conversation(
    member_id: UUID,
    db: Session = Depends(get_db),
    current_member: Member = Depends(get_current_member),
):
    messages, partner = list_conversation(db, current_member.id, member_id)
    return DirectConversationOut(
        messages=messages,
        partner=MemberSummary(id=partner.id, username=partner.username),
    )


@dm_router.post("/{member_id}", response_model=DirectMessageSent, status_code=status.HTTP_201_CREATED)
def post_direct_message(
    member_id: UUID,
    payload: MessageIn,
    db: Session = Depends(get_db),
    current_member: Member = Depends(get_current_member),
):
    message, partner = send_message(db, current_member.id, member_id, payload.content)
    return DirectMessageSent(
        message=message,
        partner=MemberSummary(id=partner.id, username=partner.username),
    )
