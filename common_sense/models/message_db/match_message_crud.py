from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from common_sense.core.database import atomic
from common_sense.models.match_db.match_crud import ensure_active_match_member
from common_sense.models.member_db.member_db import Member
from common_sense.models.message_db.match_message_db import MatchMessage
from common_sense.schemas.members.member_base import MemberSummary
from common_sense.schemas.messages.message_base import MatchMessageOut
from common_sense.services.message_content import MATCH_MESSAGE_MAX_LENGTH, clean_content

DEFAULT_MESSAGE_LIMIT = 50
MAX_MESSAGE_LIMIT = 200


def _to_out(message: MatchMessage, username) -> MatchMessageOut:
    return MatchMessageOut(
        id=message.id,
        match_id=message.match_id,
        sender_id=message.sender_id,
        content=message.content,
        sent_at=message.sent_at,
        author=MemberSummary(id=message.sender_id, username=username) if username else None,
    )


def list_messages(
    db: Session,
    match_id: UUID,
    member_id: UUID,
    limit: int = DEFAULT_MESSAGE_LIMIT,
) -> List[MatchMessageOut]:
    ensure_active_match_member(db, match_id, member_id)

    limit = min(max(limit, 1), MAX_MESSAGE_LIMIT)
    rows = db.execute(
        select(MatchMessage, Member.username)
        .outerjoin(Member, Member.id == MatchMessage.sender_id)
        .where(MatchMessage.match_id == match_id)
        .order_by(MatchMessage.sent_at, MatchMessage.id)
        .limit(limit)
    ).all()
    return [_to_out(message, username) for message, username in rows]


def add_message(db: Session, match_id: UUID, sender_id: UUID, content: str) -> MatchMessageOut:
    ensure_active_match_member(db, match_id, sender_id)
    text = clean_content(content, MATCH_MESSAGE_MAX_LENGTH)

    with atomic(db):
        message = MatchMessage(match_id=match_id, sender_id=sender_id, content=text)
        db.add(message)
        db.flush()
        db.refresh(message)
        username = db.scalar(select(Member.username).where(Member.id == sender_id))
        out = _to_out(message, username)

    return out
