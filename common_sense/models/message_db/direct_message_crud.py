from typing import List, Tuple
from uuid import UUID

from sqlalchemy import and_, func, or_, select
from sqlalchemy.orm import Session

from common_sense.core.database import atomic
from common_sense.core.errors import NotFoundError, ValidationError
from common_sense.models.member_db.member_db import Member
from common_sense.models.message_db.direct_message_db import DirectMessage
from common_sense.models.orientation_db.orientation_profile_db import OrientationProfile
from common_sense.schemas.members.member_base import CommunityMemberOut, MemberSummary
from common_sense.schemas.messages.message_base import DirectMessageOut
from common_sense.services.message_content import DIRECT_MESSAGE_MAX_LENGTH, clean_content


def _to_out(message: DirectMessage, username) -> DirectMessageOut:
    return DirectMessageOut(
        id=message.id,
        sender_id=message.sender_id,
        recipient_id=message.recipient_id,
        content=message.content,
        sent_at=message.sent_at,
        author=MemberSummary(id=message.sender_id, username=username) if username else None,
    )


def get_partner(db: Session, partner_id: UUID) -> Member:
    partner = db.get(Member, partner_id)
    if partner is None:
        raise NotFoundError("We could not find that member.")
    return partner


def list_conversation(
    db: Session, self_id: UUID, partner_id: UUID
) -> Tuple[List[DirectMessageOut], Member]:
    """Both directions of a two-member conversation, oldest first, and the partner."""
    partner = get_partner(db, partner_id)
    if partner.id == self_id:
        return [], partner

    rows = db.execute(
        select(DirectMessage, Member.username)
        .outerjoin(Member, Member.id == DirectMessage.sender_id)
        .where(
            or_(
                and_(DirectMessage.sender_id == self_id, DirectMessage.recipient_id == partner_id),
                and_(DirectMessage.sender_id == partner_id, DirectMessage.recipient_id == self_id),
            )
        )
        .order_by(DirectMessage.sent_at, DirectMessage.id)
    ).all()
    return [_to_out(message, username) for message, username in rows], partner


def send_message(db: Session, self_id: UUID, partner_id: UUID, content: str) -> Tuple[DirectMessageOut, Member]:
    text = clean_content(content, DIRECT_MESSAGE_MAX_LENGTH)
    partner = get_partner(db, partner_id)
    if partner.id == self_id:
        raise ValidationError("Start a conversation with someone else to continue.")

    with atomic(db):
        message = DirectMessage(sender_id=self_id, recipient_id=partner_id, content=text)
        db.add(message)
        db.flush()
        db.refresh(message)
        username = db.scalar(select(Member.username).where(Member.id == self_id))
        out = _to_out(message, username)

    return out, partner


def list_community_members(db: Session, self_id: UUID) -> List[CommunityMemberOut]:
    rows = db.execute(
        select(Member, OrientationProfile.score)
        .outerjoin(OrientationProfile, OrientationProfile.member_id == Member.id)
        .where(Member.id != self_id)
        .order_by(func.lower(Member.username))
    ).all()
    return [
        CommunityMemberOut(
            id=member.id,
            username=member.username,
            orientation_score=score,
            created_at=member.created_at,
        )
        for member, score in rows
    ]
