from datetime import datetime
from typing import List, Optional
from uuid import UUID

from common_sense.schemas.common.camel import CamelModel
from common_sense.schemas.members.member_base import MemberSummary, CommunityMemberOut


class MessageIn(CamelModel):
    content: str


class MatchMessageOut(CamelModel):
    id: int
    match_id: UUID
    sender_id: UUID
    content: str
    sent_at: datetime
    author: Optional[MemberSummary] = None


class MatchMessageList(CamelModel):
    messages: List[MatchMessageOut]


class MatchMessageSent(CamelModel):
    message: MatchMessageOut


class DirectMessageOut(CamelModel):
    id: int
    sender_id: UUID
    recipient_id: UUID
    content: str
    sent_at: datetime
    author: Optional[MemberSummary] = None


class DirectConversationOut(CamelModel):
    messages: List[DirectMessageOut]
    partner: MemberSummary


class DirectMessageSent(CamelModel):
    message: DirectMessageOut
    partner: MemberSummary


class CommunityOut(CamelModel):
    members: List[CommunityMemberOut]
