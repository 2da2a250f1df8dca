import uuid
from sqlalchemy import Column, ForeignKey, String, DateTime, CheckConstraint, Index, Uuid, func

from common_sense.core.database import Base
from common_sense.services.match_status import MatchStatus


class Match(Base):
    __tablename__ = "matches"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, unique=True, index=True)
    member_a_id = Column(Uuid(as_uuid=True), ForeignKey("members.id"), nullable=False, index=True)
    member_b_id = Column(Uuid(as_uuid=True), ForeignKey("members.id"), nullable=False, index=True)
    status = Column(String(16), nullable=False, default=MatchStatus.active.value)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("member_a_id <> member_b_id", name="ck_match_distinct_members"),
        CheckConstraint("status IN ('active', 'ended')", name="ck_match_status"),
        Index("ix_matches_status", "status"),
    )

    def partner_of(self, member_id):
        return self.member_b_id if self.member_a_id == member_id else self.member_a_id


class ActiveMatchMember(Base):
    """One row per member currently in an active match.

    The primary key on member_id is what keeps a member from ending up in two
    active matches: the second insert fails at commit.
    """

    __tablename__ = "match_active_members"

    member_id = Column(Uuid(as_uuid=True), ForeignKey("members.id"), primary_key=True)
    match_id = Column(Uuid(as_uuid=True), ForeignKey("matches.id"), nullable=False, index=True)
