from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Index, Uuid, func
from common_sense.core.database import Base


class MatchMessage(Base):
    __tablename__ = "match_messages"

    id = Column(Integer, primary_key=True, index=True)
    match_id = Column(Uuid(as_uuid=True), ForeignKey("matches.id"), nullable=False)
    sender_id = Column(Uuid(as_uuid=True), ForeignKey("members.id"), nullable=False)
    content = Column(Text, nullable=False)
    sent_at = Column(DateTime, server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("ix_match_messages_match_sent", "match_id", "sent_at", "id"),
    )
