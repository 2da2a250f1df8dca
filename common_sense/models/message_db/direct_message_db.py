from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, CheckConstraint, Index, Uuid, func
from common_sense.core.database import Base


class DirectMessage(Base):
    __tablename__ = "direct_messages"

    id = Column(Integer, primary_key=True, index=True)
    sender_id = Column(Uuid(as_uuid=True), ForeignKey("members.id"), nullable=False)
    recipient_id = Column(Uuid(as_uuid=True), ForeignKey("members.id"), nullable=False)
    content = Column(Text, nullable=False)
    sent_at = Column(DateTime, server_default=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("sender_id <> recipient_id", name="ck_direct_message_distinct_members"),
        Index("ix_direct_messages_pair_sent", "sender_id", "recipient_id", "sent_at"),
    )
