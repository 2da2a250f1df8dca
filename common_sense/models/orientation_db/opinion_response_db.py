import uuid
from sqlalchemy import Column, String, Float, DateTime, ForeignKey, UniqueConstraint, Uuid, func
from common_sense.core.database import Base


class OpinionResponse(Base):
    __tablename__ = "opinion_responses"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    member_id = Column(Uuid(as_uuid=True), ForeignKey("members.id"), nullable=False, index=True)
    question_id = Column(String, ForeignKey("opinion_questions.id"), nullable=False)
    selected_value = Column(Float, nullable=False)
    submitted_at = Column(DateTime, server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("member_id", "question_id", name="uq_opinion_response_member_question"),
    )
