from sqlalchemy import Column, Float, DateTime, ForeignKey, Uuid, func
from common_sense.core.database import Base


class OrientationProfile(Base):
    __tablename__ = "orientation_profiles"

    member_id = Column(Uuid(as_uuid=True), ForeignKey("members.id"), primary_key=True)
    score = Column(Float, nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), nullable=False)
