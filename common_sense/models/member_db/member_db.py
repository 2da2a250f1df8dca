import uuid
from sqlalchemy import Column, String, DateTime, Uuid, func
from common_sense.core.database import Base


class Member(Base):
    __tablename__ = "members"

    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        unique=True,
        index=True
    )

    email = Column(String, unique=True, nullable=False)
    username = Column(String(40), unique=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
