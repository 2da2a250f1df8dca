from sqlalchemy import Column, String, Integer, JSON
from common_sense.core.database import Base


class OpinionQuestion(Base):
    __tablename__ = "opinion_questions"

    id = Column(String, primary_key=True, index=True)
    prompt = Column(String, nullable=False)
    options = Column(JSON, nullable=False)  # [{ label, value }], sometimes stored as text
    position = Column(Integer, nullable=False, default=0)
