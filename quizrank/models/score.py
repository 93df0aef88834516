import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, DateTime, Index
from quizrank.database import Base

DEFAULT_CHAPTER_ID = "overall"
# Largest value an INTEGER column holds on every supported backend
MAX_INT = 2**31 - 1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Score(Base):
    """One completed quiz attempt. Append-only: rows are never updated or deleted."""
    __tablename__ = "scores"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    score = Column(Integer, nullable=False)
    total_questions = Column(Integer, nullable=False)
    time_used = Column(Integer, nullable=False)  # seconds
    # Stored at write time, never recomputed on read
    percentage = Column(Integer, nullable=False)
    chapter_id = Column(String(100), nullable=False, default=DEFAULT_CHAPTER_ID)
    created_at = Column(DateTime, nullable=False, default=_utcnow)

    __table_args__ = (
        Index("ix_scores_chapter_id_percentage_time_used", "chapter_id", "percentage", "time_used"),
    )
