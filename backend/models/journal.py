from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from database import Base


class JournalEntry(Base):
    __tablename__ = "journal_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    mood = Column(String(50), nullable=True)  # e.g. "Happy", "Sad"
    scale = Column(Integer, nullable=True)  # 1-10, as picked by the user
    content = Column(Text, nullable=True)
    insight = Column(Text, nullable=True)
    emotion_classification = Column(String(50), nullable=True)
    anxiety_level = Column(Integer, nullable=True)  # 0-10, 0 = not rated
    suggestions = Column(Text, nullable=True)  # JSON array of strings
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_journal_user_created", "user_id", "created_at"),
    )
