"""
journal_service.py — Journal entry persistence
Stores analysed check-ins, journal and voice-journal entries, and serves the
read projections used by the streak, calendar and history views.
"""

import json
import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from models.journal import JournalEntry
from models.user import User
from services.date_utils import to_iso_instant

logger = logging.getLogger(__name__)


def _clamp_level(value) -> int | None:
    """Model output is loosely typed; keep 0-10 integers only."""
    try:
        level = int(value)
    except (TypeError, ValueError):
        return None
    return max(0, min(10, level))


class JournalService:
    @staticmethod
    def get_user(db: Session, user_id: int) -> User | None:
        return db.query(User).filter_by(id=user_id).first()

    @staticmethod
    def create_entry(db: Session, user_id: int, mood: str | None, scale, content: str, analysis: dict) -> JournalEntry:
        """Persist one entry from an analysis result. Entries are never edited afterwards."""
        entry = JournalEntry(
            user_id=user_id,
            mood=mood,
            scale=_clamp_level(scale),
            content=content,
            insight=analysis.get("insight"),
            emotion_classification=analysis.get("emotionClassification"),
            anxiety_level=_clamp_level(analysis.get("anxietyLevel")),
            suggestions=json.dumps(analysis.get("suggestions") or []),
            created_at=datetime.now(timezone.utc),
        )
        try:
            db.add(entry)
            db.commit()
            db.refresh(entry)
        except SQLAlchemyError:
            db.rollback()
            raise
        logger.info(f"Journal entry saved: {entry.id}")
        return entry

    @staticmethod
    def get_entry_timestamps(db: Session, user_id: int) -> list[datetime]:
        """Timestamp-only projection, newest first."""
        rows = db.query(JournalEntry.created_at)\
                 .filter(JournalEntry.user_id == user_id)\
                 .order_by(JournalEntry.created_at.desc()).all()
        return [r.created_at for r in rows]

    @staticmethod
    def get_entries_between(db: Session, user_id: int, start: datetime, end: datetime) -> list[JournalEntry]:
        """Entries with start <= created_at <= end, oldest first."""
        # created_at is stored as naive UTC
        start = start.astimezone(timezone.utc).replace(tzinfo=None)
        end = end.astimezone(timezone.utc).replace(tzinfo=None)
        return db.query(JournalEntry).filter(
            JournalEntry.user_id == user_id,
            JournalEntry.created_at >= start,
            JournalEntry.created_at <= end,
        ).order_by(JournalEntry.created_at.asc()).all()

    @staticmethod
    def get_history(db: Session, user_id: int, limit: int = 50) -> list[dict]:
        entries = db.query(JournalEntry).filter_by(user_id=user_id)\
                    .order_by(JournalEntry.created_at.desc()).limit(limit).all()
        return [JournalService.serialize(e) for e in entries]

    @staticmethod
    def serialize(entry: JournalEntry) -> dict:
        return {
            "id": entry.id,
            "createdAt": to_iso_instant(entry.created_at),
            "mood": entry.mood or "Unknown",
            "scale": entry.scale or 0,
            "content": entry.content or "",
            "insight": entry.insight or "",
            "emotionClassification": entry.emotion_classification,
            "anxietyLevel": entry.anxiety_level or 0,
            "suggestions": json.loads(entry.suggestions) if entry.suggestions else [],
        }
