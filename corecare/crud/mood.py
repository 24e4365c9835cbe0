from datetime import datetime
from typing import List, Optional
import logging

from sqlalchemy import desc
from sqlalchemy.orm import Session

from corecare.models.mood import MoodEntry
from corecare.utils.timezone import now_local

logger = logging.getLogger(__name__)


class CRUDMood:
    def create(self, db: Session, *, user_id: int, mood: str, symptoms: List[str],
               heart_rate: Optional[int] = None, context_note: Optional[str] = None,
               recorded_at: Optional[datetime] = None) -> MoodEntry:
        cleaned = [s.strip() for s in symptoms if s and s.strip()]
        db_obj = MoodEntry(
            user_id=user_id,
            mood=mood,
            symptoms=",".join(cleaned) or None,
            heart_rate=heart_rate,
            context_note=context_note,
            recorded_at=recorded_at or now_local(),
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        logger.info(f"[CRUDMood] Stored mood '{mood}' for user {user_id}")
        return db_obj

    def get_latest(self, db: Session, *, user_id: int) -> Optional[MoodEntry]:
        return (
            db.query(MoodEntry)
            .filter(MoodEntry.user_id == user_id)
            .order_by(desc(MoodEntry.recorded_at), desc(MoodEntry.id))
            .first()
        )

    def get_history(self, db: Session, *, user_id: int) -> List[MoodEntry]:
        return (
            db.query(MoodEntry)
            .filter(MoodEntry.user_id == user_id)
            .order_by(desc(MoodEntry.recorded_at), desc(MoodEntry.id))
            .all()
        )


mood = CRUDMood()
