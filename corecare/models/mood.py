from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Index
from sqlalchemy.orm import relationship
from corecare.db.base import Base
from corecare.utils.timezone import now_local


class MoodEntry(Base):
    __tablename__ = "mood_entries"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    mood = Column(String(20), nullable=False)
    symptoms = Column(Text, nullable=True)  # comma-joined
    heart_rate = Column(Integer, nullable=True)
    context_note = Column(Text, nullable=True)
    recorded_at = Column(DateTime, nullable=False, default=now_local)

    user = relationship("User", back_populates="mood_entries")

    __table_args__ = (
        Index("idx_mood_user_recorded", "user_id", "recorded_at"),
    )

    @property
    def symptom_list(self):
        if not self.symptoms:
            return []
        return [s for s in self.symptoms.split(",") if s]
