from typing import Optional, List
from enum import Enum
from pydantic import BaseModel

from corecare.schemas.common import Timestamp


class Mood(str, Enum):
    VERY_HAPPY = "Very Happy"
    HAPPY = "Happy"
    NEUTRAL = "Neutral"
    SAD = "Sad"
    VERY_SAD = "Very Sad"
    ANXIOUS = "Anxious"
    STRESSED = "Stressed"


class MoodSubmission(BaseModel):
    user_id: Optional[int] = None
    # Validated against Mood in the endpoint so unknown values get a readable message
    mood: Optional[str] = None
    symptoms: List[str] = []
    heart_rate: Optional[int] = None
    context_note: Optional[str] = None


class MoodEntry(BaseModel):
    id: Optional[int] = None
    mood: str
    symptoms: List[str] = []
    heart_rate: Optional[int] = None
    context_note: Optional[str] = None
    recorded_at: Optional[Timestamp] = None

    @classmethod
    def from_entry(cls, entry) -> "MoodEntry":
        return cls(
            id=entry.id,
            mood=entry.mood,
            symptoms=entry.symptom_list,
            heart_rate=entry.heart_rate,
            context_note=entry.context_note,
            recorded_at=entry.recorded_at,
        )
