import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from corecare import crud
from corecare.api import deps
from corecare.reminders.metrics import vitals_recorded_total
from corecare.schemas.common import ApiResponse
from corecare.schemas.mood import Mood, MoodEntry, MoodSubmission
from corecare.schemas.vitals import ReadingView

router = APIRouter()

logger = logging.getLogger(__name__)

VALID_MOODS = [m.value for m in Mood]


@router.post("", response_model=ApiResponse[MoodEntry])
def record_mood(payload: MoodSubmission, db: Session = Depends(deps.get_db)):
    deps.require_user_id(payload.user_id)
    mood = (payload.mood or "").strip()
    if not mood:
        raise HTTPException(status_code=400, detail="Mood value required")
    if mood not in VALID_MOODS:
        raise HTTPException(status_code=400, detail="Invalid mood value")

    user = deps.get_existing_user(db, payload.user_id)
    entry = crud.mood.create(
        db,
        user_id=user.id,
        mood=mood,
        symptoms=payload.symptoms,
        heart_rate=payload.heart_rate,
        context_note=payload.context_note,
    )
    vitals_recorded_total.labels(record_type="mood").inc()
    return {"status": "success", "message": "Mood recorded successfully", "data": MoodEntry.from_entry(entry)}


@router.get("", response_model=ApiResponse[Union[List[MoodEntry], MoodEntry]])
def read_mood(
    user_id: Optional[int] = None,
    type: ReadingView = ReadingView.LATEST,
    db: Session = Depends(deps.get_db),
):
    user_id = deps.require_user_id(user_id)

    if type == ReadingView.HISTORY:
        entries = crud.mood.get_history(db, user_id=user_id)
        return {"status": "success", "data": [MoodEntry.from_entry(e) for e in entries]}

    latest = crud.mood.get_latest(db, user_id=user_id)
    if not latest:
        return {"status": "success", "message": "No mood data found", "data": MoodEntry(mood="neutral")}
    return {"status": "success", "data": MoodEntry.from_entry(latest)}
