import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from corecare.api import deps
from corecare.crud.vitals import VitalsCRUD
from corecare.reminders.metrics import vitals_recorded_total
from corecare.schemas.common import ApiResponse
from corecare.schemas.vitals import HeartRateReading, HeartRateSubmission, ReadingView

router = APIRouter()

logger = logging.getLogger(__name__)

MIN_BPM = 30
MAX_BPM = 220


@router.post("", response_model=ApiResponse[HeartRateReading])
def record_heart_rate(payload: HeartRateSubmission, db: Session = Depends(deps.get_db)):
    """Store a heart-rate measurement"""
    deps.require_user_id(payload.user_id)
    if payload.bpm is None:
        raise HTTPException(status_code=400, detail="BPM value required")
    if not MIN_BPM <= payload.bpm <= MAX_BPM:
        raise HTTPException(status_code=400, detail=f"BPM value out of valid range ({MIN_BPM}–{MAX_BPM})")

    user = deps.get_existing_user(db, payload.user_id)
    reading = VitalsCRUD.create_heart_rate(db, user.id, payload.bpm)
    vitals_recorded_total.labels(record_type="heart_rate").inc()
    return {"status": "success", "message": "Heart rate stored successfully", "data": reading}


@router.get("", response_model=ApiResponse[Union[List[HeartRateReading], HeartRateReading]])
def read_heart_rate(
    user_id: Optional[int] = None,
    type: ReadingView = ReadingView.LATEST,
    db: Session = Depends(deps.get_db),
):
    """Latest heart-rate reading or full history (newest first)"""
    user_id = deps.require_user_id(user_id)

    if type == ReadingView.HISTORY:
        readings = VitalsCRUD.get_heart_rate_history(db, user_id)
        return {"status": "success", "data": readings}

    latest = VitalsCRUD.get_latest_heart_rate(db, user_id)
    if not latest:
        return {
            "status": "success",
            "message": "No measurements found",
            "data": HeartRateReading(bpm=0, category="No category"),
        }
    return {"status": "success", "data": latest}
