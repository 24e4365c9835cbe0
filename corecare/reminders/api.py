from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from corecare.api import deps
from corecare.crud.vitals import VitalsCRUD
from corecare.schemas.common import ApiResponse
from corecare.schemas.reminders import HeartRateReminder, SnoozeRequest
from .service import compute_heart_rate_reminder, snooze_heart_rate_reminder
from .metrics import reminders_computed_total, reminders_snoozed_total


router = APIRouter()


@router.get("/heart-rate", response_model=ApiResponse[HeartRateReminder])
def get_heart_rate_reminder(user_id: Optional[int] = None, db: Session = Depends(deps.get_db)):
    """Next heart-rate reminder for the user, based on their latest reading"""
    user = deps.get_existing_user(db, user_id)
    latest = VitalsCRUD.get_latest_heart_rate(db, user.id)
    reminder = compute_heart_rate_reminder(user.id, latest.recorded_at if latest else None)
    reminders_computed_total.labels(kind="first_time" if reminder.first_time else "interval").inc()
    return {"status": "success", "data": reminder}


@router.post("/heart-rate/snooze", response_model=ApiResponse[HeartRateReminder])
def snooze_heart_rate(payload: SnoozeRequest, db: Session = Depends(deps.get_db)):
    user = deps.get_existing_user(db, payload.user_id)
    reminder = snooze_heart_rate_reminder(user.id)
    reminders_snoozed_total.inc()
    return {"status": "success", "message": "Reminder snoozed", "data": reminder}
