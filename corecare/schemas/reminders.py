from typing import Optional, List
from pydantic import BaseModel

from corecare.schemas.common import Timestamp


class ReminderAction(BaseModel):
    identifier: str
    title: str
    delay_seconds: Optional[int] = None


class HeartRateReminder(BaseModel):
    """When the next heart-rate reminder should fire and what it says"""
    user_id: int
    category: str = "HEART_RATE_REMINDER"
    title: str
    body: str
    first_time: bool
    overdue: bool
    last_measurement_at: Optional[Timestamp] = None
    fire_in_seconds: int
    fire_at: Timestamp
    interval_seconds: int
    actions: List[ReminderAction]


class SnoozeRequest(BaseModel):
    user_id: Optional[int] = None
