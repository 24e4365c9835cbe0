"""Heart-rate reminder scheduling.

The next reminder fires `interval - (now - last_measurement)` seconds from
now. With no measurement on record, or when the interval has already passed,
it fires almost immediately. Nothing is persisted; the client asks again
after each measurement.
"""
from datetime import datetime, timedelta
from typing import Callable, Optional, Sequence
import logging
import math
import random

from corecare.core.config import settings
from corecare.schemas.reminders import HeartRateReminder, ReminderAction
from corecare.utils.timezone import now_local

logger = logging.getLogger(__name__)

REMINDER_CATEGORY = "HEART_RATE_REMINDER"

FIRST_TIME_TITLE = "Welcome to Core Care!"
FIRST_TIME_BODY = "Let's start tracking your heart health. Tap to measure your heart rate now."

REMINDER_TITLE = "Heart Rate Reminder"
REMINDER_BODIES = (
    "It's time for your heart rate check!",
    "Don't forget to monitor your heart health today!",
    "Your heart deserves attention - take a quick measurement!",
    "Keep your health on track - measure your heart rate now!",
    "Time for a quick heart rate check-up!",
)


def reminder_actions(snooze_seconds: int):
    return [
        ReminderAction(identifier="MEASURE_NOW", title="Measure Now"),
        ReminderAction(identifier="REMIND_LATER", title="Remind in 1 hour", delay_seconds=snooze_seconds),
    ]


def seconds_until_next_reminder(last_measurement: Optional[datetime], now: datetime,
                                interval_seconds: int, immediate_seconds: int) -> int:
    if last_measurement is None:
        return immediate_seconds
    # A timestamp in the future counts as a measurement taken just now
    elapsed = max(0.0, (now - last_measurement).total_seconds())
    remaining = interval_seconds - elapsed
    if remaining <= 0:
        return immediate_seconds
    return math.ceil(remaining)


def compute_heart_rate_reminder(
    user_id: int,
    last_measurement: Optional[datetime],
    now: Optional[datetime] = None,
    interval_seconds: Optional[int] = None,
    immediate_seconds: Optional[int] = None,
    choose: Callable[[Sequence[str]], str] = random.choice,
) -> HeartRateReminder:
    now = now or now_local()
    interval = interval_seconds or settings.HEART_RATE_REMINDER_INTERVAL_SECONDS
    immediate = immediate_seconds or settings.HEART_RATE_REMINDER_IMMEDIATE_SECONDS

    fire_in = seconds_until_next_reminder(last_measurement, now, interval, immediate)
    first_time = last_measurement is None
    overdue = not first_time and (now - last_measurement).total_seconds() >= interval

    if first_time:
        title, body = FIRST_TIME_TITLE, FIRST_TIME_BODY
    else:
        title, body = REMINDER_TITLE, choose(REMINDER_BODIES)

    logger.info(f"[Reminders] user {user_id}: next heart-rate reminder in {fire_in}s (first_time={first_time})")
    return HeartRateReminder(
        user_id=user_id,
        category=REMINDER_CATEGORY,
        title=title,
        body=body,
        first_time=first_time,
        overdue=overdue,
        last_measurement_at=last_measurement,
        fire_in_seconds=fire_in,
        fire_at=now + timedelta(seconds=fire_in),
        interval_seconds=interval,
        actions=reminder_actions(settings.HEART_RATE_REMINDER_SNOOZE_SECONDS),
    )


def snooze_heart_rate_reminder(user_id: int, now: Optional[datetime] = None,
                               choose: Callable[[Sequence[str]], str] = random.choice) -> HeartRateReminder:
    """One reminder pushed out by the snooze delay, independent of the last measurement"""
    now = now or now_local()
    delay = settings.HEART_RATE_REMINDER_SNOOZE_SECONDS
    return HeartRateReminder(
        user_id=user_id,
        category=REMINDER_CATEGORY,
        title=REMINDER_TITLE,
        body=choose(REMINDER_BODIES),
        first_time=False,
        overdue=False,
        last_measurement_at=None,
        fire_in_seconds=delay,
        fire_at=now + timedelta(seconds=delay),
        interval_seconds=settings.HEART_RATE_REMINDER_INTERVAL_SECONDS,
        actions=reminder_actions(delay),
    )
