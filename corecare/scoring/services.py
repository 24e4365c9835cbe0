"""Derived views that read rows through the CRUD layer and score them with the engine."""
from collections import OrderedDict
from datetime import date, timedelta
from typing import Optional
import logging

from sqlalchemy.orm import Session

from corecare.crud.vitals import VitalsCRUD
from corecare.scoring import engine
from corecare.schemas.reports import (
    DailyReading,
    HealthReport,
    PeriodInfo,
    ReportPeriod,
    ReportSummary,
    RiskAssessment,
)
from corecare.schemas.vitals import StressResult
from corecare.utils.timezone import today_local

logger = logging.getLogger(__name__)

STRESS_WINDOW = 30

# Readings outside these bounds are treated as sensor noise in reports
VALID_SYSTOLIC_RANGE = (70, 250)
VALID_DIASTOLIC_RANGE = (40, 150)


def _mean(values, digits: int = 1):
    if not values:
        return None
    return engine.round_half_up(sum(values) / len(values), digits)


def _valid_bp(reading) -> bool:
    return (
        VALID_SYSTOLIC_RANGE[0] <= reading.systolic <= VALID_SYSTOLIC_RANGE[1]
        and VALID_DIASTOLIC_RANGE[0] <= reading.diastolic <= VALID_DIASTOLIC_RANGE[1]
    )


def build_report(db: Session, user_id: int, period: ReportPeriod, today: Optional[date] = None) -> HealthReport:
    """Heart-rate and blood-pressure summary for today, the last 7 days or the last 30 days."""
    end = today or today_local()
    start = end - timedelta(days=period.days - 1)

    low, high = engine.VALID_BPM_RANGE
    heart_rates = [
        r for r in VitalsCRUD.get_heart_rates_between(db, user_id, start, end)
        if low <= r.bpm <= high
    ]
    pressures = [r for r in VitalsCRUD.get_blood_pressures_between(db, user_id, start, end) if _valid_bp(r)]

    bpm_values = [r.bpm for r in heart_rates]
    summary = ReportSummary(
        period=period,
        avg_bpm=_mean(bpm_values),
        min_bpm=min(bpm_values) if bpm_values else None,
        max_bpm=max(bpm_values) if bpm_values else None,
        avg_bp_systolic=_mean([r.systolic for r in pressures], 0) or 0,
        avg_bp_diastolic=_mean([r.diastolic for r in pressures], 0) or 0,
        avg_hrv=engine.calculate_hrv_rmssd(bpm_values),
        resting_heart_rate=engine.resting_heart_rate(bpm_values),
        recovery_heart_rate=None,
        measurement_count=len(bpm_values),
    )

    by_day = OrderedDict()
    for reading in heart_rates:
        by_day.setdefault(reading.recorded_at.date(), []).append(reading.bpm)
    bp_by_day = {}
    for reading in pressures:
        bp_by_day.setdefault(reading.recorded_at.date(), []).append(reading)

    daily_readings = []
    for day, values in by_day.items():
        day_bp = bp_by_day.get(day, [])
        daily_readings.append(DailyReading(
            date=day,
            avg_bpm=_mean(values),
            avg_systolic=_mean([r.systolic for r in day_bp], 0),
            avg_diastolic=_mean([r.diastolic for r in day_bp], 0),
            measurement_count=len(values),
            hrv=engine.calculate_hrv_rmssd(values),
        ))

    logger.info(
        f"[Reports] {period.value} report for user {user_id}: {len(bpm_values)} heart rates, "
        f"{len(pressures)} blood pressures"
    )
    return HealthReport(
        summary=summary,
        daily_readings=daily_readings,
        period_info=PeriodInfo(start_date=start, end_date=end, days_covered=period.days),
    )


def compute_stress(db: Session, user_id: int) -> StressResult:
    recent = VitalsCRUD.get_heart_rate_history(db, user_id, limit=STRESS_WINDOW)
    bpm_values = [r.bpm for r in recent if r.bpm]
    latest_bp = VitalsCRUD.get_latest_blood_pressure(db, user_id)
    systolic = latest_bp.systolic if latest_bp else None
    diastolic = latest_bp.diastolic if latest_bp else None

    result = engine.calculate_stress(bpm_values, systolic, diastolic)
    return StressResult(
        stress_percentage=result["stress_percentage"],
        stress_category=result["stress_category"],
        bpm=result["current_bpm"],
        category=engine.heart_rate_level(result["current_bpm"]),
        systolic=systolic,
        diastolic=diastolic,
        bpm_readings_count=len(bpm_values),
        average_bpm=result["average_bpm"],
        bp_available=latest_bp is not None,
        base_stress_score=result["base_stress_score"],
    )


def assess_daily_risk(db: Session, user_id: int, today: Optional[date] = None) -> Optional[RiskAssessment]:
    """Risk for today's readings, or None when there are none"""
    day = today or today_local()
    readings = VitalsCRUD.get_heart_rates_between(db, user_id, day, day)
    if not readings:
        return None
    result = engine.assess_risk([float(r.bpm) for r in readings])
    return RiskAssessment(date=day, **result)
