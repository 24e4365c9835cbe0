from datetime import date, datetime, time, timedelta
from typing import List, Optional
import logging

from sqlalchemy.orm import Session
from sqlalchemy import desc, asc

from corecare.models.vitals import HeartRateReading, BloodPressureReading, BmiRecord
from corecare.scoring.engine import heart_rate_category, calculate_bmi, bmi_category, classify_blood_pressure
from corecare.utils.timezone import now_local

logger = logging.getLogger(__name__)


def _window(start: date, end: date):
    """Half-open datetime range covering whole local days start..end"""
    return datetime.combine(start, time.min), datetime.combine(end + timedelta(days=1), time.min)


class VitalsCRUD:

    # --- Heart rate ---

    @staticmethod
    def create_heart_rate(db: Session, user_id: int, bpm: int, recorded_at: Optional[datetime] = None) -> HeartRateReading:
        """Store a heart-rate reading with its category"""
        db_obj = HeartRateReading(
            user_id=user_id,
            bpm=bpm,
            category=heart_rate_category(bpm),
            recorded_at=recorded_at or now_local(),
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        logger.info(f"[VitalsCRUD] Stored heart rate {bpm} bpm for user {user_id}")
        return db_obj

    @staticmethod
    def get_latest_heart_rate(db: Session, user_id: int) -> Optional[HeartRateReading]:
        return (
            db.query(HeartRateReading)
            .filter(HeartRateReading.user_id == user_id)
            .order_by(desc(HeartRateReading.recorded_at), desc(HeartRateReading.id))
            .first()
        )

    @staticmethod
    def get_heart_rate_history(db: Session, user_id: int, limit: Optional[int] = None) -> List[HeartRateReading]:
        """Newest first"""
        query = (
            db.query(HeartRateReading)
            .filter(HeartRateReading.user_id == user_id)
            .order_by(desc(HeartRateReading.recorded_at), desc(HeartRateReading.id))
        )
        if limit:
            query = query.limit(limit)
        return query.all()

    @staticmethod
    def get_heart_rates_between(db: Session, user_id: int, start: date, end: date) -> List[HeartRateReading]:
        """Readings on local days start..end inclusive, oldest first"""
        start_dt, end_dt = _window(start, end)
        return (
            db.query(HeartRateReading)
            .filter(
                HeartRateReading.user_id == user_id,
                HeartRateReading.recorded_at >= start_dt,
                HeartRateReading.recorded_at < end_dt,
            )
            .order_by(asc(HeartRateReading.recorded_at), asc(HeartRateReading.id))
            .all()
        )

    # --- Blood pressure ---

    @staticmethod
    def create_blood_pressure(db: Session, user_id: int, systolic: int, diastolic: int,
                              recorded_at: Optional[datetime] = None) -> BloodPressureReading:
        db_obj = BloodPressureReading(
            user_id=user_id,
            systolic=systolic,
            diastolic=diastolic,
            category=classify_blood_pressure(systolic, diastolic)["category"],
            recorded_at=recorded_at or now_local(),
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        logger.info(f"[VitalsCRUD] Stored blood pressure {systolic}/{diastolic} for user {user_id}")
        return db_obj

    @staticmethod
    def get_latest_blood_pressure(db: Session, user_id: int) -> Optional[BloodPressureReading]:
        return (
            db.query(BloodPressureReading)
            .filter(BloodPressureReading.user_id == user_id)
            .order_by(desc(BloodPressureReading.recorded_at), desc(BloodPressureReading.id))
            .first()
        )

    @staticmethod
    def get_blood_pressure_history(db: Session, user_id: int) -> List[BloodPressureReading]:
        return (
            db.query(BloodPressureReading)
            .filter(BloodPressureReading.user_id == user_id)
            .order_by(desc(BloodPressureReading.recorded_at), desc(BloodPressureReading.id))
            .all()
        )

    @staticmethod
    def get_blood_pressures_between(db: Session, user_id: int, start: date, end: date) -> List[BloodPressureReading]:
        start_dt, end_dt = _window(start, end)
        return (
            db.query(BloodPressureReading)
            .filter(
                BloodPressureReading.user_id == user_id,
                BloodPressureReading.recorded_at >= start_dt,
                BloodPressureReading.recorded_at < end_dt,
            )
            .order_by(asc(BloodPressureReading.recorded_at), asc(BloodPressureReading.id))
            .all()
        )

    # --- Weight / BMI ---

    @staticmethod
    def create_bmi_record(db: Session, user_id: int, weight: float, height: float,
                          recorded_at: Optional[datetime] = None) -> BmiRecord:
        bmi = calculate_bmi(weight, height)
        db_obj = BmiRecord(
            user_id=user_id,
            weight=weight,
            height=height,
            bmi=bmi,
            bmi_category=bmi_category(bmi),
            recorded_at=recorded_at or now_local(),
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        logger.info(f"[VitalsCRUD] Stored BMI {bmi} for user {user_id}")
        return db_obj

    @staticmethod
    def get_latest_bmi(db: Session, user_id: int) -> Optional[BmiRecord]:
        return (
            db.query(BmiRecord)
            .filter(BmiRecord.user_id == user_id)
            .order_by(desc(BmiRecord.recorded_at), desc(BmiRecord.id))
            .first()
        )

    @staticmethod
    def get_bmi_history(db: Session, user_id: int) -> List[BmiRecord]:
        return (
            db.query(BmiRecord)
            .filter(BmiRecord.user_id == user_id)
            .order_by(desc(BmiRecord.recorded_at), desc(BmiRecord.id))
            .all()
        )
