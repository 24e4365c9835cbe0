from sqlalchemy import Column, Integer, String, DateTime, Float, ForeignKey, Index
from sqlalchemy.orm import relationship
from corecare.db.base import Base
from corecare.utils.timezone import now_local


class HeartRateReading(Base):
    """A single heart-rate measurement in beats per minute."""
    __tablename__ = "heart_rate_readings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    bpm = Column(Integer, nullable=False)
    category = Column(String(20), nullable=False)
    recorded_at = Column(DateTime, nullable=False, default=now_local)

    user = relationship("User", back_populates="heart_rate_readings")

    __table_args__ = (
        Index("idx_heart_rate_user_recorded", "user_id", "recorded_at"),
    )


class BloodPressureReading(Base):
    """A manually entered blood-pressure reading in mmHg."""
    __tablename__ = "blood_pressure_readings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    systolic = Column(Integer, nullable=False)
    diastolic = Column(Integer, nullable=False)
    category = Column(String(40), nullable=False)
    recorded_at = Column(DateTime, nullable=False, default=now_local)

    user = relationship("User", back_populates="blood_pressure_readings")

    __table_args__ = (
        Index("idx_blood_pressure_user_recorded", "user_id", "recorded_at"),
    )


class BmiRecord(Base):
    """Weight (kg) and height (cm) with the derived BMI."""
    __tablename__ = "bmi_records"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    weight = Column(Float, nullable=False)
    height = Column(Float, nullable=False)
    bmi = Column(Float, nullable=False)
    bmi_category = Column(String(20), nullable=False)
    recorded_at = Column(DateTime, nullable=False, default=now_local)

    user = relationship("User", back_populates="bmi_records")

    __table_args__ = (
        Index("idx_bmi_user_recorded", "user_id", "recorded_at"),
    )
