from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from corecare.db.base import Base
from corecare.utils.timezone import now_local


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    # Accounts register with either an email or a phone number
    email = Column(String(255), unique=True, index=True, nullable=True)
    phone = Column(String(32), unique=True, index=True, nullable=True)
    hashed_password = Column(String, nullable=False)
    name = Column(String(100), nullable=True)
    age = Column(Integer, nullable=True)
    sex = Column(String(20), nullable=True)
    height = Column(String(20), nullable=True, default="0")  # free text, as entered in the profile screen
    profile_picture = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=now_local)
    updated_at = Column(DateTime, default=now_local, onupdate=now_local)

    # Readings go with the account
    heart_rate_readings = relationship("HeartRateReading", back_populates="user", cascade="all, delete-orphan")
    blood_pressure_readings = relationship("BloodPressureReading", back_populates="user", cascade="all, delete-orphan")
    bmi_records = relationship("BmiRecord", back_populates="user", cascade="all, delete-orphan")
    mood_entries = relationship("MoodEntry", back_populates="user", cascade="all, delete-orphan")

    @property
    def email_or_phone(self) -> str:
        return self.email or self.phone or ""
