import datetime
from typing import Optional, List
from enum import Enum
from pydantic import BaseModel


class ReportPeriod(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @property
    def days(self) -> int:
        return {"daily": 1, "weekly": 7, "monthly": 30}[self.value]


class ReportSummary(BaseModel):
    period: ReportPeriod
    avg_bpm: Optional[float] = None
    min_bpm: Optional[int] = None
    max_bpm: Optional[int] = None
    avg_bp_systolic: int = 0
    avg_bp_diastolic: int = 0
    avg_hrv: Optional[float] = None
    resting_heart_rate: Optional[float] = None
    recovery_heart_rate: Optional[float] = None
    measurement_count: int = 0


class DailyReading(BaseModel):
    date: datetime.date
    avg_bpm: float
    avg_systolic: Optional[int] = None
    avg_diastolic: Optional[int] = None
    measurement_count: int
    hrv: Optional[float] = None


class PeriodInfo(BaseModel):
    start_date: datetime.date
    end_date: datetime.date
    days_covered: int


class HealthReport(BaseModel):
    summary: ReportSummary
    daily_readings: List[DailyReading]
    period_info: PeriodInfo


class RiskAssessment(BaseModel):
    date: datetime.date
    avg_bpm: float
    min_bpm: int
    max_bpm: int
    hrv_rmssd_ms: Optional[float] = None
    risk_score: int
    risk_level: str
    factors: List[str]
    recommendations: List[str]
