from typing import Optional, List
from enum import Enum
from pydantic import BaseModel, Field

from corecare.schemas.common import Timestamp


class ReadingView(str, Enum):
    """Which slice of a user's readings to return"""
    LATEST = "latest"
    HISTORY = "history"


class BloodPressureView(str, Enum):
    ESTIMATE = "estimate"
    LATEST = "latest"
    HISTORY = "history"


# Request schemas
class HeartRateSubmission(BaseModel):
    user_id: Optional[int] = None
    bpm: Optional[int] = None


class BloodPressureSubmission(BaseModel):
    """Either `bpm` (estimate only) or `systolic`/`diastolic` (stored reading)"""
    user_id: Optional[int] = None
    bpm: Optional[int] = None
    systolic: Optional[int] = None
    diastolic: Optional[int] = None


class WeightSubmission(BaseModel):
    user_id: Optional[int] = None
    weight: Optional[float] = None
    height: Optional[float] = None


# Response schemas
class HeartRateReading(BaseModel):
    id: Optional[int] = None
    bpm: int
    category: str
    recorded_at: Optional[Timestamp] = None

    class Config:
        from_attributes = True


class BloodPressureReading(BaseModel):
    id: int
    systolic: int
    diastolic: int
    category: str
    recorded_at: Timestamp

    class Config:
        from_attributes = True


class RawCalculations(BaseModel):
    hr_deviation: int
    systolic_adjustment: float
    diastolic_adjustment: float


class BloodPressureEstimate(BaseModel):
    systolic: int
    diastolic: int
    pulse_pressure: int
    mean_arterial_pressure: int
    confidence: float
    physiological_condition: str
    calculation_steps: List[str]
    raw_calculations: RawCalculations
    category: str
    risk_score: float
    recommendation: str
    input_bpm: int
    data_source: Optional[str] = None
    measurement_time: Optional[Timestamp] = None
    disclaimer: str = Field(
        default="FOR EDUCATIONAL PURPOSES ONLY. Estimated from heart rate using physiological "
                "principles, not an actual blood pressure measurement."
    )


class BmiResult(BaseModel):
    """BMI record as returned to the app, which reads either `category` or `bmi_category`"""
    id: int
    user_id: int
    weight: float
    height: float
    bmi: float
    category: str
    bmi_category: str
    recorded_at: Timestamp

    @classmethod
    def from_record(cls, record) -> "BmiResult":
        return cls(
            id=record.id,
            user_id=record.user_id,
            weight=record.weight,
            height=record.height,
            bmi=record.bmi,
            bmi_category=record.bmi_category,
            category=record.bmi_category,
            recorded_at=record.recorded_at,
        )


class StressResult(BaseModel):
    stress_percentage: float
    stress_category: str
    bpm: Optional[int] = None
    category: str
    systolic: Optional[int] = None
    diastolic: Optional[int] = None
    bpm_readings_count: int
    average_bpm: Optional[float] = None
    bp_available: bool
    base_stress_score: int
