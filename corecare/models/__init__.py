from .user import User
from .vitals import HeartRateReading, BloodPressureReading, BmiRecord
from .mood import MoodEntry

__all__ = ["User", "HeartRateReading", "BloodPressureReading", "BmiRecord", "MoodEntry"]
