"""Deterministic health computations over plain values.

Nothing in here touches the database; the service layer fetches rows and
hands numbers to these functions so they can be unit-tested in isolation.
"""
from decimal import Decimal, ROUND_HALF_UP
from math import isfinite, sqrt
from typing import Dict, List, Optional, Sequence, Any


# Heart-rate bounds used when aggregating readings
VALID_BPM_RANGE = (40, 200)
RESTING_BPM_RANGE = (40, 100)
HRV_CAP_MS = 150.0
MAX_BMI = 1e6

BP_BASELINE_BPM = 72

BP_CATEGORIES = {
    "Normal": (0.1, "Maintain healthy lifestyle: regular exercise, balanced diet, adequate sleep."),
    "Elevated": (0.25, "Lifestyle modifications: reduce sodium intake, increase physical activity, manage stress."),
    "Hypertension Stage 1": (0.4, "Lifestyle changes and regular monitoring. Consider medical consultation."),
    "Hypertension Stage 2": (0.7, "Medical evaluation and treatment likely needed. Monitor closely."),
    "Hypertensive Crisis": (0.95, "IMMEDIATE medical attention required - potential medical emergency."),
}


def round_half_up(value: float, digits: int = 0):
    """Round half away from zero (2.5 -> 3, -2.5 -> -3); ints when digits == 0."""
    quant = Decimal(1).scaleb(-digits)
    rounded = Decimal(str(value)).quantize(quant, rounding=ROUND_HALF_UP)
    return int(rounded) if digits == 0 else float(rounded)


def _fmt(value: float) -> str:
    return f"{value:g}"


# --- Categories ---

def heart_rate_category(bpm: int) -> str:
    if bpm < 60:
        return "Bradycardia"
    if bpm <= 100:
        return "Normal"
    if bpm <= 120:
        return "Elevated"
    return "Tachycardia"


def heart_rate_level(bpm: Optional[int]) -> str:
    """Coarse label shown next to the stress gauge."""
    if not bpm:
        return "Unknown"
    if bpm < 60:
        return "Low"
    if bpm <= 100:
        return "Normal"
    if bpm <= 120:
        return "Elevated"
    return "High"


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """Raises ValueError when the height is too small to give a usable BMI."""
    height_m = height_cm / 100.0
    squared = height_m * height_m
    if squared <= 0:
        raise ValueError("Invalid height for BMI calculation")
    bmi = weight_kg / squared
    if not isfinite(bmi) or bmi > MAX_BMI:
        raise ValueError("Invalid height for BMI calculation")
    return round_half_up(bmi, 1)


def bmi_category(bmi: float) -> str:
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal"
    if bmi < 30:
        return "Overweight"
    return "Obese"


# --- Blood pressure ---

def classify_blood_pressure(systolic: int, diastolic: int) -> Dict[str, Any]:
    # Most severe matching class wins
    if systolic > 180 or diastolic > 120:
        category = "Hypertensive Crisis"
    elif systolic >= 140 or diastolic >= 90:
        category = "Hypertension Stage 2"
    elif systolic >= 130 or diastolic >= 80:
        category = "Hypertension Stage 1"
    elif systolic >= 120:
        category = "Elevated"
    else:
        category = "Normal"
    risk_score, recommendation = BP_CATEGORIES[category]
    return {"category": category, "risk_score": risk_score, "recommendation": recommendation}


def estimate_blood_pressure(bpm: int) -> Dict[str, Any]:
    """Educational estimate of blood pressure from heart rate alone.

    Starts from 120/80 at a resting 70 bpm and shifts both values by a
    piecewise-linear adjustment per heart-rate band. This is not a
    measurement and the result carries a confidence that drops outside the
    normal heart-rate range.
    """
    original_bpm = bpm
    bpm = max(40, min(180, bpm))
    resting_hr = 70
    base_systolic = 120
    base_diastolic = 80

    steps = [
        f"Step 1: Heart rate validation - Input: {original_bpm} BPM, Clamped: {bpm} BPM",
        f"Step 2: Base values - Resting HR: {resting_hr}, Base BP: {base_systolic}/{base_diastolic}",
    ]
    hr_deviation = bpm - resting_hr
    steps.append(f"Step 3: HR deviation from resting = {hr_deviation} BPM")

    excess_hr = bpm - 100
    if bpm < 50:
        systolic_adj = -25 + (bpm - 40) * 0.5
        diastolic_adj = -15 + (bpm - 40) * 0.3
        condition = "Severe Bradycardia"
        steps.append("Step 4a: Severe bradycardia detected - applying compensatory adjustments")
    elif bpm < 60:
        systolic_adj = -15 + (bpm - 50) * 1.0
        diastolic_adj = -10 + (bpm - 50) * 0.5
        condition = "Mild Bradycardia"
        steps.append("Step 4b: Mild bradycardia - reduced cardiac output compensation")
    elif bpm <= 100:
        systolic_adj = hr_deviation * 0.4
        diastolic_adj = hr_deviation * 0.2
        condition = "Normal Range"
        steps.append("Step 4c: Normal HR range - linear BP adjustment")
    elif bpm <= 120:
        systolic_adj = 12 + excess_hr * 0.8
        diastolic_adj = 4 + excess_hr * 0.4
        condition = "Mild Tachycardia"
        steps.append("Step 4d: Mild tachycardia - increased cardiac output")
    elif bpm <= 150:
        systolic_adj = 16 + excess_hr * 0.6
        diastolic_adj = 8 + excess_hr * 0.3
        condition = "Moderate Tachycardia"
        steps.append("Step 4e: Moderate tachycardia - significant cardiovascular stress")
    else:
        systolic_adj = 20 + excess_hr * 0.4
        diastolic_adj = 10 + excess_hr * 0.2
        condition = "Severe Tachycardia"
        steps.append("Step 4f: Severe tachycardia - maximum cardiovascular response")

    raw_systolic = base_systolic + systolic_adj
    raw_diastolic = base_diastolic + diastolic_adj
    steps.append(f"Step 5: Raw calculations - Systolic: {base_systolic} + {_fmt(systolic_adj)} = {_fmt(raw_systolic)}")
    steps.append(f"Step 5: Raw calculations - Diastolic: {base_diastolic} + {_fmt(diastolic_adj)} = {_fmt(raw_diastolic)}")

    systolic = max(85, min(200, round_half_up(raw_systolic)))
    diastolic = max(50, min(130, round_half_up(raw_diastolic)))
    if diastolic >= systolic:
        diastolic = systolic - 20
    steps.append(f"Step 6: Applied physiological limits - Final BP: {systolic}/{diastolic}")

    pulse_pressure = systolic - diastolic
    mean_arterial_pressure = round_half_up(diastolic + pulse_pressure / 3)
    steps.append(f"Step 7: Calculated metrics - Pulse Pressure: {pulse_pressure}, MAP: {mean_arterial_pressure}")

    if 60 <= bpm <= 100:
        confidence = 0.95
    elif 50 <= bpm <= 120:
        confidence = 0.85
    elif 40 <= bpm <= 150:
        confidence = 0.75
    else:
        confidence = 0.60
    steps.append(f"Step 8: Confidence assessment - {_fmt(confidence)} based on HR range")

    return {
        "systolic": systolic,
        "diastolic": diastolic,
        "pulse_pressure": pulse_pressure,
        "mean_arterial_pressure": mean_arterial_pressure,
        "confidence": confidence,
        "physiological_condition": condition,
        "calculation_steps": steps,
        "raw_calculations": {
            "hr_deviation": hr_deviation,
            "systolic_adjustment": round_half_up(systolic_adj, 2),
            "diastolic_adjustment": round_half_up(diastolic_adj, 2),
        },
    }


# --- Heart-rate statistics ---

def filter_valid_bpm(values: Sequence[float]) -> List[float]:
    low, high = VALID_BPM_RANGE
    return [v for v in values if low <= v <= high]


def calculate_hrv_rmssd(bpm_values: Sequence[float]) -> Optional[float]:
    """RMSSD (ms) over successive RR intervals derived from chronological bpm readings.

    Readings outside 40-200 bpm are dropped; fewer than two remaining yields None.
    """
    filtered = filter_valid_bpm(bpm_values)
    if len(filtered) < 2:
        return None
    rr = [60000.0 / b for b in filtered]
    diffs = [(rr[i] - rr[i - 1]) ** 2 for i in range(1, len(rr))]
    rmssd = sqrt(sum(diffs) / len(diffs))
    return round_half_up(min(rmssd, HRV_CAP_MS), 2)


def resting_heart_rate(bpm_values: Sequence[float]) -> Optional[float]:
    """Mean of the lowest 20% (at least one) of readings within 40-100 bpm."""
    low, high = RESTING_BPM_RANGE
    candidates = sorted(v for v in bpm_values if low <= v <= high)
    if not candidates:
        return None
    take = max(1, int(len(candidates) * 0.2))
    lowest = candidates[:take]
    return round_half_up(sum(lowest) / len(lowest), 1)


# --- Stress ---

def calculate_stress(bpm_values: Sequence[int], systolic: Optional[int] = None,
                     diastolic: Optional[int] = None) -> Dict[str, Any]:
    """Stress percentage from recent heart rates (newest first) and the latest BP."""
    if not bpm_values:
        return {
            "stress_percentage": 0,
            "stress_category": "Low",
            "current_bpm": None,
            "average_bpm": None,
            "base_stress_score": 0,
        }

    current = bpm_values[0]
    average = sum(bpm_values) / len(bpm_values)
    score = 0

    if current >= 120:
        score += 50
    elif current >= 100:
        score += 35
    elif current >= 90:
        score += 25
    elif current >= 80:
        score += 15
    elif current >= 70:
        score += 5

    if average >= 100:
        score += 25
    elif average >= 90:
        score += 18
    elif average >= 80:
        score += 12
    elif average >= 75:
        score += 6

    if systolic is not None and diastolic is not None:
        if systolic >= 140 or diastolic >= 90:
            score += 15
        elif systolic >= 130 or diastolic >= 85:
            score += 10
        elif systolic >= 120 or diastolic >= 80:
            score += 5

    spread = max(bpm_values) - min(bpm_values)
    if spread > 40:
        score += 10
    elif spread > 25:
        score += 6
    elif spread > 15:
        score += 3

    percentage = min(100, max(0, score))
    # A present heart rate never reads as zero stress
    if percentage == 0 and current > 0:
        percentage = max(5, min(20, current - 55))

    if percentage <= 25:
        category = "Low"
    elif percentage <= 55:
        category = "Moderate"
    else:
        category = "High"

    return {
        "stress_percentage": percentage,
        "stress_category": category,
        "current_bpm": current,
        "average_bpm": round_half_up(average, 1),
        "base_stress_score": score,
    }


# --- Daily risk ---

# (measure, predicate, points, factor, recommendation); every matching rule scores
_RISK_RULES = [
    ("avg", lambda v: v >= 100, 20, "Elevated HR (≥100 bpm)", "Cardio evaluation"),
    ("avg", lambda v: v >= 90, 12, "Moderately elevated HR (90–99 bpm)", "Monitor HR trends"),
    ("avg", lambda v: v >= 85, 8, "Slightly elevated HR (85–89 bpm)", "Maintain exercise"),
    ("avg", lambda v: v <= 50, 15, "Very low HR (≤50 bpm)", "Consult provider"),
    ("avg", lambda v: v <= 60, 3, "Low HR (51–60 bpm)", "Monitor bradycardia"),
    ("max", lambda v: v > 150, 12, "High peak HR (>150)", "Review exercise"),
    ("range", lambda v: v >= 60, 8, "High HR range (≥60)", "Check rhythms"),
    ("range", lambda v: v <= 10, 4, "Low HR range (≤10)", "Stress management"),
]


def risk_level(score: int) -> str:
    if score >= 60:
        return "Very High"
    if score >= 40:
        return "High"
    if score >= 20:
        return "Moderate"
    return "Low"


def assess_risk(bpm_values: Sequence[float]) -> Dict[str, Any]:
    """Score one day of chronological heart-rate readings.

    Rules are cumulative, so an average of 100 bpm also scores the 90 and
    85 bands. Recommendations are listed once per matching rule.

    Raises ValueError when there are no readings.
    """
    if not bpm_values:
        raise ValueError("No readings for today")

    avg_bpm = round_half_up(sum(bpm_values) / len(bpm_values), 1)
    max_bpm = int(max(bpm_values))
    min_bpm = int(min(bpm_values))
    measures = {"avg": avg_bpm, "max": max_bpm, "range": max_bpm - min_bpm}
    hrv = calculate_hrv_rmssd(bpm_values)

    score = 0
    factors: List[str] = []
    recommendations: List[str] = []

    for measure, predicate, points, factor, recommendation in _RISK_RULES:
        if predicate(measures[measure]):
            score += points
            factors.append(factor)
            recommendations.append(recommendation)

    if hrv is not None:
        hrv_rule = None
        if hrv <= 20:
            hrv_rule = (12, "Very low HRV (≤20 ms)", "Stress management")
        elif hrv <= 30:
            hrv_rule = (8, "Low HRV (21–30 ms)", "Stress reduction")
        elif hrv > 100:
            hrv_rule = (8, "Unusually high HRV (>100 ms)", "Verify accuracy")
        if hrv_rule:
            score += hrv_rule[0]
            factors.append(hrv_rule[1])
            recommendations.append(hrv_rule[2])

    level = risk_level(score)
    if not recommendations:
        recommendations = ["Maintain healthy lifestyle", "Monitor vitals"]
    recommendations.append("Keep up the good work" if level == "Low" else "Follow up with provider")

    return {
        "avg_bpm": avg_bpm,
        "min_bpm": min_bpm,
        "max_bpm": max_bpm,
        "hrv_rmssd_ms": hrv,
        "risk_score": score,
        "risk_level": level,
        "factors": factors,
        "recommendations": recommendations,
    }
