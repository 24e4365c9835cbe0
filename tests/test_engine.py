import pytest

from corecare.scoring import engine


class TestRounding:
    def test_halves_round_away_from_zero(self) -> None:
        assert engine.round_half_up(72.5) == 73
        assert engine.round_half_up(-7.5) == -8
        assert engine.round_half_up(22.85, 1) == 22.9

    def test_whole_rounding_returns_int(self) -> None:
        assert isinstance(engine.round_half_up(93.2), int)


class TestCategories:
    @pytest.mark.parametrize(
        "bpm, expected",
        [(59, "Bradycardia"), (60, "Normal"), (100, "Normal"), (101, "Elevated"), (120, "Elevated"), (121, "Tachycardia")],
    )
    def test_heart_rate_category_boundaries(self, bpm: int, expected: str) -> None:
        assert engine.heart_rate_category(bpm) == expected

    def test_heart_rate_level_unknown_without_reading(self) -> None:
        assert engine.heart_rate_level(None) == "Unknown"
        assert engine.heart_rate_level(0) == "Unknown"
        assert engine.heart_rate_level(130) == "High"

    def test_bmi_rounds_to_one_decimal(self) -> None:
        assert engine.calculate_bmi(70, 175) == 22.9
        assert engine.calculate_bmi(50, 180) == 15.4

    @pytest.mark.parametrize("weight, height", [(70, 1e-200), (1000, 1e-10)])
    def test_degenerate_height_is_rejected(self, weight: float, height: float) -> None:
        with pytest.raises(ValueError, match="Invalid height for BMI calculation"):
            engine.calculate_bmi(weight, height)

    @pytest.mark.parametrize(
        "bmi, expected",
        [(18.4, "Underweight"), (18.5, "Normal"), (24.9, "Normal"), (25.0, "Overweight"), (30.0, "Obese")],
    )
    def test_bmi_category_boundaries(self, bmi: float, expected: str) -> None:
        assert engine.bmi_category(bmi) == expected


class TestBloodPressure:
    @pytest.mark.parametrize(
        "systolic, diastolic, expected",
        [
            (119, 79, "Normal"),
            (125, 79, "Elevated"),
            (135, 70, "Hypertension Stage 1"),
            (118, 85, "Hypertension Stage 1"),
            (145, 70, "Hypertension Stage 2"),
            (185, 100, "Hypertensive Crisis"),
            (135, 125, "Hypertensive Crisis"),
        ],
    )
    def test_most_severe_class_wins(self, systolic: int, diastolic: int, expected: str) -> None:
        assert engine.classify_blood_pressure(systolic, diastolic)["category"] == expected

    def test_classification_carries_risk_and_advice(self) -> None:
        result = engine.classify_blood_pressure(110, 70)
        assert result["risk_score"] == 0.1
        assert result["recommendation"].startswith("Maintain healthy lifestyle")

    def test_resting_heart_rate_gives_base_pressure(self) -> None:
        result = engine.estimate_blood_pressure(70)
        assert (result["systolic"], result["diastolic"]) == (120, 80)
        assert result["pulse_pressure"] == 40
        assert result["mean_arterial_pressure"] == 93
        assert result["confidence"] == 0.95
        assert result["physiological_condition"] == "Normal Range"

    def test_baseline_estimate(self) -> None:
        result = engine.estimate_blood_pressure(72)
        assert (result["systolic"], result["diastolic"]) == (121, 80)
        assert result["mean_arterial_pressure"] == 94
        assert result["raw_calculations"] == {
            "hr_deviation": 2,
            "systolic_adjustment": 0.8,
            "diastolic_adjustment": 0.4,
        }

    def test_mild_bradycardia_rounds_half_up(self) -> None:
        result = engine.estimate_blood_pressure(55)
        assert (result["systolic"], result["diastolic"]) == (110, 73)
        assert result["physiological_condition"] == "Mild Bradycardia"
        assert result["confidence"] == 0.85
        assert result["raw_calculations"]["diastolic_adjustment"] == -7.5

    def test_mild_tachycardia(self) -> None:
        result = engine.estimate_blood_pressure(110)
        assert (result["systolic"], result["diastolic"]) == (140, 88)
        assert result["mean_arterial_pressure"] == 105

    def test_low_input_is_clamped_to_40(self) -> None:
        result = engine.estimate_blood_pressure(30)
        assert (result["systolic"], result["diastolic"]) == (95, 65)
        assert result["physiological_condition"] == "Severe Bradycardia"
        assert result["raw_calculations"]["hr_deviation"] == -30
        assert result["calculation_steps"][0] == "Step 1: Heart rate validation - Input: 30 BPM, Clamped: 40 BPM"

    def test_high_input_is_clamped_to_180(self) -> None:
        result = engine.estimate_blood_pressure(200)
        assert (result["systolic"], result["diastolic"]) == (172, 106)
        assert result["physiological_condition"] == "Severe Tachycardia"
        assert result["confidence"] == 0.60

    def test_steps_are_numbered_in_order(self) -> None:
        steps = engine.estimate_blood_pressure(85)["calculation_steps"]
        assert len(steps) == 9
        assert steps[-1] == "Step 8: Confidence assessment - 0.95 based on HR range"


class TestHeartRateStatistics:
    def test_constant_rate_has_zero_hrv(self) -> None:
        assert engine.calculate_hrv_rmssd([60, 60]) == 0.0

    def test_hrv_from_rr_intervals(self) -> None:
        assert engine.calculate_hrv_rmssd([60, 62]) == 32.26

    def test_hrv_is_capped(self) -> None:
        assert engine.calculate_hrv_rmssd([60, 75]) == 150.0

    def test_hrv_needs_two_valid_readings(self) -> None:
        assert engine.calculate_hrv_rmssd([72]) is None
        assert engine.calculate_hrv_rmssd([30, 60, 250]) is None

    def test_resting_rate_averages_lowest_fifth(self) -> None:
        assert engine.resting_heart_rate([70, 60, 80, 90, 65, 110, 35]) == 60.0
        assert engine.resting_heart_rate(list(range(61, 71))) == 61.5

    def test_resting_rate_without_candidates(self) -> None:
        assert engine.resting_heart_rate([120, 130]) is None


class TestStress:
    def test_no_readings_is_low(self) -> None:
        result = engine.calculate_stress([])
        assert result["stress_percentage"] == 0
        assert result["stress_category"] == "Low"
        assert result["current_bpm"] is None

    def test_present_heart_rate_never_reads_zero(self) -> None:
        assert engine.calculate_stress([60])["stress_percentage"] == 5
        assert engine.calculate_stress([65])["stress_percentage"] == 10

    def test_moderate_stress(self) -> None:
        result = engine.calculate_stress([90, 90])
        assert result["stress_percentage"] == 43
        assert result["stress_category"] == "Moderate"

    def test_high_stress_with_blood_pressure(self) -> None:
        result = engine.calculate_stress([125, 95, 85], systolic=142, diastolic=85)
        assert result["base_stress_score"] == 96
        assert result["stress_category"] == "High"
        assert result["current_bpm"] == 125
        assert result["average_bpm"] == 101.7


class TestRiskAssessment:
    def test_empty_day_raises(self) -> None:
        with pytest.raises(ValueError):
            engine.assess_risk([])

    def test_narrow_range_with_low_hrv(self) -> None:
        result = engine.assess_risk([72, 74, 76, 78])
        assert result["avg_bpm"] == 75.0
        assert (result["min_bpm"], result["max_bpm"]) == (72, 78)
        assert result["risk_score"] == 12
        assert result["risk_level"] == "Low"
        assert result["recommendations"] == ["Stress management", "Stress reduction", "Keep up the good work"]

    def test_average_bands_are_cumulative(self) -> None:
        result = engine.assess_risk([100, 110, 120])
        assert result["factors"] == [
            "Elevated HR (≥100 bpm)",
            "Moderately elevated HR (90–99 bpm)",
            "Slightly elevated HR (85–89 bpm)",
        ]
        assert result["risk_score"] == 40
        assert result["risk_level"] == "High"
        assert result["recommendations"] == [
            "Cardio evaluation", "Monitor HR trends", "Maintain exercise", "Follow up with provider",
        ]

    def test_flat_high_day_scores_every_matching_rule(self) -> None:
        result = engine.assess_risk([100, 100, 100])
        assert result["risk_score"] == 56
        assert result["risk_level"] == "High"

    def test_low_average_scores_both_low_bands(self) -> None:
        result = engine.assess_risk([45, 45, 45])
        assert result["factors"][:2] == ["Very low HR (≤50 bpm)", "Low HR (51–60 bpm)"]
        assert result["risk_score"] == 34
        assert result["risk_level"] == "Moderate"

    def test_repeated_recommendations_are_kept(self) -> None:
        result = engine.assess_risk([80, 80, 80])
        assert len(result["factors"]) == 2
        assert result["risk_score"] == 16
        assert result["recommendations"] == ["Stress management", "Stress management", "Keep up the good work"]

    def test_default_recommendations_when_nothing_flags(self) -> None:
        result = engine.assess_risk([70, 75, 82])
        assert result["risk_score"] == 0
        assert result["factors"] == []
        assert result["recommendations"] == ["Maintain healthy lifestyle", "Monitor vitals", "Keep up the good work"]

    @pytest.mark.parametrize("score, level", [(0, "Low"), (20, "Moderate"), (40, "High"), (60, "Very High")])
    def test_risk_levels(self, score: int, level: str) -> None:
        assert engine.risk_level(score) == level
