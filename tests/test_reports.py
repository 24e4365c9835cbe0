from datetime import timedelta

from fastapi.testclient import TestClient

from corecare.utils.timezone import today_local
from tests.conftest import API, at_today, days_ago, seed_blood_pressure, seed_heart_rates


def seed_two_days(user_id: int) -> None:
    seed_heart_rates(user_id, [
        (60, days_ago(1)),
        (70, at_today(1)),
        (80, at_today(2)),
        (90, at_today(3)),
        (250, at_today(4)),
    ])
    seed_blood_pressure(user_id, 120, 80, at_today(2))
    seed_blood_pressure(user_id, 300, 80, at_today(3))


class TestHealthReports:
    def test_daily_report(self, client: TestClient, user_id: int) -> None:
        seed_two_days(user_id)
        response = client.get(f"{API}/reports/daily", params={"user_id": user_id})
        assert response.status_code == 200
        report = response.json()["data"]

        summary = report["summary"]
        assert summary["period"] == "daily"
        assert summary["avg_bpm"] == 80.0
        assert (summary["min_bpm"], summary["max_bpm"]) == (70, 90)
        assert summary["measurement_count"] == 3
        assert (summary["avg_bp_systolic"], summary["avg_bp_diastolic"]) == (120.0, 80.0)
        assert summary["resting_heart_rate"] == 70.0
        assert summary["avg_hrv"] is not None

        assert len(report["daily_readings"]) == 1
        assert report["daily_readings"][0]["date"] == today_local().isoformat()
        assert report["daily_readings"][0]["avg_systolic"] == 120.0

    def test_weekly_report_groups_by_day(self, client: TestClient, user_id: int) -> None:
        seed_two_days(user_id)
        report = client.get(f"{API}/reports/weekly", params={"user_id": user_id}).json()["data"]
        assert report["summary"]["measurement_count"] == 4
        assert report["summary"]["avg_bpm"] == 75.0

        today = today_local()
        assert [d["date"] for d in report["daily_readings"]] == [
            (today - timedelta(days=1)).isoformat(),
            today.isoformat(),
        ]
        assert report["period_info"] == {
            "start_date": (today - timedelta(days=6)).isoformat(),
            "end_date": today.isoformat(),
            "days_covered": 7,
        }

    def test_monthly_report_excludes_older_readings(self, client: TestClient, user_id: int) -> None:
        seed_heart_rates(user_id, [(70, days_ago(29)), (90, days_ago(30))])
        report = client.get(f"{API}/reports/monthly", params={"user_id": user_id}).json()["data"]
        assert report["summary"]["measurement_count"] == 1
        assert report["period_info"]["days_covered"] == 30

    def test_blood_pressure_averages_are_whole_numbers(self, client: TestClient, user_id: int) -> None:
        seed_heart_rates(user_id, [(72, at_today(1))])
        seed_blood_pressure(user_id, 120, 80, at_today(1))
        seed_blood_pressure(user_id, 121, 81, at_today(2))
        report = client.get(f"{API}/reports/daily", params={"user_id": user_id}).json()["data"]
        assert (report["summary"]["avg_bp_systolic"], report["summary"]["avg_bp_diastolic"]) == (121, 81)
        assert isinstance(report["summary"]["avg_bp_systolic"], int)
        day = report["daily_readings"][0]
        assert (day["avg_systolic"], day["avg_diastolic"]) == (121, 81)

    def test_empty_report(self, client: TestClient, user_id: int) -> None:
        summary = client.get(f"{API}/reports/daily", params={"user_id": user_id}).json()["data"]["summary"]
        assert summary["avg_bpm"] is None
        assert summary["measurement_count"] == 0
        assert summary["avg_bp_systolic"] == 0

    def test_unknown_period(self, client: TestClient, user_id: int) -> None:
        response = client.get(f"{API}/reports/yearly", params={"user_id": user_id})
        assert response.status_code == 400
        assert response.json()["message"].startswith("Invalid value for period")


class TestStress:
    def test_stress_with_blood_pressure(self, client: TestClient, user_id: int) -> None:
        seed_heart_rates(user_id, [(85, at_today(1)), (95, at_today(2)), (125, at_today(3))])
        seed_blood_pressure(user_id, 142, 85, at_today(3))
        data = client.get(f"{API}/stress", params={"user_id": user_id}).json()["data"]
        assert data["stress_percentage"] == 96
        assert data["stress_category"] == "High"
        assert data["bpm"] == 125
        assert data["category"] == "High"
        assert data["bpm_readings_count"] == 3
        assert data["bp_available"] is True

    def test_stress_without_data(self, client: TestClient, user_id: int) -> None:
        data = client.get(f"{API}/stress", params={"user_id": user_id}).json()["data"]
        assert data["stress_percentage"] == 0
        assert data["category"] == "Unknown"
        assert data["bpm"] is None
        assert data["bp_available"] is False

    def test_invalid_user_id(self, client: TestClient) -> None:
        response = client.get(f"{API}/stress", params={"user_id": 0})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid user_id"


class TestRiskAssessment:
    def test_todays_risk(self, client: TestClient, user_id: int) -> None:
        seed_heart_rates(user_id, [(72, at_today(1)), (74, at_today(2)), (76, at_today(3)), (78, at_today(4))])
        response = client.get(f"{API}/risk-assessment", params={"user_id": user_id})
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["date"] == today_local().isoformat()
        assert data["risk_score"] == 12
        assert data["risk_level"] == "Low"
        assert data["avg_bpm"] == 75.0

    def test_only_older_readings(self, client: TestClient, user_id: int) -> None:
        seed_heart_rates(user_id, [(72, days_ago(1))])
        response = client.get(f"{API}/risk-assessment", params={"user_id": user_id})
        assert response.status_code == 404
        assert response.json()["message"] == "No readings for today"

    def test_missing_user_id(self, client: TestClient) -> None:
        response = client.get(f"{API}/risk-assessment")
        assert response.status_code == 400
        assert response.json()["message"] == "Valid user_id required"
