from datetime import datetime, timedelta

from fastapi.testclient import TestClient

from corecare.reminders import service
from corecare.utils.timezone import now_local
from tests.conftest import API, seed_heart_rates

NOW = datetime(2025, 9, 29, 12, 0, 0)
SIX_HOURS = 6 * 60 * 60


def first(options):
    return options[0]


class TestNextReminderDelay:
    def test_no_measurement_fires_almost_immediately(self) -> None:
        assert service.seconds_until_next_reminder(None, NOW, SIX_HOURS, 10) == 10

    def test_remaining_part_of_interval(self) -> None:
        last = NOW - timedelta(hours=2)
        assert service.seconds_until_next_reminder(last, NOW, SIX_HOURS, 10) == 4 * 60 * 60

    def test_partial_seconds_round_up(self) -> None:
        last = NOW - timedelta(seconds=0.5)
        assert service.seconds_until_next_reminder(last, NOW, 100, 10) == 100

    def test_overdue_fires_almost_immediately(self) -> None:
        last = NOW - timedelta(hours=7)
        assert service.seconds_until_next_reminder(last, NOW, SIX_HOURS, 10) == 10

    def test_exactly_one_interval_ago_is_overdue(self) -> None:
        last = NOW - timedelta(seconds=SIX_HOURS)
        assert service.seconds_until_next_reminder(last, NOW, SIX_HOURS, 10) == 10

    def test_future_measurement_waits_full_interval(self) -> None:
        last = NOW + timedelta(minutes=5)
        assert service.seconds_until_next_reminder(last, NOW, SIX_HOURS, 10) == SIX_HOURS


class TestComputeReminder:
    def test_first_time_welcome(self) -> None:
        reminder = service.compute_heart_rate_reminder(1, None, now=NOW)
        assert reminder.first_time is True
        assert reminder.title == service.FIRST_TIME_TITLE
        assert reminder.body == service.FIRST_TIME_BODY
        assert reminder.fire_in_seconds == 10
        assert reminder.fire_at == NOW + timedelta(seconds=10)
        assert reminder.category == "HEART_RATE_REMINDER"

    def test_interval_reminder_uses_rotating_body(self) -> None:
        last = NOW - timedelta(hours=1)
        reminder = service.compute_heart_rate_reminder(1, last, now=NOW, choose=first)
        assert reminder.first_time is False
        assert reminder.overdue is False
        assert reminder.title == service.REMINDER_TITLE
        assert reminder.body == service.REMINDER_BODIES[0]
        assert reminder.fire_in_seconds == 5 * 60 * 60
        assert reminder.last_measurement_at == last

    def test_custom_interval(self) -> None:
        last = NOW - timedelta(minutes=30)
        reminder = service.compute_heart_rate_reminder(1, last, now=NOW, interval_seconds=3600)
        assert reminder.fire_in_seconds == 1800
        assert reminder.interval_seconds == 3600

    def test_overdue_flag(self) -> None:
        reminder = service.compute_heart_rate_reminder(1, NOW - timedelta(days=1), now=NOW)
        assert reminder.overdue is True
        assert reminder.fire_in_seconds == 10

    def test_actions(self) -> None:
        reminder = service.compute_heart_rate_reminder(1, None, now=NOW)
        identifiers = [a.identifier for a in reminder.actions]
        assert identifiers == ["MEASURE_NOW", "REMIND_LATER"]
        assert reminder.actions[1].delay_seconds == 3600

    def test_snooze_pushes_out_one_hour(self) -> None:
        reminder = service.snooze_heart_rate_reminder(1, now=NOW, choose=first)
        assert reminder.fire_in_seconds == 3600
        assert reminder.fire_at == NOW + timedelta(hours=1)
        assert reminder.body == service.REMINDER_BODIES[0]


class TestReminderEndpoints:
    def test_without_measurements(self, client: TestClient, user_id: int) -> None:
        response = client.get(f"{API}/reminders/heart-rate", params={"user_id": user_id})
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["first_time"] is True
        assert data["fire_in_seconds"] == 10

    def test_after_recent_measurement(self, client: TestClient, user_id: int) -> None:
        seed_heart_rates(user_id, [(72, now_local() - timedelta(hours=2))])
        data = client.get(f"{API}/reminders/heart-rate", params={"user_id": user_id}).json()["data"]
        assert data["first_time"] is False
        assert 4 * 60 * 60 - 60 <= data["fire_in_seconds"] <= 4 * 60 * 60

    def test_after_stale_measurement(self, client: TestClient, user_id: int) -> None:
        seed_heart_rates(user_id, [(72, now_local() - timedelta(hours=7))])
        data = client.get(f"{API}/reminders/heart-rate", params={"user_id": user_id}).json()["data"]
        assert data["overdue"] is True
        assert data["fire_in_seconds"] == 10

    def test_unknown_user(self, client: TestClient) -> None:
        response = client.get(f"{API}/reminders/heart-rate", params={"user_id": 999})
        assert response.status_code == 404
        assert response.json() == {"status": "error", "message": "User not found"}

    def test_snooze(self, client: TestClient, user_id: int) -> None:
        response = client.post(f"{API}/reminders/heart-rate/snooze", json={"user_id": user_id})
        assert response.status_code == 200
        assert response.json()["message"] == "Reminder snoozed"
        assert response.json()["data"]["fire_in_seconds"] == 3600
