from fastapi.testclient import TestClient

from corecare.services import breathing
from tests.conftest import API


class TestBreathingSession:
    def test_phases_alternate(self) -> None:
        plan = breathing.build_session(total_seconds=12, phase_seconds=3)
        assert [p.instruction for p in plan.phases] == [
            breathing.INHALE, breathing.EXHALE, breathing.INHALE, breathing.EXHALE,
        ]
        assert [p.start_second for p in plan.phases] == [0, 3, 6, 9]
        assert plan.cycles == 2
        assert plan.state is None

    def test_default_session_is_five_minutes(self) -> None:
        plan = breathing.build_session()
        assert plan.total_seconds == 300
        assert plan.cycles == 50
        assert len(plan.phases) == 100

    def test_last_phase_is_truncated(self) -> None:
        plan = breathing.build_session(total_seconds=10, phase_seconds=3)
        assert plan.phases[-1].duration_seconds == 1

    def test_state_mid_session(self) -> None:
        state = breathing.session_state(4, total_seconds=300, phase_seconds=3)
        assert state.instruction == breathing.EXHALE
        assert state.remaining_seconds == 296
        assert state.completed is False
        assert state.message is None

    def test_progress_percent(self) -> None:
        assert breathing.session_state(150, total_seconds=300).progress_percent == 50

    def test_completed_session(self) -> None:
        state = breathing.session_state(300, total_seconds=300)
        assert state.completed is True
        assert state.progress_percent == 100
        assert state.message == breathing.COMPLETED_MESSAGE

    def test_stopped_early(self) -> None:
        state = breathing.session_state(60, total_seconds=300, stopped=True)
        assert state.completed is False
        assert state.message == breathing.ENDED_EARLY_MESSAGE


class TestBreathingEndpoints:
    def test_session_plan_with_state(self, client: TestClient) -> None:
        response = client.get(f"{API}/breathing/session", params={"elapsed": 7})
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["state"]["instruction"] == breathing.INHALE
        assert len(data["phases"]) == 100

    def test_end_session_early(self, client: TestClient) -> None:
        response = client.post(f"{API}/breathing/session/end", params={"elapsed": 30})
        assert response.status_code == 200
        assert response.json()["message"] == breathing.ENDED_EARLY_MESSAGE

    def test_end_rejects_elapsed_past_duration(self, client: TestClient) -> None:
        response = client.post(f"{API}/breathing/session/end", params={"elapsed": 90, "duration": 60})
        assert response.status_code == 400

    def test_negative_elapsed_is_rejected(self, client: TestClient) -> None:
        response = client.get(f"{API}/breathing/session", params={"elapsed": -1})
        assert response.status_code == 400
        assert response.json()["status"] == "error"
