"""Shared fixtures: an in-memory SQLite database and a TestClient bound to the app."""
import os

# Must be set before corecare.core.config is imported
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
os.environ["ENVIRONMENT"] = "development"
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("REQUIRE_API_KEY", "false")
os.environ.setdefault("METRICS_ENABLED", "false")

from collections.abc import Iterator
from datetime import datetime, time, timedelta

import pytest
from fastapi.testclient import TestClient

from corecare import crud, models  # noqa: F401
from corecare.core.database_utils import get_db_session
from corecare.crud.vitals import VitalsCRUD
from corecare.db.base import Base
from corecare.db.session import engine
from corecare.main import app
from corecare.utils.timezone import today_local

API = "/api/v1"
PASSWORD = "Passw0rd!"


@pytest.fixture(autouse=True)
def database() -> Iterator[None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def user_id() -> int:
    with get_db_session() as db:
        user = crud.user.create(db, email="alice@corecare.app", phone=None, password=PASSWORD)
        return user.id


def at_today(hour: int, minute: int = 0) -> datetime:
    return datetime.combine(today_local(), time(hour, minute))


def days_ago(days: int, hour: int = 9) -> datetime:
    return datetime.combine(today_local() - timedelta(days=days), time(hour))


def seed_heart_rates(user_id: int, readings) -> None:
    """readings: iterable of (bpm, recorded_at)"""
    with get_db_session() as db:
        for bpm, recorded_at in readings:
            VitalsCRUD.create_heart_rate(db, user_id, bpm, recorded_at=recorded_at)


def seed_blood_pressure(user_id: int, systolic: int, diastolic: int, recorded_at: datetime) -> None:
    with get_db_session() as db:
        VitalsCRUD.create_blood_pressure(db, user_id, systolic, diastolic, recorded_at=recorded_at)
