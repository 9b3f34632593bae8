"""Shared fixtures: a fresh SQLite database per test plus a few members."""

import uuid
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from trip_planner_api.app.core.config import settings
from trip_planner_api.app.core.db import init_db, transaction
from trip_planner_api.app.core.security import create_access_token, hash_password
from trip_planner_api.app.main import app
from trip_planner_api.app.models.member import Member
from trip_planner_api.app.models.plan import Place
from trip_planner_api.app.repositories.member_repository import MemberRepository
from trip_planner_api.app.repositories.place_repository import PlaceRepository


PASSWORD = "correct-horse-battery"


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    """Point the app at a temporary database and leave the calendar unconfigured."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "trip_planner_test.db"))
    monkeypatch.setattr(settings, "google_calendar_token", "")
    init_db()
    yield


def make_member(login_id: str, name: str = "Traveller") -> Member:
    with transaction() as conn:
        return MemberRepository(conn).insert(
            Member(id=str(uuid.uuid4()), login_id=login_id, name=name, password=hash_password(PASSWORD))
        )


def add_place(plan_id: int, name: str, started_at: datetime = None, ended_at: datetime = None) -> Place:
    """Insert a place directly, bypassing the window checks of the place service."""
    with transaction() as conn:
        return PlaceRepository(conn).save(
            Place(id=None, plan_id=plan_id, name=name, started_at=started_at, ended_at=ended_at)
        )


def auth_headers(member: Member) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': member.login_id})}"}


@pytest.fixture
def member():
    return make_member("traveller01", "Kim Minji")


@pytest.fixture
def other_member():
    return make_member("stranger02", "Lee Jun")


@pytest.fixture
def client():
    return TestClient(app)
