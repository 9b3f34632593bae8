"""Finalizing a plan and the Google Calendar client behind it."""

from datetime import datetime

import httpx
import pytest

from trip_planner_api.app.core.config import settings
from trip_planner_api.app.core.errors import CalendarIntegrationError, EntityNotFoundError
from trip_planner_api.app.models.destination import Destination, DestinationName
from trip_planner_api.app.models.plan import Place, Plan, PlanVehicle
from trip_planner_api.app.schemas.plan import PlanCreate
from trip_planner_api.app.services.audit_service import AuditService
from trip_planner_api.app.services.calendar_service import GoogleCalendarService
from trip_planner_api.app.services.plan_service import PlanService


def make_plan() -> Plan:
    plan = Plan.of(
        Destination(id=5, destination_name=DestinationName.JEJU),
        datetime(2024, 6, 1, 9),
        datetime(2024, 6, 3, 18),
        PlanVehicle.OWN_CAR,
    )
    plan.id = 42
    plan.places = [
        Place(id=1, plan_id=42, name="Seongsan", started_at=datetime(2024, 6, 1, 10), ended_at=datetime(2024, 6, 1, 12)),
        Place(id=2, plan_id=42, name="Market"),
    ]
    return plan


class FakePost:
    def __init__(self, status_code=200, payload=None, error=None, text=None):
        self.status_code = status_code
        self.payload = payload if payload is not None else {"id": "evt-1"}
        self.error = error
        self.text = text
        self.calls = []

    def __call__(self, url, headers=None, json=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        if self.error is not None:
            raise self.error
        request = httpx.Request("POST", url)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text, request=request)
        return httpx.Response(self.status_code, json=self.payload, request=request)


@pytest.fixture
def calendar_configured(monkeypatch):
    monkeypatch.setattr(settings, "google_calendar_token", "token-123")
    monkeypatch.setattr(settings, "google_calendar_id", "primary")
    monkeypatch.setattr(settings, "calendar_time_zone", "Asia/Seoul")


def test_build_event_lists_places():
    event = GoogleCalendarService.build_event(make_plan())

    assert event["summary"] == "Jeju trip"
    assert event["start"] == {"dateTime": "2024-06-01T09:00:00", "timeZone": settings.calendar_time_zone}
    assert event["end"]["dateTime"] == "2024-06-03T18:00:00"
    assert "- Seongsan: 2024-06-01 10:00 ~ 2024-06-01 12:00" in event["description"]
    assert "- Market" in event["description"]


def test_create_event_requires_token():
    with pytest.raises(CalendarIntegrationError):
        GoogleCalendarService.create_event(make_plan())


def test_create_event_posts_with_bearer_token(calendar_configured, monkeypatch):
    fake = FakePost()
    monkeypatch.setattr("trip_planner_api.app.services.calendar_service.httpx.post", fake)

    event_id = GoogleCalendarService.create_event(make_plan())

    assert event_id == "evt-1"
    call = fake.calls[0]
    assert call["url"].endswith("/calendars/primary/events")
    assert call["headers"]["Authorization"] == "Bearer token-123"
    assert call["json"]["summary"] == "Jeju trip"


def test_create_event_wraps_http_errors(calendar_configured, monkeypatch):
    monkeypatch.setattr(
        "trip_planner_api.app.services.calendar_service.httpx.post", FakePost(status_code=403, payload={})
    )

    with pytest.raises(CalendarIntegrationError) as excinfo:
        GoogleCalendarService.create_event(make_plan())

    assert "403" in excinfo.value.message


@pytest.mark.parametrize(
    "fake",
    [
        FakePost(text="<html>proxy</html>"),
        FakePost(payload=["not", "an", "event"]),
    ],
)
def test_create_event_rejects_unreadable_body(calendar_configured, monkeypatch, fake):
    monkeypatch.setattr("trip_planner_api.app.services.calendar_service.httpx.post", fake)

    with pytest.raises(CalendarIntegrationError) as excinfo:
        GoogleCalendarService.create_event(make_plan())

    assert excinfo.value.message


def test_create_event_requires_event_id_in_response(calendar_configured, monkeypatch):
    monkeypatch.setattr("trip_planner_api.app.services.calendar_service.httpx.post", FakePost(payload={}))

    with pytest.raises(CalendarIntegrationError) as excinfo:
        GoogleCalendarService.create_event(make_plan())

    assert "event ID" in excinfo.value.message


async def _create_plan(member):
    return await PlanService.create_plan(
        PlanCreate(
            destination_id=5,
            started_at=datetime(2024, 6, 1, 9),
            ended_at=datetime(2024, 6, 3, 18),
            vehicle=PlanVehicle.OWN_CAR,
        ),
        member,
    )


@pytest.mark.asyncio
async def test_finalize_reports_calendar_event(member, calendar_configured, monkeypatch):
    monkeypatch.setattr("trip_planner_api.app.services.calendar_service.httpx.post", FakePost())
    info = await _create_plan(member)

    result = await PlanService.finalize_plan(info.id, member.id)

    assert result.finalized is True
    assert result.calendar_event_created is True
    assert result.calendar_event_id == "evt-1"
    assert result.warning is None


@pytest.mark.asyncio
async def test_finalize_succeeds_when_calendar_fails(member, calendar_configured, monkeypatch):
    monkeypatch.setattr(
        "trip_planner_api.app.services.calendar_service.httpx.post",
        FakePost(error=httpx.ConnectError("connection refused")),
    )
    info = await _create_plan(member)

    result = await PlanService.finalize_plan(info.id, member.id)

    assert result.finalized is True
    assert result.calendar_event_created is False
    assert "connection refused" in result.warning

    logs = await AuditService.list_logs(member.id, object_type="plan")
    assert logs[0]["action"] == "finalize"
    assert logs[0]["details"]["warning"] == result.warning


@pytest.mark.asyncio
@pytest.mark.parametrize("fake", [FakePost(text="<html>proxy</html>"), FakePost(payload={})])
async def test_finalize_reports_bad_calendar_response_as_warning(member, calendar_configured, monkeypatch, fake):
    monkeypatch.setattr("trip_planner_api.app.services.calendar_service.httpx.post", fake)
    info = await _create_plan(member)

    result = await PlanService.finalize_plan(info.id, member.id)

    assert result.finalized is True
    assert result.calendar_event_created is False
    assert result.calendar_event_id is None
    assert result.warning


@pytest.mark.asyncio
async def test_finalize_requires_membership(member, other_member):
    info = await _create_plan(member)

    with pytest.raises(EntityNotFoundError):
        await PlanService.finalize_plan(info.id, other_member.id)
