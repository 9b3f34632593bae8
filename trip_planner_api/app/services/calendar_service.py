"""
Google Calendar integration used when a plan is finalized.

``GoogleCalendarService.create_event`` turns a plan into a single
calendar event spanning the trip, with the places listed in the
description.  The access token, calendar ID and time zone come from
``settings``.
"""

import logging
from typing import List

import httpx

from ..core.config import settings
from ..core.errors import CalendarIntegrationError
from ..models.plan import Plan


logger = logging.getLogger(__name__)


class GoogleCalendarService:

    @classmethod
    def build_event(cls, plan: Plan) -> dict:
        destination = plan.destination.destination_name.value
        lines: List[str] = [f"Vehicle: {plan.vehicle.value}"]
        for place in plan.places:
            if place.has_visit_time:
                lines.append(
                    f"- {place.name}: {place.started_at:%Y-%m-%d %H:%M} ~ {place.ended_at:%Y-%m-%d %H:%M}"
                )
            else:
                lines.append(f"- {place.name}")
        return {
            "summary": f"{destination.title()} trip",
            "location": destination.title(),
            "description": "\n".join(lines),
            "start": {"dateTime": plan.started_at.isoformat(), "timeZone": settings.calendar_time_zone},
            "end": {"dateTime": plan.ended_at.isoformat(), "timeZone": settings.calendar_time_zone},
        }

    @classmethod
    def create_event(cls, plan: Plan) -> str:
        """Create the calendar event for ``plan`` and return its ID.

        Raises ``CalendarIntegrationError`` when the integration is not
        configured, the request fails or the API rejects it.
        """
        if not settings.google_calendar_token:
            raise CalendarIntegrationError("Google Calendar access token is not configured")

        url = f"{settings.google_calendar_api_base}/calendars/{settings.google_calendar_id}/events"
        headers = {
            "Authorization": f"Bearer {settings.google_calendar_token}",
            "Content-Type": "application/json",
        }
        try:
            response = httpx.post(
                url,
                headers=headers,
                json=cls.build_event(plan),
                timeout=settings.calendar_timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise CalendarIntegrationError(
                f"Google Calendar rejected the event: HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise CalendarIntegrationError(f"Google Calendar request failed: {e}") from e
        except ValueError as e:
            raise CalendarIntegrationError("Google Calendar returned an unreadable response") from e

        event_id = payload.get("id") if isinstance(payload, dict) else None
        if not event_id:
            raise CalendarIntegrationError("Google Calendar response did not include an event ID")
        logger.info("Created calendar event %s for plan %s", event_id, plan.id)
        return event_id
