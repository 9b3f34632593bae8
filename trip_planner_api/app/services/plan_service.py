"""
Business logic for plans.

Every operation runs in one unit of work (``core.db.transaction``) and
follows the same shape: look the plan up (soft-deleted plans count as
missing), check that the caller is one of its members, validate, then
mutate through ``PlanService._update`` so the place-window reset pass runs
after every change to the plan window.

Errors are raised where they are detected and propagate to the HTTP
layer.  The one exception is the calendar export in ``finalize_plan``:
its failure is logged and reported in the result instead of failing
the request.
"""

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Callable, List, Optional

from ..core.db import transaction
from ..core.errors import (
    DESTINATION_NOT_FOUND,
    PLAN_NOT_FOUND,
    PLAN_START_AFTER_END,
    START_NOT_BEFORE_END,
    CalendarIntegrationError,
    EntityNotFoundError,
    InvalidArgumentError,
)
from ..core.time_utils import to_local_naive
from ..models.destination import Destination, DestinationName
from ..models.member import Member
from ..models.plan import Plan, PlanVehicle
from ..repositories.destination_repository import DestinationRepository
from ..repositories.plan_repository import PlanRepository
from ..schemas.plan import DestinationRead, FinalizeResult, PlanCreate, PlanDetail, PlanInfo, PlanSummary
from .audit_service import AuditService
from .calendar_service import GoogleCalendarService
from .member_service import find_member
from .plan_access import require_plan_member


logger = logging.getLogger(__name__)


def find_by_plan_id(plans: PlanRepository, plan_id: int) -> Plan:
    plan = plans.find_by_id_and_deleted_at_is_null(plan_id)
    if plan is None:
        raise EntityNotFoundError(PLAN_NOT_FOUND)
    return plan


def find_destination(conn: sqlite3.Connection, destination_id: int) -> Destination:
    destination = DestinationRepository(conn).find_by_id(destination_id)
    if destination is None:
        raise EntityNotFoundError(DESTINATION_NOT_FOUND)
    return destination


def validate_plan_dates(started_at: datetime, ended_at: datetime) -> None:
    """Whole-plan check: compares calendar dates only, time of day is ignored."""
    if started_at.date() > ended_at.date():
        raise InvalidArgumentError(PLAN_START_AFTER_END)


def validate_start_end_time(started_at: datetime, ended_at: datetime) -> None:
    """Strict check used when one end of the window moves."""
    if started_at >= ended_at:
        raise InvalidArgumentError(START_NOT_BEFORE_END)


def _member_plans(plans: List[Plan], member_id: str) -> List[PlanSummary]:
    return PlanSummary.list_of([plan for plan in plans if plan.has_member(member_id)])


class PlanService:
    """Service for plans and their lifecycle."""

    @classmethod
    async def get_all_destinations(cls) -> List[DestinationRead]:
        with transaction() as conn:
            return [DestinationRead.of(d) for d in DestinationRepository(conn).find_all()]

    @classmethod
    async def create_plan(cls, data: PlanCreate, member: Member) -> PlanInfo:
        with transaction() as conn:
            destination = find_destination(conn, data.destination_id)
            validate_plan_dates(data.started_at, data.ended_at)

            plan = Plan.of(destination, data.started_at, data.ended_at, data.vehicle)
            plan.add_plan_member(member)
            PlanRepository(conn).save(plan)
        logger.info("Member %s created plan %s", member.id, plan.id)
        await AuditService.log(
            member_id=member.id,
            action="create",
            object_type="plan",
            object_id=plan.id,
            details={"destination_id": destination.id},
        )
        return PlanInfo.of(plan)

    @classmethod
    async def get_plan(cls, plan_id: int, member: Member) -> PlanDetail:
        with transaction() as conn:
            plan = find_by_plan_id(PlanRepository(conn), plan_id)
            require_plan_member(plan, member)
            return PlanDetail.of(plan)

    # -- lists ---------------------------------------------------------
    # Candidates come from the store; membership is filtered here.

    @classmethod
    async def list_all_plans(cls, member_id: str) -> List[PlanSummary]:
        with transaction() as conn:
            return _member_plans(PlanRepository(conn).find_all(), member_id)

    @classmethod
    async def list_plans_by_start_date(cls, member_id: str) -> List[PlanSummary]:
        with transaction() as conn:
            return _member_plans(PlanRepository(conn).find_all_order_by_started_at_desc(), member_id)

    @classmethod
    async def list_plans_by_destination(cls, member_id: str, destination_name: DestinationName) -> List[PlanSummary]:
        with transaction() as conn:
            plans = PlanRepository(conn).find_by_destination_name_order_by_started_at_desc(destination_name)
            return _member_plans(plans, member_id)

    @classmethod
    async def list_plans_by_destination_and_date_range(
        cls,
        member_id: str,
        destination_name: DestinationName,
        start: datetime,
        end: datetime,
    ) -> List[PlanSummary]:
        with transaction() as conn:
            plans = PlanRepository(conn).find_by_destination_name_and_started_at_between(
                destination_name, to_local_naive(start), to_local_naive(end)
            )
            return _member_plans(plans, member_id)

    # -- writes --------------------------------------------------------

    @classmethod
    async def delete_plan(cls, plan_id: int, member: Member) -> None:
        with transaction() as conn:
            plans = PlanRepository(conn)
            plan = find_by_plan_id(plans, plan_id)
            require_plan_member(plan, member)
            plan.mark_as_deleted(to_local_naive(datetime.now(timezone.utc)))
            plans.save(plan)
        logger.info("Member %s deleted plan %s", member.id, plan_id)
        await AuditService.log(member_id=member.id, action="delete", object_type="plan", object_id=plan_id)

    @classmethod
    async def update_plan(cls, plan_id: int, data: PlanCreate, member_id: str) -> PlanInfo:
        def change(conn: sqlite3.Connection, plan: Plan) -> dict:
            destination = find_destination(conn, data.destination_id)
            validate_plan_dates(data.started_at, data.ended_at)
            return {
                "destination": destination,
                "started_at": data.started_at,
                "ended_at": data.ended_at,
                "vehicle": data.vehicle,
            }

        return await cls._update(plan_id, member_id, change)

    @classmethod
    async def update_destination(cls, plan_id: int, new_destination_id: int, member_id: str) -> PlanInfo:
        def change(conn: sqlite3.Connection, plan: Plan) -> dict:
            return {"destination": find_destination(conn, new_destination_id)}

        return await cls._update(plan_id, member_id, change)

    @classmethod
    async def update_start_time(cls, plan_id: int, new_start_time: datetime, member_id: str) -> PlanInfo:
        new_start_time = to_local_naive(new_start_time)

        def change(conn: sqlite3.Connection, plan: Plan) -> dict:
            validate_start_end_time(new_start_time, plan.ended_at)
            return {"started_at": new_start_time}

        return await cls._update(plan_id, member_id, change)

    @classmethod
    async def update_end_time(cls, plan_id: int, new_end_time: datetime, member_id: str) -> PlanInfo:
        new_end_time = to_local_naive(new_end_time)

        def change(conn: sqlite3.Connection, plan: Plan) -> dict:
            validate_start_end_time(plan.started_at, new_end_time)
            return {"ended_at": new_end_time}

        return await cls._update(plan_id, member_id, change)

    @classmethod
    async def update_vehicle(cls, plan_id: int, new_vehicle: PlanVehicle, member_id: str) -> PlanInfo:
        def change(conn: sqlite3.Connection, plan: Plan) -> dict:
            return {"vehicle": new_vehicle}

        return await cls._update(plan_id, member_id, change)

    @classmethod
    async def _update(
        cls,
        plan_id: int,
        member_id: str,
        change: Callable[[sqlite3.Connection, Plan], dict],
    ) -> PlanInfo:
        """Shared path for full and partial updates.

        ``change`` validates the request against the loaded plan and
        returns the fields to apply.  Places that fall outside a moved
        plan window are reset before the plan is saved.
        """
        with transaction() as conn:
            member = find_member(conn, member_id)
            plans = PlanRepository(conn)
            plan = find_by_plan_id(plans, plan_id)
            require_plan_member(plan, member)

            fields = change(conn, plan)
            if plan.update(**fields):
                reset = plan.reset_invalid_place_times()
                if reset:
                    logger.info(
                        "Reset visit times of places %s in plan %s",
                        [place.id for place in reset],
                        plan_id,
                    )
            plans.save(plan)
        await AuditService.log(
            member_id=member_id,
            action="update",
            object_type="plan",
            object_id=plan_id,
            details={name: getattr(value, "id", value) for name, value in fields.items()},
        )
        return PlanInfo.of(plan)

    @classmethod
    async def finalize_plan(cls, plan_id: int, member_id: str) -> FinalizeResult:
        """Confirm a plan and export it to the member's calendar.

        The calendar call happens after the database work is done.  If
        it fails the plan is still reported as finalized and the result
        carries the failure as ``warning``.
        """
        with transaction() as conn:
            member = find_member(conn, member_id)
            plan = find_by_plan_id(PlanRepository(conn), plan_id)
            require_plan_member(plan, member)

        event_id: Optional[str] = None
        warning: Optional[str] = None
        try:
            event_id = GoogleCalendarService.create_event(plan)
        except CalendarIntegrationError as e:
            logger.warning("Plan %s finalized without calendar event: %s", plan_id, e.message)
            warning = e.message

        await AuditService.log(
            member_id=member_id,
            action="finalize",
            object_type="plan",
            object_id=plan_id,
            details={"calendar_event_id": event_id, "warning": warning},
        )
        return FinalizeResult(
            plan_id=plan_id,
            calendar_event_created=event_id is not None,
            calendar_event_id=event_id,
            warning=warning,
        )
