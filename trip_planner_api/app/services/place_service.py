"""
Business logic for the places visited during a plan.

A place's visit window is optional.  When set it must be a proper
interval (start before end) inside the plan window; the plan service
clears windows that stop fitting after the plan window moves.
"""

import logging
from datetime import datetime
from typing import List, Optional

from ..core.db import transaction
from ..core.errors import (
    PLACE_NOT_FOUND,
    PLACE_OUTSIDE_PLAN,
    PLACE_WINDOW_INCOMPLETE,
    EntityNotFoundError,
    InvalidArgumentError,
)
from ..models.member import Member
from ..models.plan import Place, Plan
from ..repositories.plan_repository import PlanRepository
from ..schemas.place import PlaceCreate, PlaceRead
from .audit_service import AuditService
from .plan_access import require_plan_member
from .plan_service import find_by_plan_id, validate_start_end_time


logger = logging.getLogger(__name__)


def validate_visit_time(plan: Plan, started_at: Optional[datetime], ended_at: Optional[datetime]) -> None:
    if started_at is None and ended_at is None:
        return
    if started_at is None or ended_at is None:
        raise InvalidArgumentError(PLACE_WINDOW_INCOMPLETE)
    validate_start_end_time(started_at, ended_at)
    if started_at < plan.started_at or ended_at > plan.ended_at:
        raise InvalidArgumentError(PLACE_OUTSIDE_PLAN)


def find_place(plan: Plan, place_id: int) -> Place:
    for place in plan.places:
        if place.id == place_id:
            return place
    raise EntityNotFoundError(PLACE_NOT_FOUND)


class PlaceService:

    @classmethod
    async def add_place(cls, plan_id: int, data: PlaceCreate, member: Member) -> PlaceRead:
        with transaction() as conn:
            plans = PlanRepository(conn)
            plan = find_by_plan_id(plans, plan_id)
            require_plan_member(plan, member)
            validate_visit_time(plan, data.started_at, data.ended_at)

            place = plans.places.save(
                Place(
                    id=None,
                    plan_id=plan.id,
                    name=data.name,
                    address=data.address,
                    category=data.category,
                    started_at=data.started_at,
                    ended_at=data.ended_at,
                )
            )
        logger.info("Member %s added place %s to plan %s", member.id, place.id, plan_id)
        await AuditService.log(
            member_id=member.id,
            action="create",
            object_type="place",
            object_id=place.id,
            details={"plan_id": plan_id, "name": place.name},
        )
        return PlaceRead.of(place)

    @classmethod
    async def list_places(cls, plan_id: int, member: Member) -> List[PlaceRead]:
        with transaction() as conn:
            plan = find_by_plan_id(PlanRepository(conn), plan_id)
            require_plan_member(plan, member)
            return [PlaceRead.of(place) for place in plan.places]

    @classmethod
    async def update_visit_time(
        cls,
        plan_id: int,
        place_id: int,
        started_at: datetime,
        ended_at: datetime,
        member: Member,
    ) -> PlaceRead:
        with transaction() as conn:
            plans = PlanRepository(conn)
            plan = find_by_plan_id(plans, plan_id)
            require_plan_member(plan, member)
            place = find_place(plan, place_id)
            validate_visit_time(plan, started_at, ended_at)
            place.set_visit_times(started_at, ended_at)
            plans.places.save(place)
        await AuditService.log(
            member_id=member.id,
            action="update",
            object_type="place",
            object_id=place_id,
            details={"started_at": started_at, "ended_at": ended_at},
        )
        return PlaceRead.of(place)

    @classmethod
    async def reset_visit_time(cls, plan_id: int, place_id: int, member: Member) -> PlaceRead:
        with transaction() as conn:
            plans = PlanRepository(conn)
            plan = find_by_plan_id(plans, plan_id)
            require_plan_member(plan, member)
            place = find_place(plan, place_id)
            place.reset_visit_times()
            plans.places.save(place)
        await AuditService.log(member_id=member.id, action="reset", object_type="place", object_id=place_id)
        return PlaceRead.of(place)

    @classmethod
    async def delete_place(cls, plan_id: int, place_id: int, member: Member) -> None:
        with transaction() as conn:
            plans = PlanRepository(conn)
            plan = find_by_plan_id(plans, plan_id)
            require_plan_member(plan, member)
            find_place(plan, place_id)
            plans.places.delete(place_id)
        logger.info("Member %s removed place %s from plan %s", member.id, place_id, plan_id)
        await AuditService.log(member_id=member.id, action="delete", object_type="place", object_id=place_id)
