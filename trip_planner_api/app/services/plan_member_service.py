"""
Business logic for plan memberships.

Members can invite other members by login ID and leave a plan.  A plan
always keeps at least one member, so the last one cannot leave; they
delete the plan instead.
"""

import logging
from typing import List

from ..core.db import transaction
from ..core.errors import (
    LAST_MEMBER_CANNOT_LEAVE,
    MEMBER_NOT_FOUND,
    ConflictError,
    EntityNotFoundError,
    InvalidArgumentError,
)
from ..models.member import Member
from ..repositories.member_repository import MemberRepository
from ..repositories.plan_repository import PlanRepository
from ..schemas.member import PlanMemberRead
from .audit_service import AuditService
from .plan_access import require_plan_member
from .plan_service import find_by_plan_id


logger = logging.getLogger(__name__)


class PlanMemberService:

    @classmethod
    async def list_members(cls, plan_id: int, member: Member) -> List[PlanMemberRead]:
        with transaction() as conn:
            plan = find_by_plan_id(PlanRepository(conn), plan_id)
            require_plan_member(plan, member)
            return [PlanMemberRead.of(pm) for pm in plan.plan_members]

    @classmethod
    async def invite_member(cls, plan_id: int, login_id: str, member: Member) -> PlanMemberRead:
        with transaction() as conn:
            plans = PlanRepository(conn)
            plan = find_by_plan_id(plans, plan_id)
            require_plan_member(plan, member)

            invitee = MemberRepository(conn).find_by_login_id(login_id)
            if invitee is None:
                raise EntityNotFoundError(MEMBER_NOT_FOUND)
            if plan.has_member(invitee.id):
                raise ConflictError(f"{login_id} is already a member of this plan")

            plan_member = plan.add_plan_member(invitee)
            plans.save(plan)
        logger.info("Member %s invited %s to plan %s", member.id, invitee.id, plan_id)
        await AuditService.log(
            member_id=member.id,
            action="invite",
            object_type="plan",
            object_id=plan_id,
            details={"invitee": invitee.id},
        )
        return PlanMemberRead.of(plan_member)

    @classmethod
    async def leave_plan(cls, plan_id: int, member: Member) -> None:
        with transaction() as conn:
            plans = PlanRepository(conn)
            plan = find_by_plan_id(plans, plan_id)
            require_plan_member(plan, member)
            if len(plan.plan_members) == 1:
                raise InvalidArgumentError(LAST_MEMBER_CANNOT_LEAVE)
            plans.delete_plan_member(plan_id, member.id)
        logger.info("Member %s left plan %s", member.id, plan_id)
        await AuditService.log(member_id=member.id, action="leave", object_type="plan", object_id=plan_id)
