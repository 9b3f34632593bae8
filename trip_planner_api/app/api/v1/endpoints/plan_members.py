"""
Plan membership endpoints for API v1.

Like the place routes, these live under ``/plans/{plan_id}`` and
declare their full path.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status

from trip_planner_api.app.core.db import SQLITE_MAX_INTEGER
from trip_planner_api.app.core.security import get_current_member
from trip_planner_api.app.models.member import Member
from trip_planner_api.app.schemas.member import PlanMemberInvite, PlanMemberRead
from trip_planner_api.app.services.plan_member_service import PlanMemberService


router = APIRouter()


@router.get("/plans/{plan_id}/members", response_model=List[PlanMemberRead])
async def list_plan_members(
    plan_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER, description="ID of the plan"),
    current_member: Member = Depends(get_current_member),
) -> List[PlanMemberRead]:
    return await PlanMemberService.list_members(plan_id, current_member)


@router.post("/plans/{plan_id}/members", response_model=PlanMemberRead, status_code=status.HTTP_201_CREATED)
async def invite_plan_member(
    invite: PlanMemberInvite,
    plan_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER, description="ID of the plan"),
    current_member: Member = Depends(get_current_member),
) -> PlanMemberRead:
    """Add another member to a plan by login ID.

    404 when no member has that login ID, 409 when they already belong
    to the plan.
    """
    return await PlanMemberService.invite_member(plan_id, invite.login_id, current_member)


@router.delete("/plans/{plan_id}/members/me", status_code=status.HTTP_204_NO_CONTENT)
async def leave_plan(
    plan_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER, description="ID of the plan"),
    current_member: Member = Depends(get_current_member),
) -> None:
    """Leave a plan.  The last member cannot leave (400); delete the plan instead."""
    await PlanMemberService.leave_plan(plan_id, current_member)
    return None
