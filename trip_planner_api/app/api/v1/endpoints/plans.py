"""
Plan endpoints for API v1.

Pure translation between HTTP and ``PlanService``: every route resolves
the caller through ``get_current_member`` and hands the call over.
Service errors are turned into responses by the handlers registered in
``main``.

The fixed paths (``/all``, ``/sorted/...``) are declared before
``/{plan_id}`` so they are never parsed as plan IDs.
"""

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Path, Query, status

from trip_planner_api.app.core.db import SQLITE_MAX_INTEGER
from trip_planner_api.app.core.security import get_current_member
from trip_planner_api.app.models.destination import DestinationName
from trip_planner_api.app.models.member import Member
from trip_planner_api.app.models.plan import PlanVehicle
from trip_planner_api.app.schemas.plan import (
    DestinationRead,
    FinalizeResult,
    PlanCreate,
    PlanDetail,
    PlanInfo,
    PlanSummary,
)
from trip_planner_api.app.services.plan_service import PlanService


router = APIRouter()


@router.get("", response_model=List[DestinationRead])
async def get_all_destinations(current_member: Member = Depends(get_current_member)) -> List[DestinationRead]:
    """List the destinations a plan can be made for."""
    return await PlanService.get_all_destinations()


@router.post("", response_model=PlanInfo, status_code=status.HTTP_201_CREATED)
async def create_plan(
    plan: PlanCreate,
    current_member: Member = Depends(get_current_member),
) -> PlanInfo:
    """Create a plan.  The caller becomes its first member.

    ``vehicle`` is ``PUBLIC_TRANSPORTATION`` or ``OWN_CAR``.
    """
    return await PlanService.create_plan(plan, current_member)


@router.get("/all", response_model=List[PlanSummary])
async def list_all_plans(current_member: Member = Depends(get_current_member)) -> List[PlanSummary]:
    return await PlanService.list_all_plans(current_member.id)


@router.get("/sorted", response_model=List[PlanSummary])
async def list_plans_by_start_date(current_member: Member = Depends(get_current_member)) -> List[PlanSummary]:
    """List the caller's plans, latest start first."""
    return await PlanService.list_plans_by_start_date(current_member.id)


@router.get("/sorted/{destination_name}", response_model=List[PlanSummary])
async def list_plans_by_destination(
    destination_name: DestinationName,
    current_member: Member = Depends(get_current_member),
) -> List[PlanSummary]:
    """List the caller's plans for one destination, latest start first."""
    return await PlanService.list_plans_by_destination(current_member.id, destination_name)


@router.get("/sorted/{destination_name}/{start}/{end}", response_model=List[PlanSummary])
async def list_plans_by_destination_and_date_range(
    destination_name: DestinationName,
    start: datetime,
    end: datetime,
    current_member: Member = Depends(get_current_member),
) -> List[PlanSummary]:
    """List the caller's plans for a destination that start between ``start`` and ``end``."""
    return await PlanService.list_plans_by_destination_and_date_range(
        current_member.id, destination_name, start, end
    )


@router.get("/{plan_id}", response_model=PlanDetail)
async def get_plan(
    plan_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER, description="ID of the plan"),
    current_member: Member = Depends(get_current_member),
) -> PlanDetail:
    """Return a plan with its places and members.

    Responds 404 both when the plan does not exist and when the caller
    is not one of its members.
    """
    return await PlanService.get_plan(plan_id, current_member)


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_plan(
    plan_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER, description="ID of the plan"),
    current_member: Member = Depends(get_current_member),
) -> None:
    await PlanService.delete_plan(plan_id, current_member)
    return None


@router.put("/{plan_id}", response_model=PlanInfo)
async def update_plan(
    plan: PlanCreate,
    plan_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER, description="ID of the plan"),
    current_member: Member = Depends(get_current_member),
) -> PlanInfo:
    """Replace destination, period and vehicle of a plan.

    Places whose visit time falls outside the new period are reset.
    """
    return await PlanService.update_plan(plan_id, plan, current_member.id)


@router.put("/{plan_id}/destination", response_model=PlanInfo)
async def change_destination(
    plan_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER, description="ID of the plan"),
    new_destination_id: int = Query(..., ge=1, le=SQLITE_MAX_INTEGER),
    current_member: Member = Depends(get_current_member),
) -> PlanInfo:
    return await PlanService.update_destination(plan_id, new_destination_id, current_member.id)


@router.put("/{plan_id}/start-time", response_model=PlanInfo)
async def change_start_time(
    plan_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER, description="ID of the plan"),
    new_start_time: datetime = Query(...),
    current_member: Member = Depends(get_current_member),
) -> PlanInfo:
    return await PlanService.update_start_time(plan_id, new_start_time, current_member.id)


@router.put("/{plan_id}/end-time", response_model=PlanInfo)
async def change_end_time(
    plan_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER, description="ID of the plan"),
    new_end_time: datetime = Query(...),
    current_member: Member = Depends(get_current_member),
) -> PlanInfo:
    return await PlanService.update_end_time(plan_id, new_end_time, current_member.id)


@router.put("/{plan_id}/vehicle", response_model=PlanInfo)
async def change_vehicle(
    plan_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER, description="ID of the plan"),
    new_vehicle: PlanVehicle = Query(...),
    current_member: Member = Depends(get_current_member),
) -> PlanInfo:
    return await PlanService.update_vehicle(plan_id, new_vehicle, current_member.id)


@router.post("/{plan_id}/finalize", response_model=FinalizeResult)
async def finalize_plan(
    plan_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER, description="ID of the plan"),
    current_member: Member = Depends(get_current_member),
) -> FinalizeResult:
    """Confirm a plan and export it to Google Calendar.

    Always 200 for a plan the caller belongs to.  When the calendar
    export fails, ``calendar_event_created`` is false and ``warning``
    says why.
    """
    return await PlanService.finalize_plan(plan_id, current_member.id)
