"""
Place endpoints for API v1.

Places are nested under their plan, so this router declares the full
``/plans/{plan_id}/places`` path itself and is included without a
prefix.  Membership of the plan is checked by the service.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status

from trip_planner_api.app.core.db import SQLITE_MAX_INTEGER
from trip_planner_api.app.core.security import get_current_member
from trip_planner_api.app.models.member import Member
from trip_planner_api.app.schemas.place import PlaceCreate, PlaceRead, PlaceVisitTimeUpdate
from trip_planner_api.app.services.place_service import PlaceService


router = APIRouter()


@router.get("/plans/{plan_id}/places", response_model=List[PlaceRead])
async def list_places(
    plan_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER, description="ID of the plan"),
    current_member: Member = Depends(get_current_member),
) -> List[PlaceRead]:
    """List the places of a plan in visit order; places without a visit time come last."""
    return await PlaceService.list_places(plan_id, current_member)


@router.post("/plans/{plan_id}/places", response_model=PlaceRead, status_code=status.HTTP_201_CREATED)
async def add_place(
    place: PlaceCreate,
    plan_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER, description="ID of the plan"),
    current_member: Member = Depends(get_current_member),
) -> PlaceRead:
    """Add a place to a plan.

    A visit time, when given, must lie within the plan period; otherwise
    the response is 400.
    """
    return await PlaceService.add_place(plan_id, place, current_member)


@router.put("/plans/{plan_id}/places/{place_id}/visit-time", response_model=PlaceRead)
async def update_visit_time(
    window: PlaceVisitTimeUpdate,
    plan_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER, description="ID of the plan"),
    place_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER, description="ID of the place"),
    current_member: Member = Depends(get_current_member),
) -> PlaceRead:
    return await PlaceService.update_visit_time(
        plan_id, place_id, window.started_at, window.ended_at, current_member
    )


@router.delete("/plans/{plan_id}/places/{place_id}/visit-time", response_model=PlaceRead)
async def reset_visit_time(
    plan_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER, description="ID of the plan"),
    place_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER, description="ID of the place"),
    current_member: Member = Depends(get_current_member),
) -> PlaceRead:
    """Clear the visit time of a place."""
    return await PlaceService.reset_visit_time(plan_id, place_id, current_member)


@router.delete("/plans/{plan_id}/places/{place_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_place(
    plan_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER, description="ID of the plan"),
    place_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER, description="ID of the place"),
    current_member: Member = Depends(get_current_member),
) -> None:
    await PlaceService.delete_place(plan_id, place_id, current_member)
    return None
