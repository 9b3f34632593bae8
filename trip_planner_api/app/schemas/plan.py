"""
Pydantic models for plan data.

``PlanCreate`` is the request body for both creating and fully
updating a plan.  Responses come in three sizes: ``PlanSummary`` for
lists, ``PlanInfo`` after a write and ``PlanDetail`` for a single plan
with its places and members.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..core.db import SQLITE_MAX_INTEGER
from ..core.time_utils import to_local_naive
from ..models.destination import Destination, DestinationName
from ..models.plan import Plan, PlanVehicle
from .member import PlanMemberRead
from .place import PlaceRead


class DestinationRead(BaseModel):
    id: int
    destination_name: DestinationName

    @classmethod
    def of(cls, destination: Destination) -> "DestinationRead":
        return cls(id=destination.id, destination_name=destination.destination_name)


class PlanCreate(BaseModel):
    destination_id: int = Field(..., ge=1, le=SQLITE_MAX_INTEGER, examples=[5])
    started_at: datetime = Field(..., examples=["2024-06-01T09:00:00"])
    ended_at: datetime = Field(..., examples=["2024-06-03T18:00:00"])
    vehicle: PlanVehicle = Field(..., examples=["OWN_CAR"])

    @field_validator("started_at", "ended_at")
    @classmethod
    def _local_time(cls, value: datetime) -> datetime:
        return to_local_naive(value)


class PlanSummary(BaseModel):
    """Plan as it appears in list responses."""

    id: int
    destination_name: DestinationName
    started_at: datetime
    ended_at: datetime

    @classmethod
    def of(cls, plan: Plan) -> "PlanSummary":
        return cls(
            id=plan.id,
            destination_name=plan.destination.destination_name,
            started_at=plan.started_at,
            ended_at=plan.ended_at,
        )

    @classmethod
    def list_of(cls, plans: List[Plan]) -> List["PlanSummary"]:
        return [cls.of(plan) for plan in plans]


class PlanInfo(BaseModel):
    id: int
    destination_id: int
    destination_name: DestinationName
    started_at: datetime
    ended_at: datetime
    vehicle: PlanVehicle

    @classmethod
    def of(cls, plan: Plan) -> "PlanInfo":
        return cls(
            id=plan.id,
            destination_id=plan.destination.id,
            destination_name=plan.destination.destination_name,
            started_at=plan.started_at,
            ended_at=plan.ended_at,
            vehicle=plan.vehicle,
        )


class PlanDetail(PlanInfo):
    places: List[PlaceRead] = []
    members: List[PlanMemberRead] = []

    @classmethod
    def of(cls, plan: Plan) -> "PlanDetail":
        info = PlanInfo.of(plan)
        return cls(
            **info.model_dump(),
            places=[PlaceRead.of(place) for place in plan.places],
            members=[PlanMemberRead.of(pm) for pm in plan.plan_members],
        )


class FinalizeResult(BaseModel):
    """Outcome of finalizing a plan.

    Finalizing always succeeds; ``calendar_event_created`` and
    ``warning`` report whether the calendar export went through.
    """

    plan_id: int
    finalized: bool = True
    calendar_event_created: bool
    calendar_event_id: Optional[str] = None
    warning: Optional[str] = None
