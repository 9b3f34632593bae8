"""
Plan aggregate and the entities it owns.

A ``Plan`` holds its ``Place`` visits and ``PlanMember`` associations.
The mutation rules live here so every service call that changes a plan
goes through the same code: ``Plan.update`` applies an explicit set of
fields and ``Plan.reset_invalid_place_times`` clears every place visit
that no longer fits inside the plan window.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from .destination import Destination
from .member import Member


class PlanVehicle(str, Enum):
    PUBLIC_TRANSPORTATION = "PUBLIC_TRANSPORTATION"
    OWN_CAR = "OWN_CAR"


@dataclass
class Place:
    id: Optional[int]
    plan_id: Optional[int]
    name: str
    address: Optional[str] = None
    category: Optional[str] = None
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None

    @property
    def has_visit_time(self) -> bool:
        return self.started_at is not None and self.ended_at is not None

    def fits_within(self, start: datetime, end: datetime) -> bool:
        """True when the visit window is unset or fully inside ``[start, end]``."""
        if not self.has_visit_time:
            return True
        return self.started_at >= start and self.ended_at <= end

    def set_visit_times(self, started_at: datetime, ended_at: datetime) -> None:
        self.started_at = started_at
        self.ended_at = ended_at

    def reset_visit_times(self) -> None:
        self.started_at = None
        self.ended_at = None


@dataclass
class PlanMember:
    plan_id: Optional[int]
    member: Member
    id: Optional[int] = None
    joined_at: Optional[datetime] = None


@dataclass
class Plan:
    id: Optional[int]
    destination: Destination
    started_at: datetime
    ended_at: datetime
    vehicle: PlanVehicle
    deleted_at: Optional[datetime] = None
    places: List[Place] = field(default_factory=list)
    plan_members: List[PlanMember] = field(default_factory=list)

    @classmethod
    def of(cls, destination: Destination, started_at: datetime, ended_at: datetime, vehicle: PlanVehicle) -> "Plan":
        return cls(id=None, destination=destination, started_at=started_at, ended_at=ended_at, vehicle=vehicle)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def add_plan_member(self, member: Member) -> PlanMember:
        plan_member = PlanMember(plan_id=self.id, member=member)
        self.plan_members.append(plan_member)
        return plan_member

    def has_member(self, member_id: str) -> bool:
        return any(pm.member.id == member_id for pm in self.plan_members)

    def update(
        self,
        *,
        destination: Optional[Destination] = None,
        started_at: Optional[datetime] = None,
        ended_at: Optional[datetime] = None,
        vehicle: Optional[PlanVehicle] = None,
    ) -> bool:
        """Apply the given fields; ``None`` leaves a field unchanged.

        Returns True when the plan window moved, in which case the caller
        must run ``reset_invalid_place_times``.
        """
        previous_window = (self.started_at, self.ended_at)
        if destination is not None:
            self.destination = destination
        if started_at is not None:
            self.started_at = started_at
        if ended_at is not None:
            self.ended_at = ended_at
        if vehicle is not None:
            self.vehicle = vehicle
        return (self.started_at, self.ended_at) != previous_window

    def reset_invalid_place_times(self) -> List[Place]:
        """Clear the visit window of every place outside the plan window.

        Returns the places that were reset.  Places already unset or
        fully inside the window are left untouched.
        """
        reset: List[Place] = []
        for place in self.places:
            if not place.fits_within(self.started_at, self.ended_at):
                place.reset_visit_times()
                reset.append(place)
        return reset

    def mark_as_deleted(self, when: datetime) -> None:
        """Soft-delete the plan.  The first deletion time is kept."""
        if self.is_deleted:
            return
        self.deleted_at = when
