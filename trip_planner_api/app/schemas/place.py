from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..core.time_utils import to_local_naive
from ..models.plan import Place


class PlaceCreate(BaseModel):
    """Schema for adding a place to a plan.

    The visit window is optional; when given, both ends must be set.
    """

    name: str = Field(..., min_length=1, examples=["Haeundae Beach"])
    address: Optional[str] = Field(None, examples=["Haeundae-gu, Busan"])
    category: Optional[str] = Field(None, examples=["beach"])
    started_at: Optional[datetime] = Field(None, examples=["2024-06-01T13:00:00"])
    ended_at: Optional[datetime] = Field(None, examples=["2024-06-01T15:00:00"])

    @field_validator("started_at", "ended_at")
    @classmethod
    def _local_time(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_local_naive(value)


class PlaceVisitTimeUpdate(BaseModel):
    started_at: datetime
    ended_at: datetime

    @field_validator("started_at", "ended_at")
    @classmethod
    def _local_time(cls, value: datetime) -> datetime:
        return to_local_naive(value)


class PlaceRead(BaseModel):
    id: int
    name: str
    address: Optional[str] = None
    category: Optional[str] = None
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None

    @classmethod
    def of(cls, place: Place) -> "PlaceRead":
        return cls(
            id=place.id,
            name=place.name,
            address=place.address,
            category=place.category,
            started_at=place.started_at,
            ended_at=place.ended_at,
        )
