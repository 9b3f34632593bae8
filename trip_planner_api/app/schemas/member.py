"""
Pydantic models for member data.

Passwords are accepted on registration and login only; they never
appear in a response.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ..models.member import Member
from ..models.plan import PlanMember


class MemberCreate(BaseModel):
    login_id: str = Field(..., min_length=3, max_length=50, examples=["traveller01"])
    name: str = Field(..., min_length=1, max_length=50, examples=["Kim Minji"])
    password: str = Field(..., min_length=8, examples=["strongpassword"])


class MemberLogin(BaseModel):
    login_id: str
    password: str


class MemberRead(BaseModel):
    id: str
    login_id: str
    name: str

    @classmethod
    def of(cls, member: Member) -> "MemberRead":
        return cls(id=member.id, login_id=member.login_id, name=member.name)


class PlanMemberRead(BaseModel):
    member_id: str
    login_id: str
    name: str
    joined_at: Optional[datetime] = None

    @classmethod
    def of(cls, plan_member: PlanMember) -> "PlanMemberRead":
        return cls(
            member_id=plan_member.member.id,
            login_id=plan_member.member.login_id,
            name=plan_member.member.name,
            joined_at=plan_member.joined_at,
        )


class PlanMemberInvite(BaseModel):
    login_id: str = Field(..., examples=["friend02"])


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
