"""
Membership-based access policy for plans.

Only members of a plan may read or change it.  The decision is made by
``evaluate_plan_access``; ``require_plan_member`` enforces it by
raising the same ``EntityNotFoundError`` a missing plan produces, so a
non-member cannot learn whether a plan exists.
"""

from enum import Enum

from ..core.errors import PLAN_MEMBER_NOT_FOUND, EntityNotFoundError
from ..models.member import Member
from ..models.plan import Plan


class PlanAccess(Enum):
    GRANTED = "granted"
    NOT_A_MEMBER = "not_a_member"


def evaluate_plan_access(plan: Plan, member: Member) -> PlanAccess:
    if plan.has_member(member.id):
        return PlanAccess.GRANTED
    return PlanAccess.NOT_A_MEMBER


def require_plan_member(plan: Plan, member: Member) -> None:
    if evaluate_plan_access(plan, member) is not PlanAccess.GRANTED:
        raise EntityNotFoundError(PLAN_MEMBER_NOT_FOUND)
