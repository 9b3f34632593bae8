"""
Audit endpoint for API v1.

Members can read their own activity trail: plan, place and membership
changes they made, newest first.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from trip_planner_api.app.core.security import get_current_member
from trip_planner_api.app.models.member import Member
from trip_planner_api.app.schemas.audit import AuditLogRead
from trip_planner_api.app.services.audit_service import AuditService


router = APIRouter()


@router.get("/me", response_model=List[AuditLogRead])
async def list_my_audit_logs(
    object_type: Optional[str] = Query(None),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    current_member: Member = Depends(get_current_member),
) -> List[AuditLogRead]:
    logs = await AuditService.list_logs(
        member_id=current_member.id,
        object_type=object_type,
        limit=limit,
        offset=offset,
    )
    return [AuditLogRead(**log) for log in logs]
