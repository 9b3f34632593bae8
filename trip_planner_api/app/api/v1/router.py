"""
Top-level router for version 1 of the API.

Aggregates the domain routers under a unified prefix.  The place and
membership routers declare their own ``/plans/{plan_id}/...`` paths, so
they are included without a prefix.
"""

from fastapi import APIRouter

from .endpoints import audit, members, plan_members, places, plans


router = APIRouter()

router.include_router(members.router, prefix="/members", tags=["members"])
router.include_router(plans.router, prefix="/plans", tags=["plans"])
router.include_router(places.router, tags=["places"])
router.include_router(plan_members.router, tags=["plan members"])
router.include_router(audit.router, prefix="/audit", tags=["audit"])
