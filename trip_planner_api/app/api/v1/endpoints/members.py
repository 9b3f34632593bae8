"""
Member endpoints for API v1.

Registration and login are the only unauthenticated routes of the API.
Login returns the bearer token every other route expects.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from trip_planner_api.app.core.security import create_access_token, get_current_member
from trip_planner_api.app.models.member import Member
from trip_planner_api.app.schemas.member import MemberCreate, MemberLogin, MemberRead, Token
from trip_planner_api.app.services.member_service import MemberService


router = APIRouter()


@router.post("", response_model=MemberRead, status_code=status.HTTP_201_CREATED)
async def register_member(member: MemberCreate) -> MemberRead:
    """Register a new member.  Responds 409 when the login ID is taken."""
    return MemberRead.of(await MemberService.register(member))


@router.post("/login", response_model=Token)
async def login(credentials: MemberLogin) -> Token:
    member = await MemberService.authenticate(credentials.login_id, credentials.password)
    if not member:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return Token(access_token=create_access_token({"sub": member.login_id}))


@router.get("/me", response_model=MemberRead)
async def read_current_member(current_member: Member = Depends(get_current_member)) -> MemberRead:
    return MemberRead.of(current_member)
