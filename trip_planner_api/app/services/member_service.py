"""
Business logic for members.

Registration, password authentication and lookup by ID.  The member
record is what ``core.security`` resolves every bearer token to.
"""

import logging
import sqlite3
import uuid
from typing import Optional

from ..core.db import transaction
from ..core.errors import MEMBER_NOT_FOUND, ConflictError, EntityNotFoundError
from ..core.security import hash_password, verify_password
from ..models.member import Member
from ..repositories.member_repository import MemberRepository
from ..schemas.member import MemberCreate


def find_member(conn: sqlite3.Connection, member_id: str) -> Member:
    """Load a member inside the caller's unit of work; NotFound when absent."""
    member = MemberRepository(conn).find_by_id(member_id)
    if member is None:
        raise EntityNotFoundError(MEMBER_NOT_FOUND)
    return member


class MemberService:

    @classmethod
    async def register(cls, data: MemberCreate) -> Member:
        """Create a member; ``login_id`` must be unused."""
        logger = logging.getLogger(__name__)
        logger.info("Registering member %s", data.login_id)
        try:
            with transaction() as conn:
                return MemberRepository(conn).insert(
                    Member(
                        id=str(uuid.uuid4()),
                        login_id=data.login_id,
                        name=data.name,
                        password=hash_password(data.password),
                    )
                )
        except sqlite3.IntegrityError as e:
            raise ConflictError(f"Login ID {data.login_id} is already taken") from e

    @classmethod
    async def authenticate(cls, login_id: str, password: str) -> Optional[Member]:
        """Return the member when the credentials match, otherwise ``None``."""
        with transaction() as conn:
            member = MemberRepository(conn).find_by_login_id(login_id)
        if member is None or not verify_password(password, member.password):
            return None
        return member
