import sqlite3
from typing import Optional

from ..core.time_utils import parse_timestamp
from ..models.member import Member


MEMBER_COLUMNS = "id, login_id, name, password, created_at"


class MemberRepository:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    @staticmethod
    def _to_member(row: sqlite3.Row) -> Member:
        return Member(
            id=row["id"],
            login_id=row["login_id"],
            name=row["name"],
            password=row["password"],
            created_at=parse_timestamp(row["created_at"]),
        )

    def find_by_id(self, member_id: str) -> Optional[Member]:
        row = self.conn.execute(
            f"SELECT {MEMBER_COLUMNS} FROM members WHERE id = ?", (member_id,)
        ).fetchone()
        return self._to_member(row) if row else None

    def find_by_login_id(self, login_id: str) -> Optional[Member]:
        row = self.conn.execute(
            f"SELECT {MEMBER_COLUMNS} FROM members WHERE login_id = ?", (login_id,)
        ).fetchone()
        return self._to_member(row) if row else None

    def insert(self, member: Member) -> Member:
        self.conn.execute(
            "INSERT INTO members (id, login_id, name, password) VALUES (?, ?, ?, ?)",
            (member.id, member.login_id, member.name, member.password),
        )
        return self.find_by_id(member.id)
