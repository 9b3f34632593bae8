import sqlite3
from typing import List, Optional

from ..core.time_utils import format_timestamp, parse_timestamp
from ..models.plan import Place


class PlaceRepository:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    @staticmethod
    def _to_place(row: sqlite3.Row) -> Place:
        return Place(
            id=row["id"],
            plan_id=row["plan_id"],
            name=row["name"],
            address=row["address"],
            category=row["category"],
            started_at=parse_timestamp(row["started_at"]),
            ended_at=parse_timestamp(row["ended_at"]),
        )

    def find_by_plan_id(self, plan_id: int) -> List[Place]:
        """Places of a plan in visit order; unset visits come last."""
        rows = self.conn.execute(
            """
            SELECT id, plan_id, name, address, category, started_at, ended_at
            FROM places
            WHERE plan_id = ?
            ORDER BY started_at IS NULL, started_at, id
            """,
            (plan_id,),
        ).fetchall()
        return [self._to_place(row) for row in rows]

    def find_by_id(self, plan_id: int, place_id: int) -> Optional[Place]:
        row = self.conn.execute(
            """
            SELECT id, plan_id, name, address, category, started_at, ended_at
            FROM places WHERE id = ? AND plan_id = ?
            """,
            (place_id, plan_id),
        ).fetchone()
        return self._to_place(row) if row else None

    def save(self, place: Place) -> Place:
        started_at = format_timestamp(place.started_at)
        ended_at = format_timestamp(place.ended_at)
        if place.id is None:
            cursor = self.conn.execute(
                """
                INSERT INTO places (plan_id, name, address, category, started_at, ended_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (place.plan_id, place.name, place.address, place.category, started_at, ended_at),
            )
            place.id = cursor.lastrowid
        else:
            self.conn.execute(
                """
                UPDATE places
                SET name = ?, address = ?, category = ?, started_at = ?, ended_at = ?
                WHERE id = ?
                """,
                (place.name, place.address, place.category, started_at, ended_at, place.id),
            )
        return place

    def delete(self, place_id: int) -> None:
        self.conn.execute("DELETE FROM places WHERE id = ?", (place_id,))
