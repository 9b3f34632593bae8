"""
Repository for the plan aggregate.

Every finder carries the ``deleted_at IS NULL`` predicate, so a
soft-deleted plan is invisible to lookups and lists alike.  ``save``
writes the plan row together with any new memberships and the current
state of its places.
"""

import sqlite3
from datetime import datetime
from typing import Iterable, List, Optional

from ..core.time_utils import format_timestamp, parse_timestamp
from ..models.destination import Destination, DestinationName
from ..models.member import Member
from ..models.plan import Plan, PlanMember, PlanVehicle
from .place_repository import PlaceRepository


PLAN_SELECT = """
    SELECT p.id, p.started_at, p.ended_at, p.vehicle, p.deleted_at,
           d.id AS destination_id, d.destination_name
    FROM plans p
    JOIN destinations d ON d.id = p.destination_id
"""


class PlanRepository:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn
        self.places = PlaceRepository(conn)

    # -- mapping -------------------------------------------------------

    def _to_plan(self, row: sqlite3.Row, with_places: bool) -> Plan:
        plan = Plan(
            id=row["id"],
            destination=Destination(
                id=row["destination_id"],
                destination_name=DestinationName(row["destination_name"]),
            ),
            started_at=parse_timestamp(row["started_at"]),
            ended_at=parse_timestamp(row["ended_at"]),
            vehicle=PlanVehicle(row["vehicle"]),
            deleted_at=parse_timestamp(row["deleted_at"]),
        )
        plan.plan_members = self._find_plan_members(plan.id)
        if with_places:
            plan.places = self.places.find_by_plan_id(plan.id)
        return plan

    def _to_plans(self, rows: Iterable[sqlite3.Row]) -> List[Plan]:
        return [self._to_plan(row, with_places=False) for row in rows]

    def _find_plan_members(self, plan_id: int) -> List[PlanMember]:
        rows = self.conn.execute(
            """
            SELECT pm.id, pm.plan_id, pm.joined_at,
                   m.id AS member_id, m.login_id, m.name
            FROM plan_members pm
            JOIN members m ON m.id = pm.member_id
            WHERE pm.plan_id = ?
            ORDER BY pm.id
            """,
            (plan_id,),
        ).fetchall()
        return [
            PlanMember(
                id=row["id"],
                plan_id=row["plan_id"],
                joined_at=parse_timestamp(row["joined_at"]),
                member=Member(id=row["member_id"], login_id=row["login_id"], name=row["name"]),
            )
            for row in rows
        ]

    # -- finders -------------------------------------------------------

    def find_by_id_and_deleted_at_is_null(self, plan_id: int) -> Optional[Plan]:
        row = self.conn.execute(
            PLAN_SELECT + " WHERE p.id = ? AND p.deleted_at IS NULL",
            (plan_id,),
        ).fetchone()
        return self._to_plan(row, with_places=True) if row else None

    def find_all(self) -> List[Plan]:
        rows = self.conn.execute(
            PLAN_SELECT + " WHERE p.deleted_at IS NULL ORDER BY p.id"
        ).fetchall()
        return self._to_plans(rows)

    def find_all_order_by_started_at_desc(self) -> List[Plan]:
        rows = self.conn.execute(
            PLAN_SELECT + " WHERE p.deleted_at IS NULL ORDER BY p.started_at DESC, p.id DESC"
        ).fetchall()
        return self._to_plans(rows)

    def find_by_destination_name_order_by_started_at_desc(self, destination_name: DestinationName) -> List[Plan]:
        rows = self.conn.execute(
            PLAN_SELECT
            + " WHERE p.deleted_at IS NULL AND d.destination_name = ?"
            + " ORDER BY p.started_at DESC, p.id DESC",
            (destination_name.value,),
        ).fetchall()
        return self._to_plans(rows)

    def find_by_destination_name_and_started_at_between(
        self,
        destination_name: DestinationName,
        start: datetime,
        end: datetime,
    ) -> List[Plan]:
        """Plans for a destination whose start lies in ``[start, end]``."""
        rows = self.conn.execute(
            PLAN_SELECT
            + " WHERE p.deleted_at IS NULL AND d.destination_name = ?"
            + " AND p.started_at BETWEEN ? AND ?"
            + " ORDER BY p.started_at DESC, p.id DESC",
            (destination_name.value, format_timestamp(start), format_timestamp(end)),
        ).fetchall()
        return self._to_plans(rows)

    # -- writes --------------------------------------------------------

    def save(self, plan: Plan) -> Plan:
        values = (
            plan.destination.id,
            format_timestamp(plan.started_at),
            format_timestamp(plan.ended_at),
            plan.vehicle.value,
            format_timestamp(plan.deleted_at),
        )
        if plan.id is None:
            cursor = self.conn.execute(
                """
                INSERT INTO plans (destination_id, started_at, ended_at, vehicle, deleted_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                values,
            )
            plan.id = cursor.lastrowid
        else:
            self.conn.execute(
                """
                UPDATE plans
                SET destination_id = ?, started_at = ?, ended_at = ?, vehicle = ?,
                    deleted_at = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                values + (plan.id,),
            )

        for plan_member in plan.plan_members:
            if plan_member.id is None:
                plan_member.plan_id = plan.id
                cursor = self.conn.execute(
                    "INSERT INTO plan_members (plan_id, member_id) VALUES (?, ?)",
                    (plan.id, plan_member.member.id),
                )
                plan_member.id = cursor.lastrowid

        for place in plan.places:
            place.plan_id = plan.id
            self.places.save(place)
        return plan

    def delete_plan_member(self, plan_id: int, member_id: str) -> None:
        self.conn.execute(
            "DELETE FROM plan_members WHERE plan_id = ? AND member_id = ?",
            (plan_id, member_id),
        )
