"""
Audit service for recording and querying member actions.

Writes go to the ``audit_logs`` table in their own connection, after
the business transaction has committed.  A failed audit write is
logged and never undoes or blocks the action it describes.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from typing import Any, Dict, List, Optional

from trip_planner_api.app.core.db import get_connection


logger = logging.getLogger(__name__)


class AuditService:
    """Service class for writing and retrieving audit logs."""

    @classmethod
    async def log(
        cls,
        member_id: Optional[str],
        action: str,
        object_type: str,
        object_id: Optional[int] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Insert a new audit record.

        Parameters
        ----------
        member_id : Optional[str]
            Member performing the action, ``None`` for system actions.
        action : str
            Short verb such as ``"create"``, ``"update"``, ``"delete"``.
        object_type : str
            Kind of object affected (``"plan"``, ``"place"``, ...).
        object_id : Optional[int]
            Primary key of the affected object, if applicable.
        details : Optional[dict]
            Extra structured data, stored as JSON.
        """
        details_json = json.dumps(details, default=str) if details else None
        conn = get_connection()
        try:
            conn.execute(
                """
                INSERT INTO audit_logs (member_id, action, object_type, object_id, details)
                VALUES (?, ?, ?, ?, ?)
                """,
                (member_id, action, object_type, object_id, details_json),
            )
            conn.commit()
        except sqlite3.Error as e:
            logger.warning("Failed to write audit log %s %s %s: %s", action, object_type, object_id, e)
        finally:
            conn.close()

    @classmethod
    async def list_logs(
        cls,
        member_id: str,
        object_type: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        """Return a member's audit records, newest first."""
        conn = get_connection()
        try:
            query = (
                "SELECT id, member_id, action, object_type, object_id, timestamp, details "
                "FROM audit_logs WHERE member_id = ?"
            )
            params: List[Any] = [member_id]
            if object_type:
                query += " AND object_type = ?"
                params.append(object_type)
            query += " ORDER BY id DESC LIMIT ? OFFSET ?"
            params.extend([limit, offset])
            rows = conn.execute(query, tuple(params)).fetchall()
            logs = []
            for row in rows:
                details_data = None
                if row["details"]:
                    try:
                        details_data = json.loads(row["details"])
                    except json.JSONDecodeError:
                        details_data = row["details"]
                logs.append(
                    {
                        "id": row["id"],
                        "member_id": row["member_id"],
                        "action": row["action"],
                        "object_type": row["object_type"],
                        "object_id": row["object_id"],
                        "timestamp": row["timestamp"],
                        "details": details_data,
                    }
                )
            return logs
        finally:
            conn.close()
