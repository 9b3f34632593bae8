import sqlite3
from typing import List, Optional

from ..models.destination import Destination, DestinationName


class DestinationRepository:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    @staticmethod
    def _to_destination(row: sqlite3.Row) -> Destination:
        return Destination(id=row["id"], destination_name=DestinationName(row["destination_name"]))

    def find_all(self) -> List[Destination]:
        rows = self.conn.execute("SELECT id, destination_name FROM destinations ORDER BY id").fetchall()
        return [self._to_destination(row) for row in rows]

    def find_by_id(self, destination_id: int) -> Optional[Destination]:
        row = self.conn.execute(
            "SELECT id, destination_name FROM destinations WHERE id = ?",
            (destination_id,),
        ).fetchone()
        return self._to_destination(row) if row else None
