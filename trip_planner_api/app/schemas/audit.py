from typing import Any, Optional

from pydantic import BaseModel


class AuditLogRead(BaseModel):
    id: int
    member_id: Optional[str] = None
    action: str
    object_type: Optional[str] = None
    object_id: Optional[int] = None
    timestamp: str
    details: Any = None
