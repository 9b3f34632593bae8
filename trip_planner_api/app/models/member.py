from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class Member:
    """An authenticated traveller.

    ``id`` is a UUID string; ``login_id`` is the external identity that
    appears as the ``sub`` claim of access tokens.
    """

    id: str
    login_id: str
    name: str
    password: str = field(default="", repr=False)
    created_at: Optional[datetime] = None
