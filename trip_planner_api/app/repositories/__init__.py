"""
Persistence layer.

Each repository wraps an open SQLite connection (see
``core.db.transaction``) and maps rows to the dataclasses in
``models``.  Repositories never commit; the unit of work owned by the
calling service does.
"""

from .destination_repository import DestinationRepository  # noqa: F401
from .member_repository import MemberRepository  # noqa: F401
from .place_repository import PlaceRepository  # noqa: F401
from .plan_repository import PlanRepository  # noqa: F401
