"""
Domain entities.

Plain dataclasses with the mutation rules of the plan aggregate.  They
know nothing about SQLite or HTTP; repositories map them to rows and
schemas map them to API payloads.
"""

from .destination import Destination, DestinationName  # noqa: F401
from .member import Member  # noqa: F401
from .plan import Place, Plan, PlanMember, PlanVehicle  # noqa: F401
