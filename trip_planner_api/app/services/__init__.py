"""
Service layer.

Each service encapsulates the business rules of one area (plans,
places, memberships, members) and owns the unit of work for its
operations.  API handlers call services and nothing else.
"""
