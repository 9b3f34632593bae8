"""
Pydantic schema definitions for API payloads.

Schemas are kept apart from the dataclasses in ``models`` so the API
representation can evolve without touching persistence.  Response
schemas expose an ``of`` constructor that builds them from a model.
"""
