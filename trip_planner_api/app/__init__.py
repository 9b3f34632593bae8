"""
Application package.

``core`` holds configuration, persistence and security plumbing,
``models`` the domain entities, ``repositories`` the SQLite mapping,
``services`` the business rules, ``schemas`` the API payloads and
``api`` the versioned routers.
"""

from .main import app  # noqa: F401
