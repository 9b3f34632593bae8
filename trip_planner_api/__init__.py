"""
Top-level package for the Trip Planner API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``trip_planner_api.app.main:app``.
"""

__all__ = []
