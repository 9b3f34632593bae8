"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts without any configuration; override them via environment
variables in a real deployment.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Trip Planner API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

    # Path to the SQLite database.  Relative paths are resolved against
    # the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "trip_planner.db")

    # Google Calendar integration used when a plan is finalized.  The
    # token is an OAuth access token with the calendar.events scope;
    # obtaining and refreshing it is left to the deployment.
    google_calendar_api_base: str = os.getenv(
        "GOOGLE_CALENDAR_API_BASE", "https://www.googleapis.com/calendar/v3"
    )
    google_calendar_id: str = os.getenv("GOOGLE_CALENDAR_ID", "primary")
    google_calendar_token: str = os.getenv("GOOGLE_CALENDAR_TOKEN", "")
    calendar_time_zone: str = os.getenv("CALENDAR_TIME_ZONE", "Asia/Seoul")
    calendar_timeout_seconds: float = float(os.getenv("CALENDAR_TIMEOUT_SECONDS", "10"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# be set before this module is imported.
settings = Settings()
