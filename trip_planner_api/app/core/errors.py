"""Error taxonomy and its translation to HTTP responses.

Services raise these exceptions where a problem is detected and let
them propagate; the handlers registered in ``main.create_app`` turn
them into JSON error bodies with the matching status code.
"""

import logging
from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


class AppError(Exception):
    code = "app_error"
    status_code = 500

    def __init__(self, message: str, *, code: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        if status_code:
            self.status_code = status_code


class EntityNotFoundError(AppError, LookupError):
    """A destination, plan, membership, member or place does not exist.

    Also raised when the caller is not a member of a plan, so that
    non-members cannot tell a foreign plan from a missing one.
    """

    code = "not_found"
    status_code = 404


class InvalidArgumentError(AppError, ValueError):
    code = "invalid_argument"
    status_code = 400


class ConflictError(AppError):
    code = "conflict"
    status_code = 409


class CalendarIntegrationError(AppError):
    code = "calendar_integration_failed"
    status_code = 502


# Error messages shared by services and tests.
DESTINATION_NOT_FOUND = "Destination not found"
PLAN_NOT_FOUND = "Plan not found"
PLAN_MEMBER_NOT_FOUND = "Plan member not found"
MEMBER_NOT_FOUND = "Member not found"
PLACE_NOT_FOUND = "Place not found"
PLAN_START_AFTER_END = "Plan start date must not be after its end date"
START_NOT_BEFORE_END = "Start time must be before end time"
PLACE_OUTSIDE_PLAN = "Place visit time must lie within the plan period"
PLACE_WINDOW_INCOMPLETE = "Place visit start and end must be set together"
LAST_MEMBER_CANNOT_LEAVE = "The last member of a plan cannot leave it"


def _error_payload(code: str, message: str) -> dict:
    return {
        "error": {"code": code, "message": message},
        "detail": message,
    }


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    log_level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(
        log_level,
        "%s %s failed: %s (%s)",
        request.method,
        request.url.path,
        exc.message,
        exc.code,
    )
    return JSONResponse(status_code=exc.status_code, content=_error_payload(exc.code, exc.message))
