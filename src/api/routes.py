"""
API routes - Registration endpoint.

This module defines the HTTP endpoints:
- POST /register - Register an attendee for the event
- Any other method on /register - benign "Invalid method" answer

Status codes follow the form's existing contract: 200 for success and for
"Invalid method", 500 for every error including user-correctable ones.
Every response carries the CORS headers.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.api.dependencies import get_registration_service
from src.api.models import ErrorResponse, RegisterRequest, RegisterResponse
from src.config.settings import get_settings
from src.domain.exceptions import RegistrationRejected
from src.domain.registration import RegistrationService

logger = logging.getLogger(__name__)

GENERIC_ERROR = "We had trouble registering you. If this error persists please email us."
INVALID_METHOD = "Invalid method"

router = APIRouter(tags=["registration"])


def cors_headers() -> dict[str, str]:
    """CORS headers attached to every /register response."""
    return {
        "Access-Control-Allow-Origin": get_settings().cors_allow_origin,
        "Access-Control-Allow-Headers": "Content-Type",
    }


def error_response(message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> JSONResponse:
    """Build an {"error": ...} response with CORS headers."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
        headers=cors_headers(),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Report malformed request bodies with the generic registration error.

    Installed on the application so that invalid JSON or wrongly typed
    fields never leak validation detail to the form.
    """
    logger.warning("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return error_response(GENERIC_ERROR)


@router.post(
    "/register",
    response_model=RegisterResponse,
    response_model_exclude_none=True,
    responses={
        500: {"model": ErrorResponse, "description": "Registration rejected or failed"},
    },
    summary="Register for the event",
    description="Submit attendee details. The address is verified when both address and "
    "country are given, a confirmation email is sent and, on request, the attendee "
    "is subscribed to the newsletter.",
)
def register(
    request_data: RegisterRequest,
    response: Response,
    service: RegistrationService = Depends(get_registration_service),
) -> RegisterResponse | JSONResponse:
    """
    Register an attendee.

    - **first_name**, **last_name**, **email**: required
    - **address**, **country**: optional, both or neither
    - **newsletter**: optional, defaults to false
    """
    try:
        outcome = service.register(request_data.to_domain())
    except RegistrationRejected as exc:
        logger.info("Registration rejected: %s", exc)
        return error_response(str(exc))
    except Exception:
        logger.exception("Registration failed")
        return error_response(GENERIC_ERROR)

    response.headers.update(cors_headers())
    return RegisterResponse(address=outcome.address_supplied, verified=outcome.address_verified)


@router.api_route(
    "/register",
    methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"],
    include_in_schema=False,
)
def register_invalid_method() -> JSONResponse:
    """Answer non-POST requests (including CORS preflight) with 200."""
    return error_response(INVALID_METHOD, status_code=status.HTTP_200_OK)
