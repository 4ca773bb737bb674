"""
Revision Relay — Relay Failure → HTTP Mapping
==============================================

What:  The only place where relay failure kinds become status codes.

    MISSING_INPUT     → 400 Bad Request
    PROVIDER_FAILURE  → 500 Internal Server Error
"""

from fastapi.responses import JSONResponse

from revision_relay.results import FailureKind, RelayFailure
from revision_relay.schemas.relay import ErrorResponse

STATUS_BY_KIND = {
    FailureKind.MISSING_INPUT: 400,
    FailureKind.PROVIDER_FAILURE: 500,
}


def failure_response(failure: RelayFailure) -> JSONResponse:
    """Render a RelayFailure as `{"error": message}` with the mapped status."""
    return JSONResponse(
        status_code=STATUS_BY_KIND[failure.kind],
        content=ErrorResponse(error=failure.message).model_dump(),
    )
