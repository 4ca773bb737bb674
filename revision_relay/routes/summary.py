"""
Revision Relay — Summary Route Handler
=======================================

What:  Handles POST /api/generate-summary.
How:   Parses the optional JSON body, delegates to GenerationRelay, maps the
       outcome to HTTP.
Who:   Called by the frontend when a student asks for a revision sheet.

Request Flow:
    1. FastAPI validates the body against SummaryRequest (body may be omitted;
       malformed JSON or object-valued fields get 400 {"error": ...})
    2. GenerationRelay builds the prompt and calls Gemini once
    3. 200 {"summary": html} or 500 {"error": message}
"""

import logging
from typing import Optional, Union

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from revision_relay.dependencies import get_generation_relay
from revision_relay.middleware.request_id import request_id_var
from revision_relay.results import RelayFailure
from revision_relay.routes.errors import failure_response
from revision_relay.schemas.relay import ErrorResponse, SummaryRequest, SummaryResponse
from revision_relay.services.generation_relay import GenerationRelay

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Summary"])


@router.post(
    "/generate-summary",
    response_model=SummaryResponse,
    responses={
        200: {"description": "Revision sheet generated", "model": SummaryResponse},
        400: {"description": "Malformed JSON or mistyped field", "model": ErrorResponse},
        500: {"description": "Generation provider failed", "model": ErrorResponse},
    },
    summary="Generate an HTML revision sheet from course notes",
    description=(
        "Builds a French instruction from the course name, description, "
        "organisation instructions and raw notes (all optional) and returns the "
        "HTML revision sheet produced by Google Gemini."
    ),
)
async def generate_summary(
    payload: Optional[SummaryRequest] = Body(default=None),
    relay: GenerationRelay = Depends(get_generation_relay),
) -> Union[SummaryResponse, JSONResponse]:
    if payload is None:
        logger.debug("[%s] No JSON body, every field uses its default", request_id_var.get(""))
        payload = SummaryRequest()

    outcome = await relay.generate_summary(payload)

    if isinstance(outcome, RelayFailure):
        return failure_response(outcome)

    return SummaryResponse(summary=outcome.summary)
