"""
Revision Relay — Upload Route Handler
======================================

What:  Handles POST /api/upload-pdf.
How:   Reads the multipart `file` field into memory, delegates to UploadRelay,
       maps the outcome to HTTP.
Who:   Called by the frontend to publish a generated PDF.

The form is read by the handler rather than declared as a `File` parameter:
a missing `file` field, or one sent as plain text, reaches the relay as "no
file" and is answered with 400 {"error": ...} instead of FastAPI's 422.
"""

import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from revision_relay.dependencies import get_upload_relay
from revision_relay.middleware.request_id import request_id_var
from revision_relay.results import RelayFailure
from revision_relay.routes.errors import failure_response
from revision_relay.schemas.relay import ErrorResponse, UploadResponse
from revision_relay.services.upload_relay import UploadedFile, UploadRelay

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Upload"])

FILE_FIELD = "file"

# Documents the multipart body that the handler parses itself
_MULTIPART_BODY = {
    "requestBody": {
        "content": {
            "multipart/form-data": {
                "schema": {
                    "type": "object",
                    "properties": {
                        FILE_FIELD: {
                            "type": "string",
                            "format": "binary",
                            "description": "File to publish",
                        },
                    },
                },
            },
        },
    },
}


@router.post(
    "/upload-pdf",
    response_model=UploadResponse,
    responses={
        200: {"description": "File stored", "model": UploadResponse},
        400: {"description": "No file in the request", "model": ErrorResponse},
        500: {"description": "Storage provider failed", "model": ErrorResponse},
    },
    summary="Store a file and return its public URL",
    description=(
        "Uploads the multipart `file` field to the object-storage bucket under "
        "`pdfs/<unix-millis>_<filename>` and returns its public download URL."
    ),
    openapi_extra=_MULTIPART_BODY,
)
async def upload_pdf(
    request: Request,
    relay: UploadRelay = Depends(get_upload_relay),
) -> Union[UploadResponse, JSONResponse]:
    upload: Optional[UploadedFile] = None

    form = await request.form()
    try:
        field = form.get(FILE_FIELD)
        if isinstance(field, UploadFile):
            upload = UploadedFile(
                filename=field.filename or "",
                content_type=field.content_type or "",
                content=await field.read(),
            )
        elif field is not None:
            logger.warning(
                "[%s] Field '%s' is not a file upload, treating as missing",
                request_id_var.get(""),
                FILE_FIELD,
            )
    finally:
        await form.close()

    outcome = await relay.upload(upload)

    if isinstance(outcome, RelayFailure):
        return failure_response(outcome)

    return UploadResponse(file_url=outcome.file_url)
