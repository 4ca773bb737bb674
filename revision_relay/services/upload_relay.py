"""
Revision Relay — Upload Relay
==============================

What:  Forwards one uploaded file to object storage and returns its public URL.
How:   The key is `pdfs/<unix-millis>_<original-filename>`. The filename is
       used as sent: no sanitisation, no extension or MIME check, and no
       collision handling beyond the millisecond timestamp.
Who:   Called by POST /api/upload-pdf.

Outcomes:
    no file            → RelayFailure(MISSING_INPUT)      → HTTP 400
    storage error      → RelayFailure(PROVIDER_FAILURE)   → HTTP 500
    stored             → UploadSuccess(key, file_url)     → HTTP 200
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from revision_relay.exceptions import StorageProviderError
from revision_relay.results import (
    FailureKind,
    RelayFailure,
    UploadOutcome,
    UploadSuccess,
)
from revision_relay.services.storage_base import StorageProvider

logger = logging.getLogger(__name__)

MISSING_FILE_MESSAGE = "Aucun fichier n'a été envoyé."
UPLOAD_ERROR_MESSAGE = "Erreur lors de l'envoi du fichier."

KEY_PREFIX = "pdfs"
DEFAULT_FILENAME = "document.pdf"
DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class UploadedFile:
    """An uploaded payload, fully read into memory."""

    filename: str
    content_type: str
    content: bytes


def build_storage_key(filename: str, timestamp_ms: int) -> str:
    """`pdfs/<timestamp_ms>_<filename>`"""
    return f"{KEY_PREFIX}/{timestamp_ms}_{filename}"


class UploadRelay:
    """
    Stateless relay between the API and a StorageProvider.

    Args:
        storage: The object-storage backend.
        clock:   Returns the current time in seconds; replaced in tests.
    """

    def __init__(
        self,
        storage: StorageProvider,
        clock: Callable[[], float] = time.time,
    ):
        self.storage = storage
        self.clock = clock

    async def upload(self, upload: Optional[UploadedFile]) -> UploadOutcome:
        """
        Store the file and return its public URL.

        The storage provider is not contacted when `upload` is None.
        """
        if upload is None:
            logger.warning("Upload rejected: no file field in request")
            return RelayFailure(kind=FailureKind.MISSING_INPUT, message=MISSING_FILE_MESSAGE)

        filename = upload.filename or DEFAULT_FILENAME
        content_type = upload.content_type or DEFAULT_CONTENT_TYPE
        key = build_storage_key(filename, int(self.clock() * 1000))

        logger.info(
            "Upload received: filename=%s, size=%d bytes, type=%s",
            filename,
            len(upload.content),
            content_type,
        )

        try:
            await self.storage.put_object(key, upload.content, content_type)
        except StorageProviderError as e:
            logger.error("Upload failed: %s | Context: %s", e.message, e.context)
            return RelayFailure(
                kind=FailureKind.PROVIDER_FAILURE,
                message=UPLOAD_ERROR_MESSAGE,
                context=e.context,
            )
        except Exception as e:
            logger.error("Unexpected storage provider error: %s", str(e), exc_info=True)
            return RelayFailure(
                kind=FailureKind.PROVIDER_FAILURE,
                message=UPLOAD_ERROR_MESSAGE,
                context={"key": key, "error_type": type(e).__name__},
            )

        return UploadSuccess(key=key, file_url=self.storage.public_url(key))
