"""
Revision Relay — Pydantic Request/Response Schemas
===================================================

What:  Pydantic models defining the JSON contract with the frontend.
How:   FastAPI validates request bodies against these models, serializes
       responses by alias (camelCase on the wire), and generates the
       OpenAPI documentation from them.
Who:   Used by route handlers and by GenerationRelay.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SummaryRequest(BaseModel):
    """
    What:  Body of POST /api/generate-summary.
    Every field is optional; absent, null and empty values are replaced by
    fixed French defaults when the prompt is built.
    """

    model_config = ConfigDict(populate_by_name=True)

    raw_text: Optional[str] = Field(
        default=None,
        alias="rawText",
        description="The student's raw notes",
    )
    course_name: Optional[str] = Field(
        default=None,
        alias="courseName",
        description="Course title, used as the sheet's main heading",
    )
    course_description: Optional[str] = Field(
        default=None,
        alias="courseDescription",
        description="Free-text description of the course",
    )
    course_details: Optional[str] = Field(
        default=None,
        alias="courseDetails",
        description="The student's instructions on how to organise the sheet",
    )

    @field_validator(
        "raw_text", "course_name", "course_description", "course_details", mode="before"
    )
    @classmethod
    def scalars_as_text(cls, value):
        """Numbers and booleans are rendered as text; false and 0 count as absent."""
        if isinstance(value, bool):
            return "true" if value else None
        if isinstance(value, (int, float)):
            if not value:
                return None
            if isinstance(value, float) and value.is_integer():
                value = int(value)
            return str(value)
        return value


class SummaryResponse(BaseModel):
    """Returned by POST /api/generate-summary on success."""

    summary: str = Field(description="Revision sheet as an HTML fragment, verbatim from the model")


class UploadResponse(BaseModel):
    """Returned by POST /api/upload-pdf on success."""

    model_config = ConfigDict(populate_by_name=True)

    file_url: str = Field(
        alias="fileUrl",
        description="Public download URL of the stored file",
    )


class ErrorResponse(BaseModel):
    """
    What:  Error body for every failure of the relay endpoints.
    Only a generic localized message is exposed; details stay in server logs.

    Example:
        {"error": "Erreur lors de la génération de la fiche via l'IA."}
    """

    error: str = Field(description="Human-readable error message")


class HealthResponse(BaseModel):
    """Returned by GET /health."""

    status: str = Field(description="Overall service status: healthy or degraded")
    version: str = Field(description="Application version")
    generation: str = Field(description="Generation provider status: available, unavailable")
    storage_bucket: str = Field(description="Bucket receiving uploads")
    uptime_seconds: float = Field(description="Seconds since service started")
