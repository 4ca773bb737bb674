"""
Revision Relay — Application Configuration
===========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types and ranges, and exposes a singleton `settings` object.
Who:   Imported by the application factory, the CLI entry point and the
       dependency container.
When:  Loaded once at module import time; required values are checked at
       startup by `validate_required_for_production()`.

Credentials for the storage provider are NOT read here. Settings only say
where they live (`STORAGE_CREDENTIALS_JSON` or `STORAGE_CREDENTIALS_FILE`);
`services/credentials.py` resolves them.
"""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

from revision_relay.services.prompt_builder import FidelityMode


# Firebase download URL: the key is percent-encoded, including its slashes
DEFAULT_PUBLIC_URL_TEMPLATE = (
    "https://firebasestorage.googleapis.com/v0/b/{bucket}/o/{key}?alt=media"
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every value has a development default except GEMINI_API_KEY, without
    which the service refuses to start.
    """

    # ── Google Gemini ─────────────────────────────────────────────────────
    # Required. Obtain one at https://aistudio.google.com/app/apikey
    gemini_api_key: str = Field(
        default="",
        description="Google Gemini API key used for revision sheet generation",
    )

    gemini_model: str = Field(default="gemini-2.5-flash")

    # How closely the generated sheet must follow the student's notes
    summary_fidelity: FidelityMode = Field(default=FidelityMode.STRICT)

    # ── Object Storage ────────────────────────────────────────────────────
    # Falls back to the `bucket` entry of the credentials document when empty
    storage_bucket: str = Field(default="")

    # S3-compatible endpoint; Cloud Storage exposes one for HMAC keys
    storage_endpoint_url: str = Field(default="https://storage.googleapis.com")
    storage_region: str = Field(default="auto")

    # Placeholders: {bucket} and {key} (already percent-encoded)
    storage_public_url_template: str = Field(default=DEFAULT_PUBLIC_URL_TEMPLATE)

    # Embedded JSON credentials take precedence over the credential file
    storage_credentials_json: str = Field(default="")
    storage_credentials_file: str = Field(default="storage-credentials.json")

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(
        default=4000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("backend_port", "port"),
    )

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("storage_public_url_template")
    @classmethod
    def validate_public_url_template(cls, v: str) -> str:
        """The template must at least place the storage key."""
        if "{key}" not in v:
            raise ValueError("storage_public_url_template must contain a '{key}' placeholder")
        return v

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
        "populate_by_name": True,
    }

    def validate_required_for_production(self) -> None:
        """
        Checks the settings the service cannot run without.

        When:   Called by the CLI entry point and by the application lifespan.
        Raises: ValueError listing every missing value.
        """
        errors = []
        if not self.gemini_api_key or self.gemini_api_key == "your_gemini_api_key_here":
            errors.append(
                "GEMINI_API_KEY is not set. "
                "Get a key at https://aistudio.google.com/app/apikey"
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, immutable after startup
settings = Settings()
