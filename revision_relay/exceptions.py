"""
Revision Relay — Custom Exception Hierarchy
============================================

What:  Application-specific exceptions raised by provider adapters and by
       startup code.
How:   Each exception carries a user-safe message and an optional context
       dict. Context is logged server-side and never returned to the client.
Who:   Raised by services; caught by the relays (provider errors) or by the
       application lifespan and CLI entry point (configuration errors).

Exception Hierarchy:
    RevisionRelayError (base)
    ├── ConfigurationError        → fatal at startup, never reaches HTTP
    ├── GenerationProviderError   → relay failure, HTTP 500
    └── StorageProviderError      → relay failure, HTTP 500

Provider errors do not travel to the HTTP layer as exceptions: the relays
convert them into a `RelayFailure` outcome (see `results.py`) and the routes
map outcomes to status codes.
"""

from typing import Any, Dict, Optional


class RevisionRelayError(Exception):
    """
    Base exception for all Revision Relay errors.

    Attributes:
        message:  Error description, safe to show to an operator
        context:  Additional debug info (logged, NOT returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ConfigurationError(RevisionRelayError):
    """
    Raised when the process cannot be configured to serve requests.

    When:    Missing GEMINI_API_KEY, missing or malformed storage credentials,
             no storage bucket resolvable.
    Effect:  The lifespan re-raises it so uvicorn aborts startup; the CLI
             entry point exits with status 1.
    """

    def __init__(
        self,
        message: str = "Invalid configuration",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class GenerationProviderError(RevisionRelayError):
    """
    Raised when the text-generation provider call fails.

    When:    Network error, quota exhaustion, invalid key, blocked or empty
             response from Gemini.
    HTTP:    Surfaces as 500 with a fixed French message (no details).
    """

    def __init__(
        self,
        message: str = "Text generation provider call failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageProviderError(RevisionRelayError):
    """
    Raised when the object-storage provider rejects or fails a write.

    When:    Credentials refused, bucket missing, endpoint unreachable.
    HTTP:    Surfaces as 500 with a fixed French message (no details).
    """

    def __init__(
        self,
        message: str = "Object storage provider call failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
