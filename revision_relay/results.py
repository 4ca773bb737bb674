"""
Revision Relay — Relay Outcomes
================================

What:  Typed return values of the relay operations.
How:   Each relay returns either its success dataclass or a `RelayFailure`.
       Routes inspect the outcome and pick the HTTP status; nothing below the
       route layer knows about status codes.

    GenerationRelay.generate_summary() -> GenerationSuccess | RelayFailure
    UploadRelay.upload()               -> UploadSuccess     | RelayFailure
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Union


class FailureKind(str, Enum):
    """The two ways a relay can fail."""

    PROVIDER_FAILURE = "provider_failure"
    MISSING_INPUT = "missing_input"


@dataclass(frozen=True)
class RelayFailure:
    """
    A relay attempt that did not produce a result.

    `message` is the localized text returned to the caller. `context` is for
    server-side logs only.
    """

    kind: FailureKind
    message: str
    context: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class GenerationSuccess:
    summary: str


@dataclass(frozen=True)
class UploadSuccess:
    key: str
    file_url: str


GenerationOutcome = Union[GenerationSuccess, RelayFailure]
UploadOutcome = Union[UploadSuccess, RelayFailure]
