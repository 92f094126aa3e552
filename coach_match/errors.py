# exception types shared across the matching pipeline
from typing import Optional


class CoachMatchError(Exception):
    """Base class for errors raised by the coach matching pipeline."""


class MatchValidationError(CoachMatchError, ValueError):
    """Raised when a need statement is rejected before any matching work is done."""

    TOO_SHORT = "too_short"

    def __init__(self, reason: str, message: Optional[str] = None) -> None:
        self.reason = reason
        super().__init__(message or reason)


class GenerativeError(CoachMatchError):
    """Raised by the ranking client when the generative backend cannot produce a usable result.

    Kinds:
        unavailable: backend unreachable, timed out, rate limited or misconfigured.
        schema_violation: backend answered but the output did not fit the declared schema.
    """

    UNAVAILABLE = "unavailable"
    SCHEMA_VIOLATION = "schema_violation"

    def __init__(self, kind: str, message: str = "", cause: Optional[BaseException] = None) -> None:
        self.kind = kind
        self.cause = cause
        super().__init__(f"{kind}: {message}" if message else kind)


class RepositoryError(CoachMatchError):
    """Raised by a candidate repository when its catalog cannot be read."""
