from typing import Optional

from .data_models import MatchRequest
from .errors import MatchValidationError


MIN_NEED_LENGTH = 10


def validate(raw: Optional[str]) -> MatchRequest:
    """Validate a free-text need statement and wrap it in a MatchRequest.

    Only leading/trailing whitespace is removed; the content itself is accepted as-is.

    Raises:
        MatchValidationError: reason ``too_short`` when the stripped text has fewer than
            MIN_NEED_LENGTH characters (covers None, empty and whitespace-only input).
    """
    text = raw.strip() if isinstance(raw, str) else ""
    if len(text) < MIN_NEED_LENGTH:
        raise MatchValidationError(
            MatchValidationError.TOO_SHORT,
            f"Need statement must be at least {MIN_NEED_LENGTH} characters long.",
        )
    return MatchRequest(need_statement=text)
