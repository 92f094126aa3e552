from __future__ import annotations

from typing import Any, List, Sequence

from .data_models import Candidate, CandidateSummary


BIO_SUMMARY_CHARS = 400
TRUNCATION_MARKER = "..."
NOT_SPECIFIED = "Not specified"


def summarize_bio(bio: Any) -> str:
    """Cut a bio down to BIO_SUMMARY_CHARS, appending a marker when shortened."""
    if bio is None:
        return ""
    text = bio if isinstance(bio, str) else str(bio)
    if len(text) > BIO_SUMMARY_CHARS:
        return text[:BIO_SUMMARY_CHARS] + TRUNCATION_MARKER
    return text


def join_tags(tags: Any) -> str:
    """Render a tag sequence as comma-separated text, or the placeholder when empty.

    Anything that is not a list/tuple (None, a bare string, a number) counts as empty.
    Tags are rendered as given; only None entries are skipped.
    """
    if not isinstance(tags, (list, tuple)):
        return NOT_SPECIFIED
    parts = [str(t) for t in tags if t is not None]
    return ", ".join(parts) or NOT_SPECIFIED


def summarize_candidate(candidate: Candidate) -> CandidateSummary:
    return CandidateSummary(
        id=str(candidate.id),
        name=str(candidate.name),
        bio_summary=summarize_bio(getattr(candidate, "bio", None)),
        specialties_text=join_tags(getattr(candidate, "specialties", None)),
        keywords_text=join_tags(getattr(candidate, "keywords", None)),
    )


def summarize(candidates: Sequence[Candidate]) -> List[CandidateSummary]:
    """Summarize every candidate, 1:1 and in input order."""
    return [summarize_candidate(c) for c in candidates or []]
