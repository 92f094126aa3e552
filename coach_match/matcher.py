"""
This is the entry point used to match a user with coaches.
It is responsible for:

- Validating the user's need statement (the only failure surfaced to callers)
- Fetching the current coach catalog from a candidate repository
- Summarizing each coach into a bounded, prompt-ready record
- Compiling one ranking prompt and sending it to the LLM
- Reconciling the LLM's answer against the catalog snapshot:
    - Dropping ids that are not in the catalog
    - Deduplicating, capping at 5 and sorting by score

Everything after validation degrades to an empty list: a missing catalog, an empty
catalog, an unavailable LLM or an unparseable answer all produce [] plus a log line.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from .config import MatchSettings
from .errors import GenerativeError, RepositoryError
from .ingest import CandidateRepository
from .matching_models import LLMRankingResponse, RankedMatch, SpecialtySuggestion
from .prompts import compile_prompt, compile_suggestion_prompt
from .ranker import GenerativeRankingClient
from .reconciler import reconcile
from .summarizer import summarize
from .validator import validate


logger = logging.getLogger(__name__)


class CoachMatcher:
    """Stateless matcher wiring a candidate repository to a ranking client.

    One instance can serve many requests; nothing is kept between calls.
    """

    def __init__(
        self,
        repository: CandidateRepository,
        ranking_client: Optional[GenerativeRankingClient] = None,
        settings: Optional[MatchSettings] = None,
    ) -> None:
        self.repository = repository
        self.settings = settings or MatchSettings()
        self.ranking_client = ranking_client or GenerativeRankingClient.from_settings(self.settings)

    def match(self, need_statement: str) -> List[RankedMatch]:
        """Return up to 5 coaches ranked for the need statement.

        Raises:
            MatchValidationError: if the need statement is too short. No catalog read
                or LLM call happens in that case.
        """
        request = validate(need_statement)

        try:
            candidates = list(self.repository.list_candidates())
        except RepositoryError as e:
            logger.warning("Coach catalog unavailable, returning no matches: %s", e)
            return []
        except Exception:
            logger.exception("Coach catalog fetch failed; returning no matches")
            return []

        if not candidates:
            logger.info("Coach catalog is empty; skipping LLM ranking")
            return []
        logger.debug("Ranking %d coaches", len(candidates))

        artifact = compile_prompt(request, summarize(candidates))
        try:
            result = self.ranking_client.rank(artifact)
        except GenerativeError as e:
            logger.warning("LLM ranking failed (%s), returning no matches: %s", e.kind, e)
            return []
        except Exception:
            logger.exception("LLM ranking raised unexpectedly; returning no matches")
            return []

        if not isinstance(result, LLMRankingResponse):
            logger.warning("LLM ranking returned %s instead of a ranking; returning no matches", type(result).__name__)
            return []

        matches = reconcile(result, candidates)
        logger.info("Matched %d of %d ranked coaches", len(matches), len(result.ranked_coaches))
        return matches

    def suggest_specialties(self, bio: str) -> SpecialtySuggestion:
        return suggest_specialties(bio, ranking_client=self.ranking_client)


def match_coaches(
    need_statement: str,
    repository: CandidateRepository,
    ranking_client: Optional[GenerativeRankingClient] = None,
    settings: Optional[MatchSettings] = None,
) -> List[RankedMatch]:
    """Rank the repository's coaches against a free-text need statement.

    Args:
        need_statement: What the user is looking for; at least 10 characters once stripped.
        repository: Source of the current coach catalog.
        ranking_client: Optional LLM client; built from settings when omitted.
        settings: Optional runtime settings; defaults are used when omitted.

    Returns:
        List[RankedMatch]: 0-5 entries, unique by candidate_id, best score first.
    """
    matcher = CoachMatcher(repository, ranking_client=ranking_client, settings=settings)
    return matcher.match(need_statement)


def _dedupe(items: List[str]) -> List[str]:
    out: List[str] = []
    seen: set[str] = set()
    for item in items:
        s = str(item).strip()
        if s and s.lower() not in seen:
            seen.add(s.lower())
            out.append(s)
    return out


def suggest_specialties(
    bio: str,
    ranking_client: Optional[GenerativeRankingClient] = None,
    settings: Optional[MatchSettings] = None,
) -> SpecialtySuggestion:
    """Suggest keywords and specialties for a coach profile from its bio.

    A blank bio or any LLM failure yields an empty suggestion.
    """
    if not bio or not bio.strip():
        return SpecialtySuggestion.empty()
    client = ranking_client or GenerativeRankingClient.from_settings(settings or MatchSettings())
    try:
        result = client.rank(compile_suggestion_prompt(bio.strip()))
    except GenerativeError as e:
        logger.warning("Specialty suggestion failed (%s): %s", e.kind, e)
        return SpecialtySuggestion.empty()
    except Exception:
        logger.exception("Specialty suggestion raised unexpectedly")
        return SpecialtySuggestion.empty()
    if not isinstance(result, SpecialtySuggestion):
        return SpecialtySuggestion.empty()
    return SpecialtySuggestion(
        keywords=_dedupe(result.keywords),
        specialties=_dedupe(result.specialties),
    )
