from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from .data_models import Candidate
from .matching_models import LLMCoachRanking, LLMRankingResponse, RankedMatch


logger = logging.getLogger(__name__)

MAX_RESULTS = 5
MAX_RELEVANT_SPECIALTIES = 3


def _ground_specialties(claimed: Sequence[str], own: Optional[Sequence[str]]) -> List[str]:
    """Keep only claimed specialties the coach actually lists, in the coach's spelling."""
    if not isinstance(own, (list, tuple)):
        return []
    lookup: Dict[str, str] = {}
    for s in own:
        if s is None:
            continue
        lookup.setdefault(str(s).strip().lower(), str(s).strip())
    out: List[str] = []
    for c in claimed or []:
        real = lookup.get(str(c).strip().lower())
        if real and real not in out:
            out.append(real)
        if len(out) == MAX_RELEVANT_SPECIALTIES:
            break
    return out


def _clamp_score(score: int) -> int:
    return max(0, min(100, int(score)))


def reconcile(
    result: Optional[LLMRankingResponse],
    original_candidates: Sequence[Candidate],
) -> List[RankedMatch]:
    """Cross-check the model's ranking against the catalog snapshot it was given.

    Pseudocode:
    1. Empty/missing result or empty snapshot -> [].
    2. Drop entries whose candidate_id is not in the snapshot.
    3. Deduplicate by candidate_id, keeping the first occurrence.
    4. Truncate to MAX_RESULTS.
    5. Stable sort by descending match_score.
    6. Take names from the snapshot and keep only specialties the coach really lists.
    """
    if result is None or not original_candidates:
        return []
    entries: List[LLMCoachRanking] = list(getattr(result, "ranked_coaches", None) or [])
    if not entries:
        return []

    by_id: Dict[str, Candidate] = {}
    for c in original_candidates:
        by_id.setdefault(str(c.id), c)

    kept: List[LLMCoachRanking] = []
    seen: set[str] = set()
    for entry in entries:
        cid = str(entry.candidate_id)
        if cid not in by_id:
            logger.debug("Dropping ranked entry for unknown candidate id %r", cid)
            continue
        if cid in seen:
            continue
        seen.add(cid)
        kept.append(entry)

    kept = kept[:MAX_RESULTS]
    # sorted() is stable, so equal scores keep model order
    kept = sorted(kept, key=lambda e: _clamp_score(e.match_score), reverse=True)

    matches: List[RankedMatch] = []
    for entry in kept:
        candidate = by_id[str(entry.candidate_id)]
        matches.append(
            RankedMatch(
                candidate_id=str(candidate.id),
                candidate_name=candidate.name,
                match_score=_clamp_score(entry.match_score),
                relevant_specialties=_ground_specialties(entry.relevant_specialties, candidate.specialties),
            )
        )
    return matches
